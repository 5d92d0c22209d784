"""About Time - template composition and timeline layout.

Composes reusable templates of timed work into lanes and lays them out with:
- Proportional segment geometry for timeline rendering
- Empty-region (gap) analysis within a lane
- Cycle-safe nesting depth analysis over the template graph
- Search-as-you-type lane suggestions and per-viewer selection state
"""

__version__ = "0.1.0"
