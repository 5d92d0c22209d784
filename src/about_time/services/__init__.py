"""Services for About Time.

Components:
- geometry: Segment position and width as percentages of the parent
- gap_analyzer: Empty regions of a lane
- depth_analyzer: Cycle-safe nesting depth and circular-dependency checks
- suggestion_index: Intent search over lane templates
- SelectionState: Per-viewer query/suggestion/selection state machine
- lane_view: Full lane layout shared by every viewer
- lane_arrangement: Packing, spreading and resizing a lane's segments
- list_view: Lane flattened to atomic items and gaps
- ledger: Ruler intervals and marks
- TemplateStorage: JSON persistence of the template library
- TimelineVisualizer: HTML rendering of a lane layout
"""

from about_time.services.geometry import (
    calculate_segment_position,
    calculate_segment_width,
)
from about_time.services.gap_analyzer import compute_empty_regions
from about_time.services.depth_analyzer import (
    nested_depth,
    would_create_circular_dependency,
)
from about_time.services.suggestion_index import suggest
from about_time.services.selection import SelectionState
from about_time.services.lane_view import (
    build_lane_layout,
    compute_segment_visibility,
    select_child_lane,
)
from about_time.services.lane_arrangement import (
    distribute_segments_by_interval,
    equally_distribute_segments,
    fit_lane_duration_to_last,
    insert_gap,
    pack_segments,
)
from about_time.services.list_view import flatten_lane_to_list_items
from about_time.services.ledger import calculate_ledger_config
from about_time.services.template_storage import TemplateStorage
from about_time.services.timeline_visualizer import TimelineVisualizer

__all__ = [
    "calculate_segment_position",
    "calculate_segment_width",
    "compute_empty_regions",
    "nested_depth",
    "would_create_circular_dependency",
    "suggest",
    "SelectionState",
    "build_lane_layout",
    "compute_segment_visibility",
    "select_child_lane",
    "pack_segments",
    "equally_distribute_segments",
    "distribute_segments_by_interval",
    "insert_gap",
    "fit_lane_duration_to_last",
    "flatten_lane_to_list_items",
    "calculate_ledger_config",
    "TemplateStorage",
    "TimelineVisualizer",
]
