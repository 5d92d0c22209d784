"""Data models for About Time.

Templates and libraries use Pydantic for validation and serialization;
computed layout results are plain dataclasses.
Template types:
- atomic: fixed duration, no children (legacy name "busy")
- lane: duration plus timed segments referencing other templates
"""

from about_time.models.base import TimeModel
from about_time.models.template import (
    AtomicTemplate,
    LaneTemplate,
    Segment,
    Template,
    TemplateLibrary,
    parse_template,
)
from about_time.models.store import TemplateStore
from about_time.models.layout import (
    AtomicListItem,
    EmptyRegion,
    GapListItem,
    HiddenChildrenSlot,
    LaneLayout,
    LedgerConfig,
    LedgerMark,
    LineageItem,
    ListItem,
    TimeInterval,
    VisibleSegment,
)

__all__ = [
    # Base
    "TimeModel",
    # Templates
    "AtomicTemplate",
    "LaneTemplate",
    "Segment",
    "Template",
    "TemplateLibrary",
    "parse_template",
    # Store
    "TemplateStore",
    # Layout
    "EmptyRegion",
    "VisibleSegment",
    "HiddenChildrenSlot",
    "LaneLayout",
    "TimeInterval",
    "LedgerMark",
    "LedgerConfig",
    # List view
    "LineageItem",
    "AtomicListItem",
    "GapListItem",
    "ListItem",
]
