"""Layout entities - computed results for rendering a lane timeline."""

from dataclasses import dataclass, field
from typing import Literal, Optional, Union

from about_time.models.template import AtomicTemplate, LaneTemplate


@dataclass(frozen=True)
class EmptyRegion:
    """A half-open span ``[start, end)`` of a lane not covered by any segment."""

    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start


@dataclass
class VisibleSegment:
    """A segment large enough to be drawn at the lane's scale."""

    template: Union[AtomicTemplate, LaneTemplate]
    offset: int
    duration: int
    left_percent: float = 0.0
    width_percent: float = 0.0
    nested_depth: int = 0

    @property
    def template_id(self) -> str:
        return self.template.id


@dataclass
class HiddenChildrenSlot:
    """Segments too small to draw, grouped by the time slot they start in."""

    slot_index: int
    templates: list[Union[AtomicTemplate, LaneTemplate]] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.templates)


TimeUnit = Literal["ms", "s", "min", "h", "d", "w"]


@dataclass(frozen=True)
class TimeInterval:
    """A "nice" ruler step such as 5 min or 2 h."""

    value: int
    unit: TimeUnit
    ms_value: int


@dataclass(frozen=True)
class LedgerMark:
    """A ruler tick; ``position`` is the 0-1 fraction of the lane duration."""

    position: float
    label: str
    ms_offset: int


@dataclass
class LedgerConfig:
    interval: TimeInterval
    marks: list[LedgerMark]


@dataclass
class LaneLayout:
    """Everything a viewer needs to draw one lane."""

    lane: LaneTemplate
    nested_depth: int
    visible_segments: list[VisibleSegment]
    hidden_slots: list[HiddenChildrenSlot]
    empty_regions: list[EmptyRegion]
    ledger: LedgerConfig

    @property
    def duration(self) -> int:
        return self.lane.estimated_duration


@dataclass(frozen=True)
class LineageItem:
    """One ancestor lane on the path to a flattened list item."""

    intent: str
    template_id: str
    offset: Optional[int] = None


@dataclass
class AtomicListItem:
    """An atomic template placed on the flattened lane timeline."""

    template: AtomicTemplate
    lineage: list[LineageItem]
    absolute_offset: int
    type: Literal["atomic"] = "atomic"

    @property
    def duration(self) -> int:
        return self.template.estimated_duration


@dataclass
class GapListItem:
    """Waiting time between consecutive atomic items."""

    duration: int
    absolute_offset: int
    type: Literal["gap"] = "gap"


ListItem = Union[AtomicListItem, GapListItem]
