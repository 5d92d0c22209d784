"""Lane View - composes geometry, gaps, depth and ledger into one layout.

Responsible for:
- Splitting a lane's direct children into drawable and too-small-to-draw
- Grouping the small ones into time slots for "+N hidden" indicators
- Building the LaneLayout every viewer renders from
- Deciding whether a selected child lane can be drilled into
"""

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Optional

from about_time.models import (
    HiddenChildrenSlot,
    LaneLayout,
    LaneTemplate,
    Segment,
    VisibleSegment,
)
from about_time.services.depth_analyzer import nested_depth
from about_time.services.gap_analyzer import compute_empty_regions
from about_time.services.geometry import (
    calculate_segment_position,
    calculate_segment_width,
)
from about_time.services.ledger import calculate_ledger_config

logger = logging.getLogger(__name__)

# Children shorter than 1/20th of the parent are not drawn
MIN_VISIBILITY_RATIO = 1 / 20

# Hidden children are grouped into this many equal slots of the parent
TIME_SLOTS = 20


def compute_segment_visibility(
    segments: Iterable[Segment],
    parent_duration: int,
    store: Mapping,
) -> tuple[list[VisibleSegment], list[HiddenChildrenSlot]]:
    """Split direct children into visible segments and hidden slots.

    Segments whose template is missing are skipped. Visible segments keep
    storage order; hidden slots are ordered by slot index.

    Args:
        segments: The lane's segments
        parent_duration: The lane's duration in milliseconds
        store: Template id -> template

    Returns:
        Tuple of (visible segments, hidden slots)
    """
    visible: list[VisibleSegment] = []
    hidden_by_slot: dict[int, HiddenChildrenSlot] = {}

    min_duration = parent_duration * MIN_VISIBILITY_RATIO
    slot_duration = parent_duration / TIME_SLOTS

    for segment in segments:
        template = store.get(segment.template_id)
        if template is None:
            continue

        duration = template.estimated_duration
        if duration >= min_duration:
            visible.append(VisibleSegment(
                template=template,
                offset=segment.offset,
                duration=duration,
            ))
            continue

        slot_index = min(math.floor(segment.offset / slot_duration), TIME_SLOTS - 1)
        slot = hidden_by_slot.setdefault(slot_index, HiddenChildrenSlot(slot_index=slot_index))
        slot.templates.append(template)

    hidden_slots = sorted(hidden_by_slot.values(), key=lambda s: s.slot_index)
    return visible, hidden_slots


def build_lane_layout(lane: LaneTemplate, store: Mapping) -> LaneLayout:
    """Compute the full layout of ``lane`` against ``store``.

    Args:
        lane: The lane to lay out
        store: Template id -> template; read only, never modified

    Returns:
        LaneLayout with positioned segments, hidden slots, gaps and ruler
    """
    parent_duration = lane.estimated_duration

    visible, hidden_slots = compute_segment_visibility(lane.segments, parent_duration, store)
    for segment in visible:
        segment.left_percent = calculate_segment_position(segment.offset, parent_duration)
        segment.width_percent = calculate_segment_width(segment.duration, parent_duration)
        segment.nested_depth = nested_depth(segment.template_id, store)
        if segment.left_percent > 100:
            logger.debug(
                "Segment %s starts after the end of lane %s", segment.template_id, lane.id
            )

    durations = {tid: t.estimated_duration for tid, t in store.items()}
    empty_regions = compute_empty_regions(lane.segments, parent_duration, durations)

    return LaneLayout(
        lane=lane,
        nested_depth=nested_depth(lane.id, store),
        visible_segments=visible,
        hidden_slots=hidden_slots,
        empty_regions=empty_regions,
        ledger=calculate_ledger_config(parent_duration),
    )


def select_child_lane(
    selected_id: Optional[str],
    lane: LaneTemplate,
    store: Mapping,
) -> Optional[LaneTemplate]:
    """The lane to drill into when ``selected_id`` is clicked inside ``lane``.

    Only existing lanes strictly shorter than the parent qualify, which
    also stops a lane from drilling into itself.
    """
    if not selected_id:
        return None

    template = store.get(selected_id)
    if not isinstance(template, LaneTemplate):
        return None

    if template.estimated_duration >= lane.estimated_duration:
        return None

    return template
