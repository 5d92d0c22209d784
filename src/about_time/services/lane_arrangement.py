"""Lane Arrangement - rewrites segment offsets and lane durations.

Responsible for:
- Packing segments back to back from offset 0
- Spreading segments across the lane or at a fixed interval
- Shifting later segments to open a gap
- Resizing a lane to end where its segments end

Every operation returns a new LaneTemplate; the input lane and the store
are left untouched. Segments are processed, and returned, in offset order.
A segment whose template cannot be resolved is treated as zero-length.
"""

import logging
from collections.abc import Mapping

from about_time.models import LaneTemplate, Segment

logger = logging.getLogger(__name__)


def _segment_duration(segment: Segment, store: Mapping) -> int:
    template = store.get(segment.template_id)
    if template is None:
        logger.debug("Treating dangling segment %s as zero-length", segment.template_id)
        return 0
    return template.estimated_duration


def _with_offsets(lane: LaneTemplate, segments: list[Segment], offsets: list[int]) -> LaneTemplate:
    moved = tuple(
        segment.model_copy(update={"offset": offset})
        for segment, offset in zip(segments, offsets)
    )
    return lane.model_copy(update={"segments": moved})


def distribute_segments_by_interval(lane: LaneTemplate, interval: int, store: Mapping) -> LaneTemplate:
    """Place segments back to back from 0 with ``interval`` ms between them.

    Raises:
        ValueError: If ``interval`` is negative
    """
    if interval < 0:
        raise ValueError(f"Interval must be non-negative: {interval}")

    segments = lane.sorted_segments()
    offsets = []
    cursor = 0
    for segment in segments:
        offsets.append(cursor)
        cursor += _segment_duration(segment, store) + interval
    return _with_offsets(lane, segments, offsets)


def pack_segments(lane: LaneTemplate, store: Mapping) -> LaneTemplate:
    """Remove every gap, packing segments from offset 0.

    The lane's duration is not changed.
    """
    return distribute_segments_by_interval(lane, 0, store)


def equally_distribute_segments(lane: LaneTemplate, store: Mapping) -> LaneTemplate:
    """Spread segments so the first starts at 0 and the last ends at the lane's end.

    Free time is split evenly between neighbours. When the segments do not
    fit in the lane they are packed instead.
    """
    segments = lane.sorted_segments()
    if len(segments) < 2:
        return _with_offsets(lane, segments, [0] * len(segments))

    durations = [_segment_duration(s, store) for s in segments]
    free = max(0, lane.estimated_duration - sum(durations))
    spaces = len(segments) - 1

    offsets = []
    occupied = 0
    for index, duration in enumerate(durations):
        offsets.append(occupied + index * free // spaces)
        occupied += duration
    return _with_offsets(lane, segments, offsets)


def insert_gap(lane: LaneTemplate, before_index: int, gap_duration: int, store: Mapping) -> LaneTemplate:
    """Shift the segment at ``before_index`` and every later one by ``gap_duration``.

    Args:
        lane: The lane to edit
        before_index: Position of the first segment to move, in offset order
        gap_duration: Milliseconds of empty space to open
        store: Template id -> template

    Raises:
        IndexError: If ``before_index`` is not a segment position
        ValueError: If ``gap_duration`` is negative
    """
    segments = lane.sorted_segments()
    if not 0 <= before_index < len(segments):
        raise IndexError(f"Segment index {before_index} out of range for lane {lane.id}")
    if gap_duration < 0:
        raise ValueError(f"Gap duration must be non-negative: {gap_duration}")

    offsets = [
        s.offset + gap_duration if index >= before_index else s.offset
        for index, s in enumerate(segments)
    ]
    return _with_offsets(lane, segments, offsets)


def fit_lane_duration_to_last(lane: LaneTemplate, store: Mapping) -> LaneTemplate:
    """Resize the lane to end where its latest-ending segment ends.

    A lane with no resolvable segments is returned unchanged.
    """
    ends = [
        s.offset + store[s.template_id].estimated_duration
        for s in lane.segments
        if s.template_id in store
    ]
    if not ends:
        return lane
    return lane.model_copy(update={"estimated_duration": max(ends)})
