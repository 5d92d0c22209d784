"""Gap Analyzer - finds the empty regions of a lane.

Responsible for:
- Resolving each segment to the interval it occupies
- Skipping segments whose template cannot be resolved
- Reporting the uncovered spans between 0 and the lane's duration
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Optional, Union

from about_time.models import EmptyRegion, Segment

logger = logging.getLogger(__name__)

DurationLookup = Union[Callable[[str], Optional[int]], Mapping[str, int]]


def _as_lookup(durations: DurationLookup) -> Callable[[str], Optional[int]]:
    if isinstance(durations, Mapping):
        return durations.get
    return durations


def occupied_intervals(
    segments: Iterable[Segment],
    durations: DurationLookup,
) -> list[tuple[int, int]]:
    """Resolve segments to ``(start, end)`` intervals sorted by start.

    Segments referencing an unknown template are dropped. The sort is stable,
    so intervals with equal starts keep their storage order.
    """
    lookup = _as_lookup(durations)
    intervals = []
    for segment in segments:
        duration = lookup(segment.template_id)
        if duration is None:
            logger.debug("Skipping dangling segment reference %s", segment.template_id)
            continue
        intervals.append((segment.offset, segment.offset + duration))
    intervals.sort(key=lambda interval: interval[0])
    return intervals


def compute_empty_regions(
    segments: Iterable[Segment],
    parent_duration: int,
    durations: DurationLookup,
) -> list[EmptyRegion]:
    """Compute the gaps of a lane not covered by any segment.

    Only consecutive intervals (after sorting by start) are compared, so a
    long segment followed by two shorter ones can still report a gap that
    the long one covers. Overlapping intervals are not merged.

    Args:
        segments: The lane's segments, in any order
        parent_duration: The lane's duration in milliseconds
        durations: Template id -> duration, as a mapping or a lookup callable
            returning None for unknown ids

    Returns:
        Empty regions ordered by start
    """
    intervals = occupied_intervals(segments, durations)
    if not intervals:
        return [EmptyRegion(start=0, end=parent_duration)]

    regions: list[EmptyRegion] = []

    first_start = intervals[0][0]
    if first_start > 0:
        regions.append(EmptyRegion(start=0, end=first_start))

    for (_, current_end), (next_start, _) in zip(intervals, intervals[1:]):
        if next_start > current_end:
            regions.append(EmptyRegion(start=current_end, end=next_start))

    last_end = intervals[-1][1]
    if last_end < parent_duration:
        regions.append(EmptyRegion(start=last_end, end=parent_duration))

    return regions
