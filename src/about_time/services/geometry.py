"""Segment Geometry - proportional placement of segments on a lane.

Both functions return CSS-style percentages of the parent lane and are not
clamped: a segment starting past the parent's end yields more than 100, and
flagging that is left to the renderer.
"""


def calculate_segment_position(offset: int, parent_duration: int) -> float:
    """Left edge of a segment as a percentage of its parent's duration.

    Args:
        offset: Milliseconds from the start of the parent
        parent_duration: Total duration of the parent in milliseconds

    Returns:
        Percentage, or 0 for a zero-length parent
    """
    if parent_duration == 0:
        return 0
    return (offset / parent_duration) * 100


def calculate_segment_width(duration: int, parent_duration: int) -> float:
    """Width of a segment as a percentage of its parent's duration.

    Args:
        duration: Duration of the segment's template in milliseconds
        parent_duration: Total duration of the parent in milliseconds

    Returns:
        Percentage, or 0 for a zero-length parent
    """
    if parent_duration == 0:
        return 0
    return (duration / parent_duration) * 100
