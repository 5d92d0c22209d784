"""Time-related utility functions."""

MS_PER_SECOND = 1000
MS_PER_MINUTE = MS_PER_SECOND * 60
MS_PER_HOUR = MS_PER_MINUTE * 60
MS_PER_DAY = MS_PER_HOUR * 24
MS_PER_WEEK = MS_PER_DAY * 7


def format_duration(ms: int) -> str:
    """Format a duration compactly, truncating to whole units.

    Args:
        ms: Duration in milliseconds

    Returns:
        Formatted string like "45sec", "2min" or "1h 30min"
    """
    seconds = ms // MS_PER_SECOND
    minutes = seconds // 60
    hours = minutes // 60

    if hours > 0:
        remaining_minutes = minutes % 60
        if remaining_minutes > 0:
            return f"{hours}h {remaining_minutes}min"
        return f"{hours}h"

    if minutes > 0:
        return f"{minutes}min"

    return f"{seconds}sec"


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def format_duration_human(ms: int) -> str:
    """Format a duration in the largest sensible units.

    Args:
        ms: Duration in milliseconds

    Returns:
        Formatted string like "500ms", "45s", "2h 15m" or "1w 2d"
    """
    if ms < MS_PER_SECOND:
        return f"{ms}ms"
    if ms < MS_PER_MINUTE:
        return f"{_round_half_up(ms / MS_PER_SECOND)}s"
    if ms < MS_PER_HOUR:
        return f"{_round_half_up(ms / MS_PER_MINUTE)}m"
    if ms < MS_PER_DAY:
        hours = ms // MS_PER_HOUR
        minutes = _round_half_up((ms % MS_PER_HOUR) / MS_PER_MINUTE)
        return f"{hours}h {minutes}m" if minutes > 0 else f"{hours}h"
    if ms < MS_PER_WEEK:
        days = ms // MS_PER_DAY
        hours = _round_half_up((ms % MS_PER_DAY) / MS_PER_HOUR)
        return f"{days}d {hours}h" if hours > 0 else f"{days}d"
    weeks = ms // MS_PER_WEEK
    days = _round_half_up((ms % MS_PER_WEEK) / MS_PER_DAY)
    return f"{weeks}w {days}d" if days > 0 else f"{weeks}w"
