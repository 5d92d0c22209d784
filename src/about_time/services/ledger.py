"""Time Ledger - ruler ticks for a lane timeline.

Rules:
- The interval is chosen so there are between 10 and 20 marks
- The smallest fitting interval wins
- Months are never used; weeks cover long spans
"""

from about_time.models import LedgerConfig, LedgerMark, TimeInterval
from about_time.utils.time_utils import (
    MS_PER_DAY,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    MS_PER_WEEK,
)

# Ascending by ms_value
AVAILABLE_INTERVALS = [
    TimeInterval(100, "ms", 100),
    TimeInterval(200, "ms", 200),
    TimeInterval(500, "ms", 500),
    TimeInterval(1, "s", MS_PER_SECOND),
    TimeInterval(2, "s", MS_PER_SECOND * 2),
    TimeInterval(5, "s", MS_PER_SECOND * 5),
    TimeInterval(10, "s", MS_PER_SECOND * 10),
    TimeInterval(15, "s", MS_PER_SECOND * 15),
    TimeInterval(30, "s", MS_PER_SECOND * 30),
    TimeInterval(1, "min", MS_PER_MINUTE),
    TimeInterval(2, "min", MS_PER_MINUTE * 2),
    TimeInterval(5, "min", MS_PER_MINUTE * 5),
    TimeInterval(10, "min", MS_PER_MINUTE * 10),
    TimeInterval(15, "min", MS_PER_MINUTE * 15),
    TimeInterval(30, "min", MS_PER_MINUTE * 30),
    TimeInterval(1, "h", MS_PER_HOUR),
    TimeInterval(2, "h", MS_PER_HOUR * 2),
    TimeInterval(3, "h", MS_PER_HOUR * 3),
    TimeInterval(4, "h", MS_PER_HOUR * 4),
    TimeInterval(6, "h", MS_PER_HOUR * 6),
    TimeInterval(12, "h", MS_PER_HOUR * 12),
    TimeInterval(1, "d", MS_PER_DAY),
    TimeInterval(2, "d", MS_PER_DAY * 2),
    TimeInterval(3, "d", MS_PER_DAY * 3),
    TimeInterval(7, "d", MS_PER_DAY * 7),
    TimeInterval(1, "w", MS_PER_WEEK),
    TimeInterval(2, "w", MS_PER_WEEK * 2),
    TimeInterval(4, "w", MS_PER_WEEK * 4),
    TimeInterval(8, "w", MS_PER_WEEK * 8),
    TimeInterval(13, "w", MS_PER_WEEK * 13),
    TimeInterval(26, "w", MS_PER_WEEK * 26),
    TimeInterval(52, "w", MS_PER_WEEK * 52),
]

MIN_MARKS = 10
MAX_MARKS = 20

_UNIT_MS = {
    "s": MS_PER_SECOND,
    "min": MS_PER_MINUTE,
    "h": MS_PER_HOUR,
    "d": MS_PER_DAY,
    "w": MS_PER_WEEK,
}

_UNIT_SUFFIX = {"s": "s", "min": "m", "h": "h", "d": "d", "w": "w"}


def format_time_label(ms: int, unit: str) -> str:
    """Label a tick offset in the interval's unit, e.g. ``"15m"``."""
    if unit not in _UNIT_MS:
        return f"{ms}ms"
    return f"{round(ms / _UNIT_MS[unit])}{_UNIT_SUFFIX[unit]}"


def select_interval(duration_ms: int) -> TimeInterval:
    """Pick the smallest interval in ``[duration/20, duration/10]``.

    When no interval falls in that range, the one nearest to it is used.
    """
    min_interval = duration_ms / MAX_MARKS
    max_interval = duration_ms / MIN_MARKS

    for interval in AVAILABLE_INTERVALS:
        if min_interval <= interval.ms_value <= max_interval:
            return interval

    def distance(interval: TimeInterval) -> float:
        if interval.ms_value < min_interval:
            return min_interval - interval.ms_value
        if interval.ms_value > max_interval:
            return interval.ms_value - max_interval
        return 0

    return min(AVAILABLE_INTERVALS, key=distance)


def calculate_ledger_config(duration_ms: int) -> LedgerConfig:
    """Choose a ruler interval for ``duration_ms`` and lay out its marks.

    Marks run from 0 to the duration inclusive. A zero duration yields a
    single mark at position 0.
    """
    interval = select_interval(duration_ms)

    if duration_ms <= 0:
        return LedgerConfig(
            interval=interval,
            marks=[LedgerMark(position=0.0, label=format_time_label(0, interval.unit), ms_offset=0)],
        )

    marks = []
    current_ms = 0
    while current_ms <= duration_ms:
        marks.append(LedgerMark(
            position=current_ms / duration_ms,
            label=format_time_label(current_ms, interval.unit),
            ms_offset=current_ms,
        ))
        current_ms += interval.ms_value

    return LedgerConfig(interval=interval, marks=marks)
