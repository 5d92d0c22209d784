"""Utility functions for About Time."""

from about_time.utils.time_utils import (
    format_duration,
    format_duration_human,
)
from about_time.utils.lineage import (
    generate_lineage_key,
    get_last_template_id_from_key,
)

__all__ = [
    "format_duration",
    "format_duration_human",
    "generate_lineage_key",
    "get_last_template_id_from_key",
]
