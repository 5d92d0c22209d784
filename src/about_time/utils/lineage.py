"""Lineage keys - stable identifiers for template instances in a hierarchy.

The same template can appear several times inside one lane, so an instance
is identified by its path: ``A→B[120000]→C[60000]``.
"""

from collections.abc import Iterable

from about_time.models import LineageItem

LINEAGE_SEPARATOR = "→"


def generate_lineage_key(lineage: Iterable[LineageItem]) -> str:
    """Join a lineage into a key; items with an offset get ``id[offset]``."""
    parts = []
    for item in lineage:
        if item.offset is None:
            parts.append(item.template_id)
        else:
            parts.append(f"{item.template_id}[{item.offset}]")
    return LINEAGE_SEPARATOR.join(parts)


def get_last_template_id_from_key(key: str) -> str:
    """Extract the last template id from a lineage key, dropping any offset."""
    last_part = key.split(LINEAGE_SEPARATOR)[-1]
    return last_part.split("[")[0]
