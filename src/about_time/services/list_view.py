"""List View - flattens a lane into a sequence of atomic items and gaps.

Nested lanes are expanded recursively so every atomic template ends up at
its absolute offset from the root lane, tagged with the chain of lanes it
came from. A lane already on the current path is not expanded again.
"""

from collections.abc import Mapping
from typing import Optional

from about_time.models import (
    AtomicListItem,
    AtomicTemplate,
    GapListItem,
    LaneTemplate,
    LineageItem,
    ListItem,
)
from about_time.utils.lineage import generate_lineage_key


def collect_atomic_templates(
    lane: LaneTemplate,
    store: Mapping,
    parent_lineage: list[LineageItem],
    parent_absolute_offset: int,
    lane_offset: Optional[int] = None,
    ancestors: Optional[set[str]] = None,
) -> list[AtomicListItem]:
    """Recursively gather the atomic templates below ``lane``.

    Args:
        lane: Lane to expand
        store: Template id -> template
        parent_lineage: Lineage of the lane's parent
        parent_absolute_offset: Absolute offset of ``lane`` itself
        lane_offset: Offset recorded for ``lane`` in the lineage
        ancestors: Lane ids on the current path

    Returns:
        Atomic items in discovery order
    """
    if ancestors is None:
        ancestors = set()

    current_lineage = [
        *parent_lineage,
        LineageItem(intent=lane.intent, template_id=lane.id, offset=lane_offset),
    ]
    ancestors.add(lane.id)

    result: list[AtomicListItem] = []
    for segment in lane.segments:
        template = store.get(segment.template_id)
        if template is None:
            continue

        absolute_offset = parent_absolute_offset + segment.offset

        if isinstance(template, AtomicTemplate):
            result.append(AtomicListItem(
                template=template,
                lineage=current_lineage,
                absolute_offset=absolute_offset,
            ))
        elif isinstance(template, LaneTemplate) and template.id not in ancestors:
            result.extend(collect_atomic_templates(
                template,
                store,
                current_lineage,
                absolute_offset,
                lane_offset=absolute_offset,
                ancestors=ancestors,
            ))

    ancestors.discard(lane.id)
    return result


def flatten_lane_to_list_items(lane: LaneTemplate, store: Mapping) -> list[ListItem]:
    """Flatten ``lane`` into atomic items with gaps between them.

    Items are sorted by absolute offset. A gap is inserted wherever an item
    starts after the previous item ended, and a trailing gap runs to the end
    of the lane.
    """
    atomic_items = collect_atomic_templates(lane, store, [], 0)
    atomic_items.sort(key=lambda item: item.absolute_offset)

    items: list[ListItem] = []
    current_time = 0

    for item in atomic_items:
        gap_duration = item.absolute_offset - current_time
        if gap_duration > 0:
            items.append(GapListItem(duration=gap_duration, absolute_offset=current_time))

        items.append(item)
        current_time = item.absolute_offset + item.duration

    trailing_gap = lane.estimated_duration - current_time
    if trailing_gap > 0:
        items.append(GapListItem(duration=trailing_gap, absolute_offset=current_time))

    return items


def list_item_key(item: ListItem) -> str:
    """Unique key for a flattened item, based on its lineage and offset."""
    if isinstance(item, GapListItem):
        return f"gap[{item.absolute_offset}]"
    return generate_lineage_key([
        *item.lineage,
        LineageItem(
            intent=item.template.intent,
            template_id=item.template.id,
            offset=item.absolute_offset,
        ),
    ])
