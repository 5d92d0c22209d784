"""Depth Analyzer - structural metrics over the template reference graph.

The graph formed by lanes and the templates their segments reference may
contain cycles. Every traversal here carries its own visited set, created
per top-level call, and stops at ids it has already seen.
"""

from collections.abc import Mapping
from typing import Optional

from about_time.models import LaneTemplate


def nested_depth(
    template_id: str,
    store: Mapping,
    visited: Optional[set[str]] = None,
) -> int:
    """Maximum nesting depth of lanes below and including ``template_id``.

    Unknown ids, atomic templates and empty lanes have depth 0. A lane is
    one deeper than its deepest child, so a lane whose children are all
    unresolvable has depth 1. Ids already visited during this call count
    as 0, which bounds the recursion by the number of distinct ids.

    Args:
        template_id: The template to measure
        store: Template id -> template
        visited: Ids seen so far in this call; leave unset at the top level

    Returns:
        Depth, always >= 0
    """
    if visited is None:
        visited = set()

    if template_id in visited:
        return 0

    template = store.get(template_id)
    if not isinstance(template, LaneTemplate) or not template.segments:
        return 0

    visited.add(template_id)

    max_depth = 0
    for segment in template.segments:
        max_depth = max(max_depth, nested_depth(segment.template_id, store, visited))

    return max_depth + 1


def would_create_circular_dependency(
    parent_id: str,
    candidate_id: str,
    store: Mapping,
) -> bool:
    """Check whether adding ``candidate_id`` as a segment of ``parent_id`` makes a cycle.

    Example: if A contains B, adding A to B would create A -> B -> A.
    """
    if parent_id == candidate_id:
        return True
    return contains_template(candidate_id, parent_id, store)


def contains_template(
    search_in_id: str,
    search_for_id: str,
    store: Mapping,
    visited: Optional[set[str]] = None,
) -> bool:
    """Whether ``search_for_id`` appears anywhere below ``search_in_id``."""
    if visited is None:
        visited = set()

    if search_in_id in visited:
        return False
    visited.add(search_in_id)

    template = store.get(search_in_id)
    if not isinstance(template, LaneTemplate):
        return False

    for segment in template.segments:
        if segment.template_id == search_for_id:
            return True
        if contains_template(segment.template_id, search_for_id, store, visited):
            return True

    return False
