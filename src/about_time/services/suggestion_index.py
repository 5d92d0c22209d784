"""Suggestion Index - search-as-you-type over lane intents."""

from collections.abc import Sequence

from about_time.models import LaneTemplate


def suggest(query: str, lane_templates: Sequence[LaneTemplate]) -> list[LaneTemplate]:
    """Filter lanes whose intent contains ``query``, ignoring case.

    A blank query returns every lane. Matches keep their original order;
    there is no ranking.

    Args:
        query: Free text typed by the user
        lane_templates: Candidate lanes

    Returns:
        Matching lanes in input order
    """
    if not query.strip():
        return list(lane_templates)

    lower_query = query.lower()
    return [lane for lane in lane_templates if lower_query in lane.intent.lower()]
