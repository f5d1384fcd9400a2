"""Tag filter parsing and matching.

Filter grammar (disjunctive normal form):

    smoke               - single tag
    smoke,login         - all tags must be present (AND)
    smoke|login         - any group may match (OR)
    smoke,login|critical - groups of AND-tags joined by OR
"""

from __future__ import annotations

from typing import Iterable, List, Optional

TagFilterExpression = List[List[str]]


def parse_tag_filter(filter_text: Optional[str]) -> Optional[TagFilterExpression]:
    """Parse a filter string into OR-groups of AND-tags.

    Args:
        filter_text: Raw filter such as "smoke,login|critical"

    Returns:
        List of AND-groups, or None when there is no filter
    """
    if not filter_text:
        return None

    return [
        [tag.strip() for tag in group.split(",")]
        for group in filter_text.split("|")
    ]


def matches_tag_filter(
    candidate_tags: Optional[Iterable[str]],
    filter_text: Optional[str],
) -> bool:
    """Check whether a tag list satisfies a filter string.

    A missing tag list (None) always passes. An empty tag list never
    satisfies a non-empty filter.

    Args:
        candidate_tags: Tags declared by a test case or suite
        filter_text: Raw filter string, None or "" for no filter

    Returns:
        True if at least one OR-group has all of its tags present
    """
    groups = parse_tag_filter(filter_text)
    if groups is None or candidate_tags is None:
        return True

    tags = set(candidate_tags)
    if not tags:
        return False

    return any(all(tag in tags for tag in group) for group in groups)
