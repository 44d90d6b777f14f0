"""Route name matching using fuzzy comparison."""

import re
from typing import List, Tuple

from fuzzywuzzy import fuzz


# Thresholds for fuzzy matching
EXACT_MATCH_THRESHOLD = 100
MEDIUM_SIMILARITY_THRESHOLD = 80


def normalize_route_name(name: str) -> str:
    """
    Normalize a route name for comparison.

    Lowercases, collapses whitespace and drops punctuation other than
    hyphens, so "Dallas - Houston" and "dallas-houston " compare close.
    """
    name = name.lower().strip()
    name = re.sub(r'\s+', ' ', name)
    name = re.sub(r'[^\w\s-]', '', name)
    return name


def find_similar_routes(
    *,
    name: str,
    routes,
    threshold: int = MEDIUM_SIMILARITY_THRESHOLD
) -> List[Tuple[object, int, str]]:
    """
    Find routes whose names look like ``name``.

    Route names are not enforced unique, so this is a warning aid for
    callers about to create a near-duplicate.

    Args:
        name: Route name to check
        routes: Route records to compare against
        threshold: Minimum similarity score (0-100)

    Returns:
        List of (route, similarity_score, match_type) tuples, best first.
        match_type: 'exact' or 'fuzzy'
    """
    name_norm = normalize_route_name(name)
    if not name_norm:
        return []

    exact = [
        (route, EXACT_MATCH_THRESHOLD, 'exact')
        for route in routes
        if normalize_route_name(route.name) == name_norm
    ]
    if exact:
        return exact

    candidates = []
    for route in routes:
        similarity = fuzz.token_sort_ratio(name_norm, normalize_route_name(route.name))
        if similarity >= threshold:
            candidates.append((route, similarity, 'fuzzy'))

    candidates.sort(key=lambda item: item[1], reverse=True)
    return candidates
