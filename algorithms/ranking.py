"""
Donor Ranking Algorithm - order candidate donors by distance from a requester

Candidates without usable coordinates are dropped, the rest are sorted
nearest first and cut into 1-indexed pages.
"""

import math
from dataclasses import dataclass, field
from typing import Any, List, Optional

from algorithms.haversine import haversine_distance
from algorithms.location import parse_coordinates

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


@dataclass
class RankedPage:
    """One page of ranked results plus the numbers needed for pagination."""
    items: List[Any] = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def total_pages(self) -> int:
        return count_pages(self.total, self.limit)

    def metadata(self) -> dict:
        return page_metadata(self.total, self.page, self.limit)


def count_pages(total, limit):
    """Number of pages for total items; an empty result still has one page."""
    return max(1, math.ceil(total / limit))


def page_metadata(total, page, limit):
    return {
        'currentPage': page,
        'totalPages': count_pages(total, limit),
        'totalItems': total,
        'itemsPerPage': limit,
    }


def paginate(items, page=DEFAULT_PAGE, limit=DEFAULT_LIMIT):
    """
    Slice a list or queryset into a 1-indexed page.

    Args:
        items: list, tuple or anything with count() and slicing (QuerySet)
        page: 1-indexed page number
        limit: page size

    Returns:
        RankedPage
    """
    if isinstance(items, (list, tuple)):
        total = len(items)
    else:
        total = items.count()

    start = (page - 1) * limit
    return RankedPage(items=list(items[start:start + limit]), total=total, page=page, limit=limit)


def rank_by_distance(origin_lat: float, origin_lng: float, candidates,
                     page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT,
                     max_distance: Optional[float] = None) -> RankedPage:
    """
    Rank candidates by great-circle distance from the origin.

    Args:
        origin_lat, origin_lng: Requester coordinates
        candidates: Iterable of objects with latitude/longitude attributes
        page, limit: Pagination (1-indexed page)
        max_distance: Optional radius in km; farther candidates are dropped

    Returns:
        RankedPage whose items are (candidate, distance_km) tuples,
        nearest first
    """
    ranked = []

    for candidate in candidates:
        coordinates = parse_coordinates(
            getattr(candidate, 'latitude', None),
            getattr(candidate, 'longitude', None),
        )
        if coordinates is None:
            continue

        distance = haversine_distance(origin_lat, origin_lng, *coordinates)
        if max_distance is not None and distance > max_distance:
            continue
        ranked.append((candidate, distance))

    ranked.sort(key=lambda x: x[1])

    return paginate(ranked, page, limit)
