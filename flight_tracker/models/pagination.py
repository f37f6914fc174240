"""Page slicing for flight lists."""

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple, TypeVar

T = TypeVar('T')


@dataclass(frozen=True)
class Pagination:
    """Pagination metadata, recomputed per request."""
    current_page: int
    total_pages: int
    total_items: int
    page_size: int

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.current_page > 1

    def to_dict(self) -> dict:
        return {
            'currentPage': self.current_page,
            'totalPages': self.total_pages,
            'totalFlights': self.total_items,
            'flightsPerPage': self.page_size,
            'hasNextPage': self.has_next_page,
            'hasPrevPage': self.has_prev_page,
        }


def paginate(items: Sequence[T], page: int, limit: int) -> Tuple[List[T], Pagination]:
    """
    Slice one page out of items.

    Pages are 1-based. Pages past the end yield an empty slice.
    """
    start = (page - 1) * limit
    page_items = list(items[start:start + limit])

    pagination = Pagination(
        current_page=page,
        total_pages=math.ceil(len(items) / limit),
        total_items=len(items),
        page_size=limit,
    )
    return page_items, pagination
