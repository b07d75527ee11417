"""Fixed-size pagination over filtered results."""
from __future__ import annotations

import math
from typing import List, Sequence

from pydantic import BaseModel, ConfigDict, Field

from models.regulation import Regulation

DEFAULT_PAGE_SIZE = 50


class Page(BaseModel):
    """One page of results plus the numbers the pager needs."""
    model_config = ConfigDict(frozen=True)

    items: List[Regulation] = Field(default_factory=list)
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_items: int = 0
    total_pages: int = 0

    @property
    def first_index(self) -> int:
        """1-based position of the first item, 0 for an empty page."""
        if not self.items:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def last_index(self) -> int:
        return min(self.page * self.page_size, self.total_items)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def summary(self) -> str:
        noun = "regulation" if self.total_items == 1 else "regulations"
        return f"Showing {self.first_index} - {self.last_index} of {self.total_items} {noun}"


def paginate(
    records: Sequence[Regulation],
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Page:
    """Slice records into the requested page, clamping out-of-range page numbers."""
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")

    total_items = len(records)
    total_pages = math.ceil(total_items / page_size)
    current = min(max(1, page), max(total_pages, 1))

    start = (current - 1) * page_size
    return Page(
        items=list(records[start:start + page_size]),
        page=current,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
    )
