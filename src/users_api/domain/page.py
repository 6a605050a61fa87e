from __future__ import annotations

import math
from typing import Generic, List, TypeVar

from .base import IDomain

T = TypeVar("T")


class Page(IDomain, Generic[T]):
    """Read-only window over an ordered collection."""

    def __init__(self, items: List[T], current_page: int, page_size: int, total_count: int) -> None:
        self.items = list(items)
        self.current_page = current_page
        self.page_size = page_size
        self.total_count = total_count

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size) if self.page_size > 0 else 0

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages
