from __future__ import annotations

from typing import Callable, Optional, Tuple

from users_api.domain.page import Page
from users_api.entrypoints.schemas.user import PaginationMetadata


def parse_page_value(raw: Optional[str]) -> Optional[int]:
    """Integer value of a paging query parameter, ``None`` when absent or unparseable."""
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def normalize_page_request(
    page_number: Optional[int],
    page_size: Optional[int],
    *,
    default_size: int,
    max_size: int,
) -> Tuple[int, int]:
    number = 1 if page_number is None else max(page_number, 1)
    size = default_size if page_size is None else page_size
    return number, min(max(size, 1), max_size)


def build_metadata(page: Page, link_for_page: Callable[[int], str]) -> PaginationMetadata:
    previous_link = link_for_page(page.current_page - 1) if page.has_previous else None
    next_link = link_for_page(page.current_page + 1) if page.has_next else None
    return PaginationMetadata(
        previous_page_link=previous_link,
        next_page_link=next_link,
        total_count=page.total_count,
        page_size=page.page_size,
        current_page=page.current_page,
        total_pages=page.total_pages,
    )
