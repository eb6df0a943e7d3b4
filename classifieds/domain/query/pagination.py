from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class PageRequest:
    page: int
    page_size: int

    def to_wire(self) -> dict[str, int]:
        return {"page": self.page, "pageSize": self.page_size}


@dataclass(frozen=True)
class PaginationResult:
    """
    Pagination metadata as computed by the content store.

    Values are passed through untouched; page counts are never recomputed
    locally.
    """

    page: int
    page_size: int
    total: int
    page_count: int

    @classmethod
    def from_meta(cls, meta: Mapping[str, Any] | None, requested: PageRequest) -> "PaginationResult":
        pagination = (meta or {}).get("pagination") or {}
        return cls(
            page=int(pagination.get("page", requested.page)),
            page_size=int(pagination.get("pageSize", requested.page_size)),
            total=int(pagination.get("total", 0)),
            page_count=int(pagination.get("pageCount", 0)),
        )

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count


def plan_page(page: int | None, page_size: int | None, default_page_size: int) -> PageRequest:
    """
    Normalize requested paging. Missing values take their defaults and
    anything below 1 is clamped to 1; paging input is never rejected.
    """
    if page is None:
        page = 1
    if page_size is None:
        page_size = default_page_size
    return PageRequest(page=max(1, page), page_size=max(1, page_size))
