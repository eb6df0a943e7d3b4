from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from classifieds.domain.entities.listing import Category, City, Image, Listing, Tag
from classifieds.domain.query.filter_composer import Predicate
from classifieds.domain.query.pagination import PageRequest, PaginationResult
from classifieds.domain.query.sort_directive import SortDirective


class ContentStoreError(Exception):
    """
    The content store could not serve a request: network failure, timeout,
    or a non-success response. ``status_code`` is None when no response was
    received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


@dataclass(frozen=True)
class FileUpload:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class ContentStore(ABC):
    """Port for reading and writing listings in the remote content store."""

    @abstractmethod
    async def find_listings(
        self,
        *,
        filters: Predicate,
        populate: Sequence[str],
        page: PageRequest,
        sort: Sequence[SortDirective] = (),
    ) -> tuple[list[Listing], PaginationResult]:
        """Return (listings, pagination) for one page of matching listings."""
        ...

    @abstractmethod
    async def get_listing(self, listing_id: int, *, populate: Sequence[str] = ()) -> Listing | None:
        ...

    @abstractmethod
    async def create_listing(self, data: dict[str, Any]) -> Listing:
        ...

    @abstractmethod
    async def update_listing(self, listing_id: int, data: dict[str, Any]) -> Listing:
        """Apply a partial update; fields absent from ``data`` are left alone."""
        ...

    @abstractmethod
    async def delete_listing(self, listing_id: int) -> None:
        ...

    @abstractmethod
    async def upload_files(self, files: Sequence[FileUpload]) -> list[Image]:
        ...

    @abstractmethod
    async def find_cities(self, *, filters: Predicate | None = None) -> list[City]:
        ...

    @abstractmethod
    async def find_categories(self, *, filters: Predicate | None = None) -> list[Category]:
        ...

    @abstractmethod
    async def find_tags(self, *, filters: Predicate | None = None) -> list[Tag]:
        ...
