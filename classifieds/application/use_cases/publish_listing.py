from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

import structlog

from classifieds.application.interfaces.content_store import ContentStore, FileUpload
from classifieds.domain.entities.listing import Listing

logger = structlog.get_logger(__name__)


@dataclass
class ListingDraft:
    """Owner-supplied fields for a new or revised listing."""

    title: str
    slug: str
    description: str = ""
    price: Decimal | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    city_id: int | None = None
    category_id: int | None = None
    tag_ids: list[int] = field(default_factory=list)
    owner_id: int | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "title": self.title,
            "slug": self.slug,
            "description": self.description,
            "price": str(self.price) if self.price is not None else None,
            "phone": self.phone,
            "email": self.email,
            "address": self.address,
            "tags": list(self.tag_ids),
        }
        if self.city_id is not None:
            payload["city"] = self.city_id
        if self.category_id is not None:
            payload["category"] = self.category_id
        if self.owner_id is not None:
            payload["owner"] = self.owner_id
        return payload


@dataclass
class PublishListingInput:
    draft: ListingDraft
    images: list[FileUpload] = field(default_factory=list)


@dataclass
class ReviseListingInput:
    listing_id: int
    draft: ListingDraft
    images: list[FileUpload] = field(default_factory=list)


class PublishListing:
    """
    Use case: Create, revise or withdraw a listing.

    Image files are uploaded first; the listing then references the ids the
    store hands back. A revision without new images keeps the stored ones.
    """

    def __init__(self, store: ContentStore) -> None:
        self._store = store

    async def execute(self, input_data: PublishListingInput) -> Listing:
        payload = input_data.draft.to_payload()
        payload["images"] = await self._upload(input_data.images)

        listing = await self._store.create_listing(payload)
        logger.info("listing_published", listing_id=listing.id, slug=listing.slug)
        return listing

    async def revise(self, input_data: ReviseListingInput) -> Listing:
        payload = input_data.draft.to_payload()
        if input_data.images:
            payload["images"] = await self._upload(input_data.images)

        listing = await self._store.update_listing(input_data.listing_id, payload)
        logger.info("listing_revised", listing_id=listing.id)
        return listing

    async def withdraw(self, listing_id: int) -> None:
        await self._store.delete_listing(listing_id)
        logger.info("listing_withdrawn", listing_id=listing_id)

    async def _upload(self, files: list[FileUpload]) -> list[int]:
        if not files:
            return []
        uploaded = await self._store.upload_files(files)
        return [image.id for image in uploaded]
