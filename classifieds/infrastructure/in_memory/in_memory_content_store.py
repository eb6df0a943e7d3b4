"""
In-memory content store for tests and for local development without a
running content API.
"""
import itertools
import math
from collections.abc import Iterable, Sequence
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

import structlog

from classifieds.application.interfaces.content_store import (
    ContentStore,
    ContentStoreError,
    FileUpload,
)
from classifieds.domain.entities.listing import Category, City, Image, Listing, Tag
from classifieds.domain.enums.listing_status import ListingStatus
from classifieds.domain.query.filter_composer import Predicate
from classifieds.domain.query.pagination import PageRequest, PaginationResult
from classifieds.domain.query.sort_directive import SortDirection, SortDirective
from classifieds.infrastructure.in_memory.predicate_matcher import matches

logger = structlog.get_logger(__name__)

# Wire field name -> Listing attribute, for scalar fields writable by update.
_SCALAR_FIELDS: dict[str, str] = {
    "title": "title",
    "slug": "slug",
    "description": "description",
    "phone": "phone",
    "email": "email",
    "address": "address",
    "featured": "featured",
    "homepagePosition": "homepage_position",
    "categoryPosition": "category_position",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _named(entity: City | Category | Tag) -> dict[str, Any]:
    return {"id": entity.id, "name": entity.name, "slug": entity.slug}


def _to_wire(listing: Listing) -> dict[str, Any]:
    return {
        "id": listing.id,
        "slug": listing.slug,
        "title": listing.title,
        "description": listing.description,
        "price": listing.price,
        "featured": listing.featured,
        "status": listing.status.value if listing.status is not None else None,
        "homepagePosition": listing.homepage_position,
        "categoryPosition": listing.category_position,
        "createdAt": listing.created_at,
        "updatedAt": listing.updated_at,
        "city": _named(listing.city) if listing.city is not None else None,
        "category": _named(listing.category) if listing.category is not None else None,
        "tags": [_named(tag) for tag in listing.tags],
        "owner": {"id": listing.owner_id} if listing.owner_id is not None else None,
    }


def _null_last_key(value: Any) -> tuple[bool, Any]:
    return (value is None, value if value is not None else 0)


def _sorted(records: list[dict[str, Any]], sort: Sequence[SortDirective]) -> list[dict[str, Any]]:
    # Apply keys last-to-first; each pass is stable. Nulls sort last ascending,
    # first descending, as in Postgres.
    for directive in reversed(sort):
        records = sorted(
            records,
            key=lambda record: _null_last_key(record.get(directive.field)),
            reverse=directive.direction is SortDirection.DESC,
        )
    return records


class InMemoryContentStore(ContentStore):
    """Holds listings and taxonomy in dicts and evaluates predicates locally."""

    def __init__(
        self,
        listings: Iterable[Listing] = (),
        *,
        cities: Iterable[City] = (),
        categories: Iterable[Category] = (),
        tags: Iterable[Tag] = (),
    ) -> None:
        self._listings: dict[int, Listing] = {listing.id: listing for listing in listings}
        self._cities: dict[int, City] = {city.id: city for city in cities}
        self._categories: dict[int, Category] = {category.id: category for category in categories}
        self._tags: dict[int, Tag] = {tag.id: tag for tag in tags}
        self._images: dict[int, Image] = {
            image.id: image for listing in self._listings.values() for image in listing.images
        }
        start = max(itertools.chain(self._listings, self._images, [0])) + 1
        self._ids = itertools.count(start)

    async def find_listings(
        self,
        *,
        filters: Predicate,
        populate: Sequence[str],
        page: PageRequest,
        sort: Sequence[SortDirective] = (),
    ) -> tuple[list[Listing], PaginationResult]:
        records = [_to_wire(listing) for listing in self._listings.values()]
        matched = _sorted([record for record in records if matches(filters, record)], sort)

        total = len(matched)
        start = (page.page - 1) * page.page_size
        window = matched[start : start + page.page_size]
        pagination = PaginationResult(
            page=page.page,
            page_size=page.page_size,
            total=total,
            page_count=math.ceil(total / page.page_size),
        )
        return [self._listings[record["id"]] for record in window], pagination

    async def get_listing(self, listing_id: int, *, populate: Sequence[str] = ()) -> Listing | None:
        return self._listings.get(listing_id)

    async def create_listing(self, data: dict[str, Any]) -> Listing:
        listing = self._apply(Listing(id=next(self._ids), slug=data.get("slug", "")), data)
        self._listings[listing.id] = listing
        logger.debug("in_memory_listing_created", listing_id=listing.id, slug=listing.slug)
        return listing

    async def update_listing(self, listing_id: int, data: dict[str, Any]) -> Listing:
        current = self._listings.get(listing_id)
        if current is None:
            raise ContentStoreError(f"Listing {listing_id} not found.", status_code=404)
        listing = replace(self._apply(current, data), updated_at=_utcnow())
        self._listings[listing_id] = listing
        return listing

    async def delete_listing(self, listing_id: int) -> None:
        if self._listings.pop(listing_id, None) is None:
            raise ContentStoreError(f"Listing {listing_id} not found.", status_code=404)

    async def upload_files(self, files: Sequence[FileUpload]) -> list[Image]:
        uploaded = []
        for upload in files:
            image_id = next(self._ids)
            image = Image(id=image_id, url=f"/uploads/{image_id}_{upload.filename}")
            self._images[image_id] = image
            uploaded.append(image)
        return uploaded

    async def find_cities(self, *, filters: Predicate | None = None) -> list[City]:
        return self._filter_named(self._cities.values(), filters)

    async def find_categories(self, *, filters: Predicate | None = None) -> list[Category]:
        return self._filter_named(self._categories.values(), filters)

    async def find_tags(self, *, filters: Predicate | None = None) -> list[Tag]:
        return self._filter_named(self._tags.values(), filters)

    def _filter_named(self, entities: Iterable[Any], filters: Predicate | None) -> list[Any]:
        found = [entity for entity in entities if matches(filters or {}, _named(entity))]
        return sorted(found, key=lambda entity: entity.name)

    def _apply(self, listing: Listing, data: dict[str, Any]) -> Listing:
        changes: dict[str, Any] = {
            attr: data[wire] for wire, attr in _SCALAR_FIELDS.items() if wire in data
        }
        if "price" in data:
            changes["price"] = Decimal(str(data["price"])) if data["price"] is not None else None
        if "status" in data:
            changes["status"] = ListingStatus(data["status"]) if data["status"] else None
        if "city" in data:
            changes["city"] = self._cities.get(data["city"]) if data["city"] is not None else None
        if "category" in data:
            changes["category"] = (
                self._categories.get(data["category"]) if data["category"] is not None else None
            )
        if "tags" in data:
            changes["tags"] = tuple(
                self._tags[tag_id] for tag_id in data["tags"] if tag_id in self._tags
            )
        if "images" in data:
            changes["images"] = tuple(
                self._images[image_id] for image_id in data["images"] if image_id in self._images
            )
        if "owner" in data:
            changes["owner_id"] = data["owner"]
        return replace(listing, **changes)
