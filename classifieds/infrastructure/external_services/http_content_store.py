from collections.abc import Sequence
from typing import Any

import structlog

from classifieds.application.interfaces.content_store import ContentStore, FileUpload
from classifieds.domain.entities.listing import Category, City, Image, Listing, Tag
from classifieds.domain.enums.listing_status import ListingStatus
from classifieds.domain.query.filter_composer import Predicate
from classifieds.domain.query.pagination import PageRequest, PaginationResult
from classifieds.domain.query.sort_directive import SortDirective
from classifieds.infrastructure.external_services.content_api_client import (
    ContentApiClient,
    ContentApiError,
)
from classifieds.infrastructure.external_services.content_api_schemas import (
    CategoryRecord,
    CityRecord,
    ImageRecord,
    ListingRecord,
    TagRecord,
)

logger = structlog.get_logger(__name__)

LISTINGS = "listings"
CITIES = "cities"
CATEGORIES = "categories"
TAGS = "tags"


def _image_to_domain(record: ImageRecord) -> Image:
    return Image(id=record.id, url=record.url, alternative_text=record.alternative_text)


def _city_to_domain(record: CityRecord) -> City:
    return City(id=record.id, name=record.name, slug=record.slug)


def _category_to_domain(record: CategoryRecord) -> Category:
    return Category(
        id=record.id,
        name=record.name,
        slug=record.slug,
        icon=_image_to_domain(record.icon) if record.icon is not None else None,
    )


def _tag_to_domain(record: TagRecord) -> Tag:
    return Tag(id=record.id, name=record.name, slug=record.slug)


def _status(raw: str | None, listing_id: int) -> ListingStatus | None:
    if raw is None:
        return None
    try:
        return ListingStatus(raw)
    except ValueError:
        logger.warning("unknown_listing_status", listing_id=listing_id, status=raw)
        return None


def _to_domain(payload: dict[str, Any]) -> Listing:
    record = ListingRecord.model_validate(payload)
    return Listing(
        id=record.id,
        slug=record.slug,
        title=record.title,
        description=record.description or "",
        price=record.price,
        phone=record.phone,
        email=record.email,
        address=record.address,
        city=_city_to_domain(record.city) if record.city is not None else None,
        category=_category_to_domain(record.category) if record.category is not None else None,
        tags=tuple(_tag_to_domain(tag) for tag in record.tags or ()),
        images=tuple(_image_to_domain(image) for image in record.images or ()),
        owner_id=record.owner.id if record.owner is not None else None,
        featured=bool(record.featured),
        status=_status(record.status, record.id),
        homepage_position=record.homepage_position,
        category_position=record.category_position,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def _data(body: Any) -> Any:
    return body.get("data") if isinstance(body, dict) else body


class HttpContentStore(ContentStore):
    """ContentStore backed by the remote content API."""

    def __init__(self, client: ContentApiClient) -> None:
        self._client = client

    async def find_listings(
        self,
        *,
        filters: Predicate,
        populate: Sequence[str],
        page: PageRequest,
        sort: Sequence[SortDirective] = (),
    ) -> tuple[list[Listing], PaginationResult]:
        params: dict[str, Any] = {
            "filters": filters,
            "populate": list(populate),
            "pagination": page.to_wire(),
        }
        if sort:
            params["sort"] = [str(directive) for directive in sort]

        body = await self._client.get(LISTINGS, params)
        listings = [_to_domain(item) for item in _data(body) or []]
        meta = body.get("meta") if isinstance(body, dict) else None
        return listings, PaginationResult.from_meta(meta, page)

    async def get_listing(self, listing_id: int, *, populate: Sequence[str] = ()) -> Listing | None:
        try:
            body = await self._client.get(f"{LISTINGS}/{listing_id}", {"populate": list(populate)})
        except ContentApiError as exc:
            if exc.is_not_found:
                logger.info("listing_not_found", listing_id=listing_id)
                return None
            raise
        data = _data(body)
        return _to_domain(data) if data else None

    async def create_listing(self, data: dict[str, Any]) -> Listing:
        body = await self._client.post(LISTINGS, {"data": data})
        return _to_domain(_data(body))

    async def update_listing(self, listing_id: int, data: dict[str, Any]) -> Listing:
        body = await self._client.put(f"{LISTINGS}/{listing_id}", {"data": data})
        return _to_domain(_data(body))

    async def delete_listing(self, listing_id: int) -> None:
        await self._client.delete(f"{LISTINGS}/{listing_id}")

    async def upload_files(self, files: Sequence[FileUpload]) -> list[Image]:
        body = await self._client.upload(files)
        return [_image_to_domain(ImageRecord.model_validate(item)) for item in body or []]

    async def find_cities(self, *, filters: Predicate | None = None) -> list[City]:
        body = await self._client.get(CITIES, {"filters": filters or {}, "sort": ["name:asc"]})
        return [_city_to_domain(CityRecord.model_validate(item)) for item in _data(body) or []]

    async def find_categories(self, *, filters: Predicate | None = None) -> list[Category]:
        body = await self._client.get(
            CATEGORIES,
            {"filters": filters or {}, "populate": ["icon"], "sort": ["name:asc"]},
        )
        return [_category_to_domain(CategoryRecord.model_validate(item)) for item in _data(body) or []]

    async def find_tags(self, *, filters: Predicate | None = None) -> list[Tag]:
        body = await self._client.get(TAGS, {"filters": filters or {}, "sort": ["name:asc"]})
        return [_tag_to_domain(TagRecord.model_validate(item)) for item in _data(body) or []]
