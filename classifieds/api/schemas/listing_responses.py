from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from classifieds.domain.enums.listing_status import ListingStatus


class ImageResponse(BaseModel):
    id: int
    url: str
    alternative_text: str | None = None

    model_config = {"from_attributes": True}


class CityResponse(BaseModel):
    id: int
    name: str
    slug: str

    model_config = {"from_attributes": True}


class CategoryResponse(BaseModel):
    id: int
    name: str
    slug: str
    icon: ImageResponse | None = None

    model_config = {"from_attributes": True}


class TagResponse(BaseModel):
    id: int
    name: str
    slug: str

    model_config = {"from_attributes": True}


class ListingResponse(BaseModel):
    id: int
    slug: str
    title: str
    description: str
    price: Decimal | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    city: CityResponse | None = None
    category: CategoryResponse | None = None
    tags: list[TagResponse] = []
    images: list[ImageResponse] = []
    featured: bool
    status: ListingStatus | None = None
    homepage_position: int | None = None
    category_position: int | None = None
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class PaginationResponse(BaseModel):
    page: int
    page_size: int
    total: int
    page_count: int
    has_next: bool
    has_previous: bool

    model_config = {"from_attributes": True}


class PaginatedListingsResponse(BaseModel):
    listings: list[ListingResponse]
    pagination: PaginationResponse


class FeaturedListingsResponse(PaginatedListingsResponse):
    city: str | None = None
    fell_back: bool = False


class HomepageFeedResponse(BaseModel):
    featured: list[ListingResponse]
    latest: list[ListingResponse]
    cities: list[CityResponse]
    categories: list[CategoryResponse]
    errors: dict[str, str]


class ListingDetailResponse(BaseModel):
    listing: ListingResponse
    city: CityResponse
    category: CategoryResponse


class CurationListResponse(BaseModel):
    context: str
    listings: list[ListingResponse]
    total: int


class PositionUpdateRequest(BaseModel):
    """Fields left out are not touched; an explicit null clears the position."""

    homepage_position: int | None = None
    category_position: int | None = None
