"""Wire shapes of records returned by the content API."""
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ImageRecord(_Record):
    id: int
    url: str
    alternative_text: str | None = None


class CityRecord(_Record):
    id: int
    name: str = ""
    slug: str


class CategoryRecord(_Record):
    id: int
    name: str = ""
    slug: str
    icon: ImageRecord | None = None


class TagRecord(_Record):
    id: int
    name: str = ""
    slug: str


class OwnerRecord(_Record):
    id: int


class ListingRecord(_Record):
    id: int
    slug: str
    title: str = ""
    description: str | None = None
    price: Decimal | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    city: CityRecord | None = None
    category: CategoryRecord | None = None
    tags: list[TagRecord] | None = None
    images: list[ImageRecord] | None = None
    owner: OwnerRecord | None = None
    featured: bool | None = None
    status: str | None = None
    homepage_position: int | None = None
    category_position: int | None = None
    created_at: datetime
    updated_at: datetime | None = None
