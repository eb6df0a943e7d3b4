from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from classifieds.domain.enums.listing_status import ListingStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Image:
    id: int
    url: str
    alternative_text: str | None = None


@dataclass(frozen=True)
class City:
    id: int
    name: str
    slug: str


@dataclass(frozen=True)
class Category:
    id: int
    name: str
    slug: str
    icon: Image | None = None


@dataclass(frozen=True)
class Tag:
    id: int
    name: str
    slug: str


@dataclass(frozen=True)
class Listing:
    """
    A single classified advertisement as returned by the content store.

    Read-only from this side: every change goes back to the store as a
    partial update, never as a local mutation. Optional attributes are
    explicit ``None`` rather than absent keys.
    """

    # Identity
    id: int
    slug: str
    title: str = ""
    description: str = ""

    # Offer and contact
    price: Decimal | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None

    # Relations
    city: City | None = None
    category: Category | None = None
    tags: tuple[Tag, ...] = ()
    images: tuple[Image, ...] = ()
    owner_id: int | None = None

    # Placement
    featured: bool = False
    status: ListingStatus | None = None
    homepage_position: int | None = None
    category_position: int | None = None

    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime | None = None

    @property
    def tag_slugs(self) -> frozenset[str]:
        return frozenset(tag.slug for tag in self.tags)

    @property
    def cover_image(self) -> Image | None:
        return self.images[0] if self.images else None

    def belongs_to(self, city_slug: str, category_slug: str) -> bool:
        """True when the listing sits under the given city/category route."""
        return (
            self.city is not None
            and self.category is not None
            and self.city.slug == city_slug
            and self.category.slug == category_slug
        )
