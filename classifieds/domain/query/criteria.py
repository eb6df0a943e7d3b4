from dataclasses import dataclass, field

from classifieds.domain.enums.listing_status import ListingStatus


@dataclass(frozen=True)
class ListingSelectionCriteria:
    """
    What a caller wants to see. Every field is optional and each one that is
    present narrows the result set; ``tags`` matches listings carrying any of
    the given tag slugs.
    """

    city: str | None = None
    category: str | None = None
    tags: frozenset[str] = field(default_factory=frozenset)
    featured: bool | None = None
    status: ListingStatus | None = None
    slug_prefix: str | None = None
    owner_id: int | None = None

    page: int | None = None
    page_size: int | None = None

    def __post_init__(self) -> None:
        # Accept any iterable of slugs (lists from query strings, sets, ...).
        if not isinstance(self.tags, frozenset):
            object.__setattr__(self, "tags", frozenset(self.tags or ()))
