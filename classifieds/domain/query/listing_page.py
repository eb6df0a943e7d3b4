from dataclasses import dataclass

from classifieds.domain.entities.listing import Listing
from classifieds.domain.query.pagination import PaginationResult


@dataclass(frozen=True)
class ListingPage:
    listings: tuple[Listing, ...]
    pagination: PaginationResult

    @property
    def is_empty(self) -> bool:
        """True for the "no listings found" state, including pages past the end."""
        return not self.listings
