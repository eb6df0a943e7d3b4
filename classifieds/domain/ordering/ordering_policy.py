from collections.abc import Iterable

from classifieds.domain.entities.listing import Listing
from classifieds.domain.enums.ordering_context import OrderingContext

SortKey = tuple[int, int, float]


class OrderingPolicy:
    """
    Decides display order for a set of listings within a context.

    Listings with a manual position come first, ascending by position.
    Listings without one follow, ordered by creation time: newest first on
    the homepage, oldest first on category pages. The sort is stable, so
    ties keep their incoming order.

    Holds no state: the same input always produces the same order.
    """

    def sort_key(self, listing: Listing, context: OrderingContext) -> SortKey:
        position: int | None = getattr(listing, context.position_field)
        created = listing.created_at.timestamp()
        if position is not None:
            return (0, position, 0.0)
        return (1, 0, -created if context.newest_first else created)

    def order(self, listings: Iterable[Listing], context: OrderingContext) -> list[Listing]:
        """Return a new list in display order; the input is left untouched."""
        return sorted(listings, key=lambda listing: self.sort_key(listing, context))

    def order_for_homepage(self, listings: Iterable[Listing]) -> list[Listing]:
        return self.order(listings, OrderingContext.HOMEPAGE)

    def order_for_category(self, listings: Iterable[Listing]) -> list[Listing]:
        return self.order(listings, OrderingContext.CATEGORY)
