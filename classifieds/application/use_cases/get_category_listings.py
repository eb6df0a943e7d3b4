from dataclasses import dataclass

from classifieds.application.queries.listing_queries import ListingQueries
from classifieds.config import settings
from classifieds.domain.entities.listing import Listing
from classifieds.domain.enums.ordering_context import OrderingContext
from classifieds.domain.ordering.ordering_policy import OrderingPolicy
from classifieds.domain.query.criteria import ListingSelectionCriteria
from classifieds.domain.query.pagination import PaginationResult
from classifieds.domain.query.sort_directive import display_sort


@dataclass
class GetCategoryListingsInput:
    category_slug: str
    city: str | None = None
    page: int | None = None
    page_size: int | None = settings.listings_page_size


@dataclass
class GetCategoryListingsOutput:
    listings: list[Listing]
    pagination: PaginationResult


class GetCategoryListings:
    """
    Use case: One page of a category, in category display order.

    The store cuts the page from the same order the policy applies, so
    positioned listings lead page 1 and the rest run oldest first across
    pages.
    """

    def __init__(self, queries: ListingQueries, policy: OrderingPolicy | None = None) -> None:
        self._queries = queries
        self._policy = policy or OrderingPolicy()

    async def execute(self, input_data: GetCategoryListingsInput) -> GetCategoryListingsOutput:
        page = await self._queries.query_listings(
            ListingSelectionCriteria(
                category=input_data.category_slug,
                city=input_data.city,
                page=input_data.page,
                page_size=input_data.page_size,
            ),
            sort=display_sort(OrderingContext.CATEGORY),
        )
        return GetCategoryListingsOutput(
            listings=self._policy.order_for_category(page.listings),
            pagination=page.pagination,
        )
