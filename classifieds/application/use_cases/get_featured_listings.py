from dataclasses import dataclass

import structlog

from classifieds.application.interfaces.content_store import ContentStoreError
from classifieds.application.queries.listing_queries import ListingQueries
from classifieds.domain.query.listing_page import ListingPage

logger = structlog.get_logger(__name__)


@dataclass
class GetFeaturedListingsInput:
    city: str | None = None
    limit: int | None = None


@dataclass
class GetFeaturedListingsOutput:
    page: ListingPage
    city: str | None
    fell_back: bool = False


class GetFeaturedListings:
    """
    Use case: Featured listings for a city, falling back to site-wide.

    The city-scoped query is tried first. Only if the store fails on it is
    the unscoped query issued; an empty city result is returned as is. A
    failure of the unscoped query propagates.
    """

    def __init__(self, queries: ListingQueries) -> None:
        self._queries = queries

    async def execute(self, input_data: GetFeaturedListingsInput) -> GetFeaturedListingsOutput:
        if input_data.city is None:
            page = await self._queries.query_featured(input_data.limit)
            return GetFeaturedListingsOutput(page=page, city=None)

        try:
            page = await self._queries.query_featured(input_data.limit, city=input_data.city)
            return GetFeaturedListingsOutput(page=page, city=input_data.city)
        except ContentStoreError as exc:
            logger.warning(
                "featured_city_query_failed_falling_back",
                city=input_data.city,
                status_code=exc.status_code,
                error=str(exc),
            )

        page = await self._queries.query_featured(input_data.limit)
        return GetFeaturedListingsOutput(page=page, city=None, fell_back=True)
