import asyncio
from dataclasses import dataclass

import structlog

from classifieds.application.queries.listing_queries import ListingQueries
from classifieds.application.queries.taxonomy_queries import TaxonomyQueries
from classifieds.domain.entities.listing import Category, City, Listing

logger = structlog.get_logger(__name__)


class ListingNotFoundError(Exception):
    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f"Listing {slug!r} not found.")


@dataclass
class ResolveListingDetailInput:
    city_slug: str
    category_slug: str
    slug: str


@dataclass
class ResolveListingDetailOutput:
    listing: Listing
    city: City
    category: Category


class ResolveListingDetail:
    """
    Use case: Resolve a /{city}/{category}/{slug} route to a listing.

    The listing, city and category are looked up concurrently. The route
    only resolves when all three exist and the listing is actually filed
    under that city and category. All three lookups run to completion; if
    any fails, the first failure in lookup order is raised and the others
    are logged.
    """

    def __init__(self, queries: ListingQueries, taxonomy: TaxonomyQueries) -> None:
        self._queries = queries
        self._taxonomy = taxonomy

    async def execute(self, input_data: ResolveListingDetailInput) -> ResolveListingDetailOutput:
        results = await asyncio.gather(
            self._queries.query_by_slug(input_data.slug),
            self._taxonomy.city_by_slug(input_data.city_slug),
            self._taxonomy.category_by_slug(input_data.category_slug),
            return_exceptions=True,
        )
        errors = [result for result in results if isinstance(result, BaseException)]
        if errors:
            for other in errors[1:]:
                logger.warning(
                    "listing_route_lookup_failed",
                    slug=input_data.slug,
                    error_type=type(other).__name__,
                    error=str(other),
                )
            raise errors[0]
        listing, city, category = results

        if listing is None or city is None or category is None:
            raise ListingNotFoundError(input_data.slug)

        if not listing.belongs_to(input_data.city_slug, input_data.category_slug):
            logger.info(
                "listing_route_mismatch",
                slug=input_data.slug,
                city=input_data.city_slug,
                category=input_data.category_slug,
            )
            raise ListingNotFoundError(input_data.slug)

        return ResolveListingDetailOutput(listing=listing, city=city, category=category)
