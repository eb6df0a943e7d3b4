import asyncio
from dataclasses import dataclass, field
from typing import Any

import structlog

from classifieds.application.interfaces.content_store import ContentStoreError
from classifieds.application.queries.listing_queries import ListingQueries
from classifieds.application.queries.taxonomy_queries import TaxonomyQueries
from classifieds.config import settings
from classifieds.domain.entities.listing import Category, City, Listing
from classifieds.domain.enums.ordering_context import OrderingContext
from classifieds.domain.ordering.ordering_policy import OrderingPolicy
from classifieds.domain.query.criteria import ListingSelectionCriteria
from classifieds.domain.query.listing_page import ListingPage
from classifieds.domain.query.sort_directive import display_sort

logger = structlog.get_logger(__name__)


@dataclass
class GetHomepageFeedInput:
    featured_limit: int = settings.featured_limit
    latest_limit: int = settings.default_page_size


@dataclass
class GetHomepageFeedOutput:
    featured: ListingPage | None = None
    latest: list[Listing] = field(default_factory=list)
    cities: list[City] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        return not self.errors


class GetHomepageFeed:
    """
    Use case: Everything the homepage shows, fetched concurrently.

    Sections are independent; a store failure in one is recorded in
    ``errors`` and does not cancel or fail the others. Latest listings are
    put in homepage display order.
    """

    def __init__(
        self,
        queries: ListingQueries,
        taxonomy: TaxonomyQueries,
        policy: OrderingPolicy | None = None,
    ) -> None:
        self._queries = queries
        self._taxonomy = taxonomy
        self._policy = policy or OrderingPolicy()

    async def execute(self, input_data: GetHomepageFeedInput) -> GetHomepageFeedOutput:
        sections = ("featured", "latest", "cities", "categories")
        results = await asyncio.gather(
            self._queries.query_featured(input_data.featured_limit),
            self._queries.query_listings(
                ListingSelectionCriteria(page=1, page_size=input_data.latest_limit),
                sort=display_sort(OrderingContext.HOMEPAGE),
            ),
            self._taxonomy.list_cities(),
            self._taxonomy.list_categories(),
            return_exceptions=True,
        )

        output = GetHomepageFeedOutput()
        values: dict[str, Any] = {}
        for name, result in zip(sections, results):
            if isinstance(result, ContentStoreError):
                logger.error(
                    "homepage_section_failed",
                    section=name,
                    status_code=result.status_code,
                    error=str(result),
                )
                output.errors[name] = str(result)
            elif isinstance(result, BaseException):
                raise result
            else:
                values[name] = result

        output.featured = values.get("featured")
        if "latest" in values:
            output.latest = self._policy.order_for_homepage(values["latest"].listings)
        output.cities = values.get("cities", [])
        output.categories = values.get("categories", [])
        return output
