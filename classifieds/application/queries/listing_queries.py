"""
Listing query facade.

The single place that talks to the content store about listings. Every
public listing query is a specialization of ``query_listings``; the
curation queries and the position update serve the admin reordering UI.
"""
from collections.abc import Sequence

import structlog

from classifieds.application.interfaces.content_store import ContentStore
from classifieds.config import settings
from classifieds.domain.entities.listing import Listing
from classifieds.domain.enums.ordering_context import OrderingContext
from classifieds.domain.query.criteria import ListingSelectionCriteria
from classifieds.domain.query.filter_composer import Predicate, compose_filters, slug_filter
from classifieds.domain.query.listing_page import ListingPage
from classifieds.domain.query.pagination import PageRequest, plan_page
from classifieds.domain.query.sort_directive import (
    NEWEST_FIRST,
    SortDirective,
    position_then_newest,
)

logger = structlog.get_logger(__name__)

LISTING_POPULATE: tuple[str, ...] = ("images", "category", "city", "tags")


class AmbiguousSlugError(Exception):
    """More than one listing shares a slug that should be unique."""

    def __init__(self, slug: str, listing_ids: list[int]) -> None:
        self.slug = slug
        self.listing_ids = listing_ids
        super().__init__(f"Slug {slug!r} matches {len(listing_ids)} listings: {listing_ids}")


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


class ListingQueries:
    """Builds filtered, paginated listing queries against a ContentStore."""

    def __init__(
        self,
        store: ContentStore,
        *,
        default_page_size: int = settings.default_page_size,
        featured_limit: int = settings.featured_limit,
        curation_page_size: int = settings.curation_page_size,
    ) -> None:
        self._store = store
        self._default_page_size = default_page_size
        self._featured_limit = featured_limit
        self._curation_page_size = curation_page_size

    async def query_listings(
        self,
        criteria: ListingSelectionCriteria | None = None,
        *,
        sort: Sequence[SortDirective] | None = None,
    ) -> ListingPage:
        """
        Fetch one page of listings matching ``criteria``, with city,
        category, tags and images included in the same round trip.
        Wire order defaults to newest first.
        """
        criteria = criteria or ListingSelectionCriteria()
        page = plan_page(criteria.page, criteria.page_size, self._default_page_size)
        return await self._find(compose_filters(criteria), page, sort if sort is not None else NEWEST_FIRST)

    async def query_featured(self, limit: int | None = None, *, city: str | None = None) -> ListingPage:
        criteria = ListingSelectionCriteria(
            city=city,
            featured=True,
            page=1,
            page_size=limit if limit is not None else self._featured_limit,
        )
        return await self.query_listings(criteria)

    async def query_by_slug(self, slug: str) -> Listing | None:
        """
        Exact-slug lookup. Returns None when nothing matches; raises
        AmbiguousSlugError when the store holds more than one match.
        """
        listings, _ = await self._store.find_listings(
            filters=slug_filter(slug),
            populate=LISTING_POPULATE,
            page=PageRequest(page=1, page_size=2),
        )
        if not listings:
            logger.info("listing_slug_not_found", slug=slug)
            return None
        if len(listings) > 1:
            listing_ids = [listing.id for listing in listings]
            logger.warning("listing_slug_ambiguous", slug=slug, listing_ids=listing_ids)
            raise AmbiguousSlugError(slug, listing_ids)
        return listings[0]

    async def query_by_id(self, listing_id: int) -> Listing | None:
        return await self._store.get_listing(listing_id, populate=LISTING_POPULATE)

    async def query_by_owner(
        self,
        owner_id: int,
        *,
        page: int | None = None,
        page_size: int | None = None,
    ) -> ListingPage:
        return await self.query_listings(
            ListingSelectionCriteria(owner_id=owner_id, page=page, page_size=page_size)
        )

    async def query_for_homepage_curation(self) -> ListingPage:
        """Full working set for homepage reordering, position first."""
        return await self._find(
            {},
            PageRequest(page=1, page_size=self._curation_page_size),
            position_then_newest(OrderingContext.HOMEPAGE.wire_position_field),
        )

    async def query_for_category_curation(self, category_slug: str) -> ListingPage:
        """Full working set of one category for reordering, position first."""
        return await self._find(
            compose_filters(ListingSelectionCriteria(category=category_slug)),
            PageRequest(page=1, page_size=self._curation_page_size),
            position_then_newest(OrderingContext.CATEGORY.wire_position_field),
        )

    async def submit_position_update(
        self,
        listing_id: int,
        *,
        homepage_position: int | None | _Unset = UNSET,
        category_position: int | None | _Unset = UNSET,
    ) -> Listing:
        """
        Send only the positional fields that were given. Passing None clears
        a position; leaving a field out keeps the stored value.
        """
        data: dict[str, int | None] = {}
        if not isinstance(homepage_position, _Unset):
            data[OrderingContext.HOMEPAGE.wire_position_field] = homepage_position
        if not isinstance(category_position, _Unset):
            data[OrderingContext.CATEGORY.wire_position_field] = category_position
        if not data:
            raise ValueError("At least one of homepage_position or category_position is required.")

        listing = await self._store.update_listing(listing_id, data)
        logger.info("listing_position_updated", listing_id=listing_id, **data)
        return listing

    async def _find(
        self,
        filters: Predicate,
        page: PageRequest,
        sort: Sequence[SortDirective],
    ) -> ListingPage:
        listings, pagination = await self._store.find_listings(
            filters=filters,
            populate=LISTING_POPULATE,
            page=page,
            sort=sort,
        )
        logger.debug(
            "listings_queried",
            filters=filters,
            page=page.page,
            page_size=page.page_size,
            returned=len(listings),
            total=pagination.total,
        )
        return ListingPage(listings=tuple(listings), pagination=pagination)
