"""
Dependency providers for the route handlers.

Every provider hands back a ready-to-use query facade or use case built on
the request's content store, so route handlers stay thin. The content API
client is created once per app (see ``main.lifespan``) and shared through
``app.state``; tests override ``get_content_store``.
"""
from fastapi import Depends, Request

from classifieds.application.interfaces.content_store import ContentStore
from classifieds.application.queries.listing_queries import ListingQueries
from classifieds.application.queries.taxonomy_queries import TaxonomyQueries
from classifieds.application.use_cases.get_category_listings import GetCategoryListings
from classifieds.application.use_cases.get_featured_listings import GetFeaturedListings
from classifieds.application.use_cases.get_homepage_feed import GetHomepageFeed
from classifieds.application.use_cases.publish_listing import PublishListing
from classifieds.application.use_cases.resolve_listing_detail import ResolveListingDetail
from classifieds.infrastructure.external_services.content_api_client import ContentApiClient
from classifieds.infrastructure.external_services.http_content_store import HttpContentStore


# ---- Low-level dependencies ------------------------------------------------

def get_content_api_client(request: Request) -> ContentApiClient:
    return request.app.state.content_api_client


def get_content_store(
    client: ContentApiClient = Depends(get_content_api_client),
) -> ContentStore:
    return HttpContentStore(client)


def get_listing_queries(store: ContentStore = Depends(get_content_store)) -> ListingQueries:
    return ListingQueries(store)


def get_taxonomy_queries(store: ContentStore = Depends(get_content_store)) -> TaxonomyQueries:
    return TaxonomyQueries(store)


# ---- Use-case dependencies -------------------------------------------------

def get_featured_listings_use_case(
    queries: ListingQueries = Depends(get_listing_queries),
) -> GetFeaturedListings:
    return GetFeaturedListings(queries)


def get_homepage_feed_use_case(
    queries: ListingQueries = Depends(get_listing_queries),
    taxonomy: TaxonomyQueries = Depends(get_taxonomy_queries),
) -> GetHomepageFeed:
    return GetHomepageFeed(queries, taxonomy)


def get_category_listings_use_case(
    queries: ListingQueries = Depends(get_listing_queries),
) -> GetCategoryListings:
    return GetCategoryListings(queries)


def get_resolve_listing_detail_use_case(
    queries: ListingQueries = Depends(get_listing_queries),
    taxonomy: TaxonomyQueries = Depends(get_taxonomy_queries),
) -> ResolveListingDetail:
    return ResolveListingDetail(queries, taxonomy)


def get_publish_listing_use_case(
    store: ContentStore = Depends(get_content_store),
) -> PublishListing:
    return PublishListing(store)
