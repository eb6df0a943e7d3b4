from fastapi import APIRouter, Depends, HTTPException, Query, status

from classifieds.api.dependencies import (
    get_category_listings_use_case,
    get_featured_listings_use_case,
    get_homepage_feed_use_case,
    get_listing_queries,
    get_resolve_listing_detail_use_case,
)
from classifieds.api.schemas.listing_responses import (
    CategoryResponse,
    CityResponse,
    FeaturedListingsResponse,
    HomepageFeedResponse,
    ListingDetailResponse,
    ListingResponse,
    PaginatedListingsResponse,
    PaginationResponse,
)
from classifieds.application.queries.listing_queries import AmbiguousSlugError, ListingQueries
from classifieds.application.use_cases.get_category_listings import (
    GetCategoryListings,
    GetCategoryListingsInput,
)
from classifieds.application.use_cases.get_featured_listings import (
    GetFeaturedListings,
    GetFeaturedListingsInput,
)
from classifieds.application.use_cases.get_homepage_feed import (
    GetHomepageFeed,
    GetHomepageFeedInput,
)
from classifieds.application.use_cases.resolve_listing_detail import (
    ListingNotFoundError,
    ResolveListingDetail,
    ResolveListingDetailInput,
)
from classifieds.config import settings
from classifieds.domain.entities.listing import Listing
from classifieds.domain.enums.listing_status import ListingStatus
from classifieds.domain.query.criteria import ListingSelectionCriteria
from classifieds.domain.query.listing_page import ListingPage
from classifieds.domain.query.pagination import PaginationResult
from classifieds.domain.query.sort_directive import SortDirective

router = APIRouter(prefix="/listings", tags=["listings"])


def _listings(listings: tuple[Listing, ...] | list[Listing]) -> list[ListingResponse]:
    return [ListingResponse.model_validate(listing) for listing in listings]


def _pagination(pagination: PaginationResult) -> PaginationResponse:
    return PaginationResponse.model_validate(pagination)


def _page_response(page: ListingPage) -> PaginatedListingsResponse:
    return PaginatedListingsResponse(
        listings=_listings(page.listings),
        pagination=_pagination(page.pagination),
    )


@router.get("", response_model=PaginatedListingsResponse)
async def list_listings(
    city: str | None = Query(default=None),
    category: str | None = Query(default=None),
    tags: list[str] | None = Query(default=None),
    featured: bool | None = Query(default=None),
    listing_status: ListingStatus | None = Query(default=None, alias="status"),
    slug_prefix: str | None = Query(default=None),
    sort: list[str] | None = Query(default=None, description="field:asc or field:desc"),
    page: int | None = Query(default=None),
    page_size: int | None = Query(default=settings.listings_page_size),
    queries: ListingQueries = Depends(get_listing_queries),
) -> PaginatedListingsResponse:
    """Browse listings; every filter is optional and out-of-range paging is clamped."""
    try:
        directives = [SortDirective.parse(raw) for raw in sort] if sort else None
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Sort entries look like field:asc or field:desc.",
        )
    result = await queries.query_listings(
        ListingSelectionCriteria(
            city=city,
            category=category,
            tags=frozenset(tags or ()),
            featured=featured,
            status=listing_status,
            slug_prefix=slug_prefix,
            page=page,
            page_size=page_size,
        ),
        sort=directives,
    )
    return _page_response(result)


@router.get("/featured", response_model=FeaturedListingsResponse)
async def featured_listings(
    city: str | None = Query(default=None),
    limit: int | None = Query(default=None),
    use_case: GetFeaturedListings = Depends(get_featured_listings_use_case),
) -> FeaturedListingsResponse:
    result = await use_case.execute(GetFeaturedListingsInput(city=city, limit=limit))
    return FeaturedListingsResponse(
        listings=_listings(result.page.listings),
        pagination=_pagination(result.page.pagination),
        city=result.city,
        fell_back=result.fell_back,
    )


@router.get("/homepage", response_model=HomepageFeedResponse)
async def homepage_feed(
    use_case: GetHomepageFeed = Depends(get_homepage_feed_use_case),
) -> HomepageFeedResponse:
    result = await use_case.execute(GetHomepageFeedInput())
    return HomepageFeedResponse(
        featured=_listings(result.featured.listings) if result.featured else [],
        latest=_listings(result.latest),
        cities=[CityResponse.model_validate(city) for city in result.cities],
        categories=[CategoryResponse.model_validate(category) for category in result.categories],
        errors=result.errors,
    )


@router.get("/category/{category_slug}", response_model=PaginatedListingsResponse)
async def category_listings(
    category_slug: str,
    city: str | None = Query(default=None),
    page: int | None = Query(default=None),
    page_size: int | None = Query(default=settings.listings_page_size),
    use_case: GetCategoryListings = Depends(get_category_listings_use_case),
) -> PaginatedListingsResponse:
    """One category page, manually positioned listings first."""
    result = await use_case.execute(
        GetCategoryListingsInput(
            category_slug=category_slug, city=city, page=page, page_size=page_size
        )
    )
    return PaginatedListingsResponse(
        listings=_listings(result.listings),
        pagination=_pagination(result.pagination),
    )


@router.get("/owner/{owner_id}", response_model=PaginatedListingsResponse)
async def owner_listings(
    owner_id: int,
    page: int | None = Query(default=None),
    page_size: int | None = Query(default=None),
    queries: ListingQueries = Depends(get_listing_queries),
) -> PaginatedListingsResponse:
    result = await queries.query_by_owner(owner_id, page=page, page_size=page_size)
    return _page_response(result)


@router.get("/slug/{slug}", response_model=ListingResponse)
async def get_listing_by_slug(
    slug: str,
    queries: ListingQueries = Depends(get_listing_queries),
) -> ListingResponse:
    try:
        listing = await queries.query_by_slug(slug)
    except AmbiguousSlugError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if listing is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found.")
    return ListingResponse.model_validate(listing)


@router.get("/route/{city_slug}/{category_slug}/{slug}", response_model=ListingDetailResponse)
async def resolve_listing_route(
    city_slug: str,
    category_slug: str,
    slug: str,
    use_case: ResolveListingDetail = Depends(get_resolve_listing_detail_use_case),
) -> ListingDetailResponse:
    try:
        result = await use_case.execute(
            ResolveListingDetailInput(city_slug=city_slug, category_slug=category_slug, slug=slug)
        )
    except ListingNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except AmbiguousSlugError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return ListingDetailResponse(
        listing=ListingResponse.model_validate(result.listing),
        city=CityResponse.model_validate(result.city),
        category=CategoryResponse.model_validate(result.category),
    )


@router.get("/{listing_id}", response_model=ListingResponse)
async def get_listing(
    listing_id: int,
    queries: ListingQueries = Depends(get_listing_queries),
) -> ListingResponse:
    listing = await queries.query_by_id(listing_id)
    if listing is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found.")
    return ListingResponse.model_validate(listing)
