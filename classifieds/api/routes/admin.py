from fastapi import APIRouter, Depends, HTTPException, status

from classifieds.api.dependencies import get_listing_queries
from classifieds.api.schemas.listing_responses import (
    CurationListResponse,
    ListingResponse,
    PositionUpdateRequest,
)
from classifieds.application.interfaces.content_store import ContentStoreError
from classifieds.application.queries.listing_queries import ListingQueries
from classifieds.domain.enums.ordering_context import OrderingContext
from classifieds.domain.query.listing_page import ListingPage

router = APIRouter(prefix="/admin", tags=["admin"])


def _curation_response(context: OrderingContext, page: ListingPage) -> CurationListResponse:
    return CurationListResponse(
        context=context.value,
        listings=[ListingResponse.model_validate(listing) for listing in page.listings],
        total=page.pagination.total,
    )


@router.get("/curation/homepage", response_model=CurationListResponse)
async def homepage_curation(
    queries: ListingQueries = Depends(get_listing_queries),
) -> CurationListResponse:
    """Working set for reordering the homepage, positioned listings first."""
    page = await queries.query_for_homepage_curation()
    return _curation_response(OrderingContext.HOMEPAGE, page)


@router.get("/curation/categories/{category_slug}", response_model=CurationListResponse)
async def category_curation(
    category_slug: str,
    queries: ListingQueries = Depends(get_listing_queries),
) -> CurationListResponse:
    page = await queries.query_for_category_curation(category_slug)
    return _curation_response(OrderingContext.CATEGORY, page)


@router.patch("/listings/{listing_id}/position", response_model=ListingResponse)
async def update_listing_position(
    listing_id: int,
    body: PositionUpdateRequest,
    queries: ListingQueries = Depends(get_listing_queries),
) -> ListingResponse:
    # Only fields present in the request body are sent on.
    fields = body.model_dump(include=body.model_fields_set)
    if not fields:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Provide homepage_position and/or category_position.",
        )

    try:
        listing = await queries.submit_position_update(listing_id, **fields)
    except ContentStoreError as exc:
        if exc.is_not_found:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found.")
        raise
    return ListingResponse.model_validate(listing)
