from decimal import Decimal

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile, status

from classifieds.api.dependencies import get_publish_listing_use_case
from classifieds.api.schemas.listing_responses import ListingResponse
from classifieds.application.interfaces.content_store import ContentStoreError, FileUpload
from classifieds.application.use_cases.publish_listing import (
    ListingDraft,
    PublishListing,
    PublishListingInput,
    ReviseListingInput,
)

router = APIRouter(prefix="/listings", tags=["publishing"])


def listing_draft_form(
    title: str = Form(...),
    slug: str = Form(...),
    description: str = Form(default=""),
    price: Decimal | None = Form(default=None),
    phone: str | None = Form(default=None),
    email: str | None = Form(default=None),
    address: str | None = Form(default=None),
    city_id: int | None = Form(default=None),
    category_id: int | None = Form(default=None),
    tag_ids: list[int] | None = Form(default=None),
    owner_id: int | None = Form(default=None),
) -> ListingDraft:
    return ListingDraft(
        title=title,
        slug=slug,
        description=description,
        price=price,
        phone=phone,
        email=email,
        address=address,
        city_id=city_id,
        category_id=category_id,
        tag_ids=tag_ids or [],
        owner_id=owner_id,
    )


async def _read_uploads(images: list[UploadFile] | None) -> list[FileUpload]:
    return [
        FileUpload(
            filename=image.filename or "upload",
            content=await image.read(),
            content_type=image.content_type or "application/octet-stream",
        )
        for image in images or []
    ]


@router.post("", response_model=ListingResponse, status_code=status.HTTP_201_CREATED)
async def publish_listing(
    draft: ListingDraft = Depends(listing_draft_form),
    images: list[UploadFile] | None = File(default=None),
    use_case: PublishListing = Depends(get_publish_listing_use_case),
) -> ListingResponse:
    """Multipart form: listing fields plus any number of ``images`` files."""
    listing = await use_case.execute(
        PublishListingInput(draft=draft, images=await _read_uploads(images))
    )
    return ListingResponse.model_validate(listing)


@router.put("/{listing_id}", response_model=ListingResponse)
async def revise_listing(
    listing_id: int,
    draft: ListingDraft = Depends(listing_draft_form),
    images: list[UploadFile] | None = File(default=None),
    use_case: PublishListing = Depends(get_publish_listing_use_case),
) -> ListingResponse:
    """Sending no images keeps the stored ones."""
    try:
        listing = await use_case.revise(
            ReviseListingInput(
                listing_id=listing_id, draft=draft, images=await _read_uploads(images)
            )
        )
    except ContentStoreError as exc:
        if exc.is_not_found:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found.")
        raise
    return ListingResponse.model_validate(listing)


@router.delete("/{listing_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def withdraw_listing(
    listing_id: int,
    use_case: PublishListing = Depends(get_publish_listing_use_case),
) -> Response:
    try:
        await use_case.withdraw(listing_id)
    except ContentStoreError as exc:
        if exc.is_not_found:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found.")
        raise
    return Response(status_code=status.HTTP_204_NO_CONTENT)
