from fastapi import APIRouter, Depends, HTTPException, status

from classifieds.api.dependencies import get_taxonomy_queries
from classifieds.api.schemas.listing_responses import CategoryResponse, CityResponse, TagResponse
from classifieds.application.queries.taxonomy_queries import TaxonomyQueries

router = APIRouter(tags=["taxonomy"])


@router.get("/cities", response_model=list[CityResponse])
async def list_cities(taxonomy: TaxonomyQueries = Depends(get_taxonomy_queries)) -> list[CityResponse]:
    return [CityResponse.model_validate(city) for city in await taxonomy.list_cities()]


@router.get("/cities/{slug}", response_model=CityResponse)
async def get_city(slug: str, taxonomy: TaxonomyQueries = Depends(get_taxonomy_queries)) -> CityResponse:
    city = await taxonomy.city_by_slug(slug)
    if city is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="City not found.")
    return CityResponse.model_validate(city)


@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories(
    taxonomy: TaxonomyQueries = Depends(get_taxonomy_queries),
) -> list[CategoryResponse]:
    categories = await taxonomy.list_categories()
    return [CategoryResponse.model_validate(category) for category in categories]


@router.get("/categories/{slug}", response_model=CategoryResponse)
async def get_category(
    slug: str, taxonomy: TaxonomyQueries = Depends(get_taxonomy_queries)
) -> CategoryResponse:
    category = await taxonomy.category_by_slug(slug)
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found.")
    return CategoryResponse.model_validate(category)


@router.get("/tags", response_model=list[TagResponse])
async def list_tags(taxonomy: TaxonomyQueries = Depends(get_taxonomy_queries)) -> list[TagResponse]:
    return [TagResponse.model_validate(tag) for tag in await taxonomy.list_tags()]
