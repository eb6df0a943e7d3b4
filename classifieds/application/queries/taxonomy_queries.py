import structlog

from classifieds.application.interfaces.content_store import ContentStore
from classifieds.domain.entities.listing import Category, City, Tag
from classifieds.domain.query.filter_composer import slug_filter

logger = structlog.get_logger(__name__)


class TaxonomyQueries:
    """Lookups for the cities, categories and tags listings are filed under."""

    def __init__(self, store: ContentStore) -> None:
        self._store = store

    async def list_cities(self) -> list[City]:
        return await self._store.find_cities()

    async def list_categories(self) -> list[Category]:
        return await self._store.find_categories()

    async def list_tags(self) -> list[Tag]:
        return await self._store.find_tags()

    async def city_by_slug(self, slug: str) -> City | None:
        cities = await self._store.find_cities(filters=slug_filter(slug))
        if not cities:
            logger.info("city_slug_not_found", slug=slug)
            return None
        return cities[0]

    async def category_by_slug(self, slug: str) -> Category | None:
        categories = await self._store.find_categories(filters=slug_filter(slug))
        if not categories:
            logger.info("category_slug_not_found", slug=slug)
            return None
        return categories[0]
