from fastapi import APIRouter, Depends

from classifieds.api.dependencies import get_content_api_client
from classifieds.application.interfaces.content_store import ContentStoreError
from classifieds.infrastructure.external_services.content_api_client import ContentApiClient

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    client: ContentApiClient = Depends(get_content_api_client),
) -> dict:  # type: ignore[type-arg]
    """Liveness + content API reachability."""
    content_api_status = "connected"
    try:
        await client.get("cities", {"pagination": {"page": 1, "pageSize": 1}})
    except ContentStoreError as exc:
        content_api_status = f"error: {exc}"

    return {
        "status": "healthy" if content_api_status == "connected" else "degraded",
        "content_api": content_api_status,
    }
