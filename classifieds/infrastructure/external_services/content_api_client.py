"""HTTP client for the remote content API."""
from collections.abc import Mapping, Sequence
from types import TracebackType
from typing import Any

import httpx
import structlog

from classifieds.application.interfaces.content_store import ContentStoreError, FileUpload
from classifieds.config import settings
from classifieds.infrastructure.external_services.query_encoder import encode_params

logger = structlog.get_logger(__name__)


class ContentApiError(ContentStoreError):
    pass


class ContentApiClient:
    """
    Thin async wrapper around the content API's REST endpoints.

    Owns one pooled httpx.AsyncClient; close it with ``aclose()`` or use the
    client as an async context manager. No retries: every failure surfaces
    as ContentApiError.
    """

    def __init__(
        self,
        base_url: str = settings.content_api_url,
        api_token: str | None = settings.content_api_token,
        timeout_seconds: float = settings.request_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if api_token:
            headers["Authorization"] = f"Bearer {api_token}"
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ContentApiClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        """GET /api/{path} with bracket-encoded params → decoded JSON body."""
        return await self._request("GET", path, params=encode_params(params or {}))

    async def post(self, path: str, body: Any) -> Any:
        return await self._request("POST", path, json=body)

    async def put(self, path: str, body: Any) -> Any:
        return await self._request("PUT", path, json=body)

    async def delete(self, path: str) -> Any:
        return await self._request("DELETE", path)

    async def upload(self, files: Sequence[FileUpload]) -> Any:
        """
        POST /api/upload (multipart, field ``files``) → list of stored files.
        """
        multipart = [
            ("files", (upload.filename, upload.content, upload.content_type)) for upload in files
        ]
        return await self._request("POST", "upload", files=multipart)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"/api/{path.lstrip('/')}"
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "content_api_request_failed",
                method=method,
                url=url,
                status_code=exc.response.status_code,
                response=exc.response.text,
            )
            raise ContentApiError(
                f"Content API returned {exc.response.status_code} for {method} {url}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.RequestError as exc:
            logger.error("content_api_connection_failed", method=method, url=url, error=str(exc))
            raise ContentApiError(f"Failed to reach content API: {exc}") from exc

        logger.debug("content_api_request", method=method, url=url, status_code=response.status_code)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()
