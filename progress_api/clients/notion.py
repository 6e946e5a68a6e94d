"""
Notion API client for querying databases.
Uses Bearer token authentication with Notion-Version header.
"""

import time
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from progress_api.schemas.notion import NotionQueryResult
from progress_api.utils.config import Settings
from progress_api.utils.exceptions import UpstreamError
from progress_api.utils.logger import get_logger, log_upstream_call

logger = get_logger(__name__, "NOTION")


class NotionClient:
    """Async HTTP client for the Notion API, bound to one integration token."""

    def __init__(
        self,
        api_key: str,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = settings.notion_base_url.rstrip("/")
        self.timeout = settings.request_timeout
        self.transport = transport

        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Notion-Version": settings.notion_version,
            "Content-Type": "application/json"
        }

    def _handle_response(self, response: httpx.Response) -> Dict[str, Any]:
        """Handle HTTP response and raise UpstreamError on failure."""
        if not response.is_success:
            logger.warning(f"Notion answered {response.status_code}: {response.text[:200]}")
            raise UpstreamError("Notion", f"{response.status_code} {response.reason_phrase}")
        try:
            return response.json()
        except ValueError:
            raise UpstreamError("Notion", "Invalid Notion API response")

    async def _request(
        self,
        method: str,
        endpoint: str,
        json_body: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Make a single HTTP request. Failures are not retried."""
        url = f"{self.base_url}{endpoint}"
        started = time.perf_counter()

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=self.headers,
                    json=json_body
                )
        except httpx.TimeoutException:
            raise UpstreamError("Notion", f"request timed out after {self.timeout}s")
        except httpx.HTTPError as e:
            raise UpstreamError("Notion", f"request failed: {e}")

        log_upstream_call(logger, method, url, response.status_code, (time.perf_counter() - started) * 1000)
        return self._handle_response(response)

    async def query_database(self, database_id: str) -> NotionQueryResult:
        """
        Query a Notion database with an empty filter.

        Only the first page of results is returned; `next_cursor` is never
        followed.

        Args:
            database_id: Notion database ID

        Returns:
            Typed first page of the query response
        """
        payload = await self._request(
            "POST",
            f"/v1/databases/{database_id}/query",
            json_body={}
        )
        if not isinstance(payload, dict) or not isinstance(payload.get("results"), list):
            raise UpstreamError("Notion", "Invalid Notion API response")

        try:
            result = NotionQueryResult.model_validate(payload)
        except ValidationError:
            raise UpstreamError("Notion", "Invalid Notion API response")

        if result.has_more:
            logger.warning(f"Database {database_id[:8]}... has more than one page of results; only the first is counted")
        return result
