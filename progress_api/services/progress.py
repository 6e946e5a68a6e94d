"""
Completion progress of a Notion database.
"""

from typing import Iterable, Optional

import httpx

from progress_api.clients.notion import NotionClient
from progress_api.schemas.notion import NotionPage
from progress_api.schemas.responses import ProgressResult
from progress_api.utils.config import Settings
from progress_api.utils.logger import get_logger

logger = get_logger(__name__, "PROGRESS")


def percent(completed: int, total: int) -> int:
    """completed/total as a percentage rounded half up; 0 for an empty set."""
    if total <= 0:
        return 0
    return (200 * completed + total) // (2 * total)


def count_completed(pages: Iterable[NotionPage], property_name: str, condition: str) -> int:
    """
    Count pages whose status property `property_name` is named `condition`.

    Pages without the property, or where it is not a status property, are
    counted as not completed.
    """
    return sum(1 for page in pages if page.status_name(property_name) == condition)


def compute_progress(pages: list, property_name: str, condition: str) -> ProgressResult:
    total = len(pages)
    completed = count_completed(pages, property_name, condition)
    return ProgressResult(total=total, completed=completed, progress=percent(completed, total))


class ProgressService:
    """Queries a database and reports how many of its items are done."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport

    async def get_progress(
        self,
        api_key: str,
        database_id: str,
        property_name: Optional[str] = None,
        condition: Optional[str] = None
    ) -> ProgressResult:
        """
        Compute progress for one database.

        Args:
            api_key: Notion integration token
            database_id: Notion database ID
            property_name: Status property to inspect (configured default when None)
            condition: Status name that counts as completed (configured default when None)

        Returns:
            ProgressResult over the first page of query results
        """
        property_name = property_name or self.settings.default_property_name
        condition = condition or self.settings.default_condition

        client = NotionClient(api_key, self.settings, transport=self.transport)
        query = await client.query_database(database_id)

        missing = sum(1 for page in query.results if page.get_property(property_name) is None)
        if missing:
            logger.warning(f"{missing} item(s) have no '{property_name}' property; counted as not completed")

        result = compute_progress(query.results, property_name, condition)
        logger.info(f"Progress for {database_id[:8]}...: {result.completed}/{result.total} ({result.progress}%)")
        return result
