"""
Visit counting.

Each visit bumps up to three independent counters: all-time visits of a site,
visits of the site on the current day, and visits of a single page path.
Nothing ties the three together, so a failure halfway leaves the earlier
counters incremented.
"""

import time
from datetime import datetime
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from progress_api.schemas.responses import PageVisits, VisitCounters
from progress_api.stores.counter_store import CounterStore
from progress_api.utils.logger import get_logger, log_counter_update

logger = get_logger(__name__, "VISITS")


def total_key(site_id: str) -> str:
    return f"total_visits_{site_id}"


def daily_key(site_id: str, day: str) -> str:
    return f"visits_{site_id}_{day}"


def page_key(url: str) -> str:
    return f"visits_{url}"


class VisitCounter:
    """Records visits against a CounterStore."""

    def __init__(
        self,
        store: CounterStore,
        timezone: str = "Asia/Seoul",
        clock: Optional[Callable[[ZoneInfo], datetime]] = None
    ):
        self.store = store
        self.tz = ZoneInfo(timezone)
        self.clock = clock or (lambda tz: datetime.now(tz))

    def today(self) -> str:
        """Current calendar date in the configured time zone, as YYYY-MM-DD."""
        return self.clock(self.tz).strftime("%Y-%m-%d")

    async def _bump(self, key: str) -> int:
        started = time.perf_counter()
        value = await self.store.incr(key)
        log_counter_update(logger, key, value, (time.perf_counter() - started) * 1000)
        return value

    async def record_visit(self, site_id: str, url: Optional[str] = None) -> VisitCounters:
        """
        Count one visit.

        Args:
            site_id: Site identifier (database or page ID)
            url: Page path, when the visit should also count towards a page

        Returns:
            Counter values after this visit
        """
        total = await self._bump(total_key(site_id))
        today = await self._bump(daily_key(site_id, self.today()))

        page = None
        if url:
            page = PageVisits(url=url, count=await self._bump(page_key(url)))

        return VisitCounters(total=total, today=today, page=page)
