"""
Key-value stores holding visit counters.

Counters are decimal strings keyed by name. A missing key reads as 0 and keys
never expire.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

import redis.asyncio as redis

from progress_api.utils.config import Settings
from progress_api.utils.logger import get_logger

logger = get_logger(__name__, "COUNTER_STORE")


class CounterStore(ABC):
    """String key-value store with get/put and an increment built on top."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        ...

    async def get_count(self, key: str) -> int:
        value = await self.get(key)
        return int(value) if value else 0

    async def incr(self, key: str, amount: int = 1) -> int:
        """
        Read, add `amount` and write back.

        Not atomic: two concurrent increments of the same key can both read
        the old value, and one of them is lost. Stores with a native
        increment override this.
        """
        count = await self.get_count(key) + amount
        await self.put(key, str(count))
        return count

    async def close(self) -> None:
        pass


class MemoryCounterStore(CounterStore):
    """In-process store for local runs and tests. Counters die with the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def put(self, key: str, value: str) -> None:
        self._data[key] = value

    def snapshot(self) -> Dict[str, str]:
        return dict(self._data)


class RedisCounterStore(CounterStore):
    """Redis-backed store. Increments use INCRBY and are atomic per key."""

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisCounterStore":
        return cls(redis.Redis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> Optional[str]:
        return await self.client.get(key)

    async def put(self, key: str, value: str) -> None:
        await self.client.set(key, value)

    async def incr(self, key: str, amount: int = 1) -> int:
        return int(await self.client.incrby(key, amount))

    async def close(self) -> None:
        await self.client.aclose()


def create_counter_store(settings: Settings) -> CounterStore:
    """Build the store selected by `counter_backend`."""
    backend = settings.counter_backend.lower()
    if backend == "memory":
        logger.warning("Using in-memory visit counters; counts are lost on restart")
        return MemoryCounterStore()
    if backend == "redis":
        return RedisCounterStore.from_url(settings.redis_url)
    raise ValueError(f"Unknown counter backend: {settings.counter_backend}")
