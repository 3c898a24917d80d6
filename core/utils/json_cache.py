"""
JSON view over a cache store with the offline error policy baked in:
unreadable entries count as absent, failed writes are logged and ignored.
"""

import json
import logging
from typing import Any, List, Optional

from core.domain.errors import CacheError
from core.interfaces.storage import ICacheStore

logger = logging.getLogger(__name__)


class JsonCache:
    """JSON-encoded access to an ICacheStore. Never raises."""

    def __init__(self, store: ICacheStore):
        self.store = store

    async def read(self, key: str) -> Optional[Any]:
        try:
            raw = await self.store.get(key)
        except CacheError as e:
            logger.error(f"[CACHE] Error accessing local storage for '{key}': {e}")
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"[CACHE] Corrupt entry '{key}', ignoring: {e}")
            return None

    async def read_list(self, key: str) -> Optional[List[dict]]:
        """Read a collection slot. None when missing or not a JSON array."""
        data = await self.read(key)
        if data is None:
            return None
        if not isinstance(data, list):
            logger.error(f"[CACHE] Entry '{key}' is not a list, ignoring")
            return None
        return data

    async def write(self, key: str, value: Any) -> bool:
        try:
            await self.store.set(key, json.dumps(value))
            return True
        except (CacheError, TypeError, ValueError) as e:
            logger.error(f"[CACHE] Error storing '{key}' locally: {e}")
            return False

    async def read_text(self, key: str) -> Optional[str]:
        try:
            return await self.store.get(key)
        except CacheError as e:
            logger.error(f"[CACHE] Error accessing local storage for '{key}': {e}")
            return None

    async def write_text(self, key: str, value: str) -> bool:
        try:
            await self.store.set(key, value)
            return True
        except CacheError as e:
            logger.error(f"[CACHE] Error storing '{key}' locally: {e}")
            return False

    async def remove(self, key: str) -> bool:
        try:
            await self.store.remove(key)
            return True
        except CacheError as e:
            logger.error(f"[CACHE] Error removing '{key}': {e}")
            return False

    async def append(self, key: str, row: dict) -> bool:
        """Read-modify-write append to a collection slot (not atomic)"""
        rows = await self.read_list(key) or []
        rows.append(row)
        return await self.write(key, rows)
