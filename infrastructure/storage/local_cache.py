"""
Local cache stores - durable key/value persistence for offline use.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import quote

import aiofiles
import aiofiles.os

from core.domain.errors import CacheError
from core.interfaces.storage import ICacheStore

logger = logging.getLogger(__name__)


class FileCacheStore(ICacheStore):
    """
    One file per key under a directory. Survives process restarts.

    Writes go to a temp file first and are then renamed over the target,
    so a crash mid-write leaves the previous value intact.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{quote(key, safe='')}.json"

    async def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                return await f.read()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise CacheError(f"read {key!r}: {e}") from e

    async def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_path = path.with_suffix(f".{os.getpid()}.tmp")
        try:
            await aiofiles.os.makedirs(self.directory, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(value)
            await aiofiles.os.replace(tmp_path, path)
        except OSError as e:
            raise CacheError(f"write {key!r}: {e}") from e

    async def remove(self, key: str) -> None:
        try:
            await aiofiles.os.remove(self._path(key))
        except FileNotFoundError:
            pass
        except OSError as e:
            raise CacheError(f"remove {key!r}: {e}") from e


class MemoryCacheStore(ICacheStore):
    """Process-local store. Same contract, nothing survives a restart."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> Dict[str, str]:
        return dict(self._data)
