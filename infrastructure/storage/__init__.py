from infrastructure.storage.local_cache import FileCacheStore, MemoryCacheStore

__all__ = [
    "FileCacheStore",
    "MemoryCacheStore",
]
