"""
Local cache interface - durable string key/value storage on the device.
"""

from abc import ABC, abstractmethod
from typing import Optional


class ICacheStore(ABC):
    """Interface for the local key/value cache. Implementations raise CacheError on failure."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Get stored value or None when the key is absent"""
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value"""
        pass

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Delete key. Removing a missing key is not an error."""
        pass


class IAccessTokenHolder(ABC):
    """Anything that attaches the signed-in user's token to outgoing requests"""

    @abstractmethod
    def set_access_token(self, token: Optional[str]) -> None:
        """Use token for authenticated calls; None falls back to the API key"""
        pass
