"""
Error taxonomy for the data-access layer.
"""

from typing import Any, Optional


class DataAccessError(Exception):
    """Base class for every failure raised below the service layer"""


class NetworkError(DataAccessError):
    """Request never reached the backend (DNS, refused connection, timeout)"""


class TransportError(DataAccessError):
    """Backend answered with a non-2xx status"""

    def __init__(self, status_code: int, status_text: str = "", payload: Any = None):
        self.status_code = status_code
        self.status_text = status_text
        self.payload = payload
        super().__init__(f"Supabase API error: {status_code} {status_text}".rstrip())


class CacheError(DataAccessError):
    """Local cache read or write failed"""


class AuthApiError(DataAccessError):
    """Auth endpoint rejected the request; message is what the user sees"""

    def __init__(self, message: str, status_code: Optional[int] = None, code: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)
