"""
Supabase auth endpoint (GoTrue) calls.
"""

import logging
from typing import Any, Optional

from core.domain.constants import AUTH_ERROR_FIELDS
from core.domain.errors import AuthApiError, TransportError
from core.interfaces.repositories import IAuthRepository
from infrastructure.database.supabase_client import SupabaseRestClient, AUTH_PREFIX

logger = logging.getLogger(__name__)


def extract_error_message(payload: Any, fallback: str) -> str:
    """First non-empty of error / error_description / msg / message, else fallback"""
    if isinstance(payload, dict):
        for field in AUTH_ERROR_FIELDS:
            value = payload.get(field)
            if isinstance(value, str) and value:
                return value
    return fallback


class SupabaseAuthRepository(IAuthRepository):
    """Raw auth endpoint access. Rejections become AuthApiError; NetworkError passes through."""

    def __init__(self, client: SupabaseRestClient):
        self.client = client

    async def _call(
        self,
        path: str,
        fallback_error: str,
        method: str = "POST",
        json: Optional[dict] = None,
        params: Optional[dict] = None,
        token: Optional[str] = None,
    ) -> Any:
        try:
            return await self.client.request(
                f"{AUTH_PREFIX}{path}",
                method=method,
                params=params,
                json=json,
                authenticated=token is not None,
                token=token,
            )
        except TransportError as e:
            payload = e.payload if isinstance(e.payload, dict) else {}
            message = extract_error_message(payload, fallback_error)
            logger.info(f"[AUTH] {path} rejected ({e.status_code}): {message}")
            raise AuthApiError(message, e.status_code, payload.get("error_code")) from e

    async def sign_up(self, email: str, password: str, metadata: Optional[dict] = None) -> dict:
        body = {"email": email, "password": password, "auto_confirm": True}
        if metadata:
            body["data"] = metadata
        return await self._call("/signup", "Failed to sign up", json=body) or {}

    async def sign_in_with_password(self, email: str, password: str) -> dict:
        return await self._call(
            "/token",
            "Failed to sign in",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        ) or {}

    async def refresh(self, refresh_token: str) -> dict:
        return await self._call(
            "/token",
            "Failed to refresh session",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_token},
        ) or {}

    async def verify_signup(self, email: str) -> None:
        await self._call("/verify", "Failed to confirm email", json={"email": email, "type": "signup"})

    async def sign_out(self, access_token: str) -> None:
        await self._call("/logout", "Failed to sign out", token=access_token)

    async def get_user(self, access_token: str) -> dict:
        return await self._call("/user", "Failed to get user", method="GET", token=access_token) or {}

    async def recover(self, email: str) -> None:
        await self._call("/recover", "Failed to send password reset email", json={"email": email})
