"""
Supabase REST client.
Single point of backend connection: PostgREST under /rest/v1, auth under /auth/v1.
"""

import logging
from typing import Any, Optional

import httpx

from config.settings import Settings
from core.domain.errors import NetworkError, TransportError
from core.interfaces.storage import IAccessTokenHolder

logger = logging.getLogger(__name__)

REST_PREFIX = "/rest/v1"
AUTH_PREFIX = "/auth/v1"

RETURN_REPRESENTATION = {"Prefer": "return=representation"}


# === Filter grammar (PostgREST) ===

def eq(value: Any) -> str:
    return f"eq.{value}"


def gte(value: Any) -> str:
    return f"gte.{value}"


def table_path(table: str) -> str:
    return f"{REST_PREFIX}/{table}"


class SupabaseRestClient(IAccessTokenHolder):
    """
    Thin async wrapper around the Supabase HTTP API.

    Every call carries the project API key. Authenticated calls also carry
    a bearer token: the signed-in user's access token when there is one,
    otherwise the API key itself (anon role). No retries, no implicit timeout.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._access_token: Optional[str] = None
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            transport=transport,
        )

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    def set_access_token(self, token: Optional[str]) -> None:
        """Attach (or drop, with None) the user session token for later calls"""
        self._access_token = token

    def _headers(self, authenticated: bool, token: Optional[str], extra: Optional[dict]) -> dict:
        headers = {
            "apikey": self._api_key,
            "Content-Type": "application/json",
        }
        if authenticated:
            headers["Authorization"] = f"Bearer {token or self._access_token or self._api_key}"
        if extra:
            headers.update(extra)
        return headers

    async def request(
        self,
        path: str,
        method: str = "GET",
        params: Optional[dict] = None,
        json: Any = None,
        headers: Optional[dict] = None,
        authenticated: bool = True,
        token: Optional[str] = None,
    ) -> Any:
        """
        Perform one HTTP call and return the decoded JSON body (None when empty).

        Raises:
            NetworkError: request never got an answer
            TransportError: backend answered with a non-2xx status
        """
        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json,
                headers=self._headers(authenticated, token, headers),
            )
        except httpx.TransportError as e:
            logger.warning(f"[SUPABASE] {method} {path} failed: {e!r}")
            raise NetworkError(str(e) or e.__class__.__name__) from e

        payload = self._decode(response)
        if not response.is_success:
            logger.warning(f"[SUPABASE] {method} {path} -> {response.status_code} {response.reason_phrase}")
            raise TransportError(response.status_code, response.reason_phrase, payload)

        logger.debug(f"[SUPABASE] {method} {path} -> {response.status_code}")
        return payload

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    # === PostgREST helpers ===

    async def select(self, table: str, columns: str = "*", order: Optional[str] = None, **filters) -> list:
        params = dict(filters)
        params["select"] = columns
        if order:
            params["order"] = order
        data = await self.request(table_path(table), params=params)
        return data if isinstance(data, list) else []

    async def insert(self, table: str, row: dict, returning: bool = True) -> list:
        data = await self.request(
            table_path(table),
            method="POST",
            json=row,
            headers=RETURN_REPRESENTATION if returning else None,
        )
        return data if isinstance(data, list) else []

    async def update(self, table: str, values: dict, returning: bool = True, **filters) -> list:
        data = await self.request(
            table_path(table),
            method="PATCH",
            params=filters,
            json=values,
            headers=RETURN_REPRESENTATION if returning else None,
        )
        return data if isinstance(data, list) else []

    async def delete(self, table: str, **filters) -> None:
        await self.request(table_path(table), method="DELETE", params=filters)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "SupabaseRestClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()


def create_client(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> SupabaseRestClient:
    """Build the client from settings. Missing credentials mean every call fails and reads go offline."""
    if not settings.is_configured:
        logger.warning(
            "Supabase credentials not configured (SUPABASE_URL / SUPABASE_KEY); "
            "running from local cache only"
        )
    return SupabaseRestClient(
        settings.supabase_url or "http://supabase.invalid",
        settings.supabase_key,
        timeout=settings.request_timeout,
        transport=transport,
    )
