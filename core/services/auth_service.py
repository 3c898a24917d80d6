"""
Auth service - session lifecycle on top of the remote auth endpoint.

SIGNED_OUT -> sign_up / sign_in -> SIGNED_IN -> sign_out -> SIGNED_OUT

The session (access token, refresh token, user) lives in the local cache.
Reads are cache-first: the remote user endpoint is only hit when no user
is cached. Every public method returns an AuthResult and never raises.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from config.features import features
from core.domain.constants import (
    AUTH_TOKEN_KEY, AUTH_REFRESH_KEY, AUTH_USER_KEY, SESSION_KEYS,
    EMAIL_NOT_CONFIRMED, UNEXPECTED_ERROR, NOT_AUTHENTICATED,
)
from core.domain.errors import AuthApiError, DataAccessError
from core.domain.models import AuthResult, AuthSession, AuthUser, SessionState
from core.interfaces.repositories import IAuthRepository
from core.interfaces.storage import IAccessTokenHolder
from core.utils.json_cache import JsonCache

logger = logging.getLogger(__name__)


def _is_email_not_confirmed(error: AuthApiError) -> bool:
    return error.message == EMAIL_NOT_CONFIRMED or error.code == "email_not_confirmed"


class AuthService:
    """Session manager: sign up/in/out, current user, password reset"""

    def __init__(
        self,
        auth_repo: IAuthRepository,
        cache: JsonCache,
        token_holder: Optional[IAccessTokenHolder] = None,
        auto_confirm: Optional[bool] = None,
        max_sign_in_attempts: Optional[int] = None,
    ):
        self.auth_repo = auth_repo
        self.cache = cache
        self.token_holder = token_holder
        self.auto_confirm = features.AUTO_CONFIRM_EMAIL if auto_confirm is None else auto_confirm
        self.max_sign_in_attempts = max(
            1, features.MAX_SIGN_IN_ATTEMPTS if max_sign_in_attempts is None else max_sign_in_attempts
        )
        self._state = SessionState.SIGNED_OUT

    @property
    def state(self) -> SessionState:
        return self._state

    def _attach_token(self, token: Optional[str]) -> None:
        if self.token_holder is not None:
            self.token_holder.set_access_token(token)
        self._state = SessionState.SIGNED_IN if token else SessionState.SIGNED_OUT

    # === Session persistence ===

    async def restore_session(self) -> bool:
        """Load a stored token into memory. Call once at startup, before any remote call."""
        token = await self.cache.read_text(AUTH_TOKEN_KEY)
        self._attach_token(token)
        if token:
            logger.info("[AUTH] Restored session from local storage")
        return bool(token)

    async def _persist_session(self, session: AuthSession) -> None:
        await self.cache.write_text(AUTH_TOKEN_KEY, session.access_token)
        if session.refresh_token:
            await self.cache.write_text(AUTH_REFRESH_KEY, session.refresh_token)
        if session.user is not None:
            await self.cache.write(AUTH_USER_KEY, session.user.to_row())
        self._attach_token(session.access_token)

    async def _clear_session(self) -> None:
        for key in SESSION_KEYS:
            await self.cache.remove(key)
        self._attach_token(None)

    async def _cached_user(self) -> Optional[AuthUser]:
        data = await self.cache.read(AUTH_USER_KEY)
        if not isinstance(data, dict):
            return None
        try:
            return AuthUser.model_validate(data)
        except ValidationError as e:
            logger.error(f"[AUTH] Error parsing cached user: {e}")
            return None

    @staticmethod
    def _session_from(payload: dict, email: str) -> Optional[AuthSession]:
        token = payload.get("access_token")
        if not token:
            return None
        user_data = {"email": email, **(payload.get("user") or {})}
        return AuthSession(
            access_token=token,
            refresh_token=payload.get("refresh_token"),
            user=AuthUser.model_validate(user_data),
        )

    # === Operations ===

    async def sign_up(self, email: str, password: str, display_name: Optional[str] = None) -> AuthResult:
        metadata = {"display_name": display_name} if display_name else None
        try:
            payload = await self.auth_repo.sign_up(email, password, metadata)
        except AuthApiError as e:
            logger.error(f"[AUTH] Signup failed: {e.message}")
            return AuthResult(error=e.message)
        except DataAccessError as e:
            logger.error(f"[AUTH] Error signing up: {e}")
            return AuthResult(error=UNEXPECTED_ERROR)

        user_data = payload.get("user") or ({"id": payload["id"], "email": email} if payload.get("id") else None)
        user = AuthUser.model_validate(user_data) if user_data else None

        session = self._session_from(payload, email)
        if session is not None:
            await self._persist_session(session)
            user = session.user

        logger.info("[AUTH] Signup successful")
        return AuthResult(user=user)

    async def sign_in(self, email: str, password: str) -> AuthResult:
        """
        Password sign-in. An unconfirmed email triggers one confirm request
        and one more attempt; any later failure is returned as-is.
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                payload = await self.auth_repo.sign_in_with_password(email, password)
                break
            except AuthApiError as e:
                can_retry = attempt < self.max_sign_in_attempts
                if can_retry and self.auto_confirm and _is_email_not_confirmed(e):
                    if await self._confirm_email(email):
                        logger.info("[AUTH] Email auto-confirmed, trying to sign in again")
                        continue
                logger.error(f"[AUTH] Sign in failed: {e.message}")
                return AuthResult(error=e.message)
            except DataAccessError as e:
                logger.error(f"[AUTH] Error signing in: {e}")
                return AuthResult(error=UNEXPECTED_ERROR)

        session = self._session_from(payload, email)
        if session is None:
            logger.error("[AUTH] Sign in response carried no access token")
            return AuthResult(error=UNEXPECTED_ERROR)

        await self._persist_session(session)
        logger.info(f"[AUTH] Signed in user {session.user.id}")
        return AuthResult(user=session.user)

    async def _confirm_email(self, email: str) -> bool:
        logger.info("[AUTH] Attempting to auto-confirm email")
        try:
            await self.auth_repo.verify_signup(email)
            return True
        except DataAccessError as e:
            logger.error(f"[AUTH] Error auto-confirming email: {e}")
            return False

    async def sign_out(self) -> AuthResult:
        """Revoke the remote session if possible; local session is always cleared."""
        token = await self.cache.read_text(AUTH_TOKEN_KEY)
        if not token:
            await self._clear_session()
            logger.info("[AUTH] No token found, user already signed out")
            return AuthResult()

        error = None
        try:
            await self.auth_repo.sign_out(token)
        except AuthApiError as e:
            logger.error(f"[AUTH] Error from logout API: {e.message}")
            error = e.message
        except DataAccessError as e:
            logger.error(f"[AUTH] Error signing out: {e}")
            error = UNEXPECTED_ERROR
        finally:
            await self._clear_session()

        if error is None:
            logger.info("[AUTH] User successfully signed out")
        return AuthResult(error=error)

    async def get_current_user(self) -> AuthResult:
        token = await self.cache.read_text(AUTH_TOKEN_KEY)
        if not token:
            return AuthResult(error=NOT_AUTHENTICATED)
        self._attach_token(token)

        cached = await self._cached_user()
        if cached is not None:
            return AuthResult(user=cached)

        try:
            data = await self.auth_repo.get_user(token)
        except AuthApiError as e:
            logger.error(f"[AUTH] Failed to get user from API: {e.message}")
            return AuthResult(error=e.message)
        except DataAccessError as e:
            logger.error(f"[AUTH] Error getting current user: {e}")
            return AuthResult(error=UNEXPECTED_ERROR)

        try:
            user = AuthUser.model_validate(data)
        except ValidationError:
            return AuthResult(error=UNEXPECTED_ERROR)
        await self.cache.write(AUTH_USER_KEY, user.to_row())
        logger.info("[AUTH] User data retrieved from API and cached")
        return AuthResult(user=user)

    async def refresh_session(self) -> AuthResult:
        refresh_token = await self.cache.read_text(AUTH_REFRESH_KEY)
        if not refresh_token:
            return AuthResult(error=NOT_AUTHENTICATED)
        try:
            payload = await self.auth_repo.refresh(refresh_token)
        except AuthApiError as e:
            logger.error(f"[AUTH] Session refresh rejected: {e.message}")
            return AuthResult(error=e.message)
        except DataAccessError as e:
            logger.error(f"[AUTH] Error refreshing session: {e}")
            return AuthResult(error=UNEXPECTED_ERROR)

        cached = await self._cached_user()
        session = self._session_from(payload, cached.email if cached else "")
        if session is None:
            return AuthResult(error=UNEXPECTED_ERROR)
        if not payload.get("user") and cached is not None:
            session.user = cached
        await self._persist_session(session)
        return AuthResult(user=session.user)

    async def reset_password(self, email: str) -> AuthResult:
        try:
            await self.auth_repo.recover(email)
        except AuthApiError as e:
            return AuthResult(error=e.message)
        except DataAccessError as e:
            logger.error(f"[AUTH] Error resetting password: {e}")
            return AuthResult(error=UNEXPECTED_ERROR)
        return AuthResult()
