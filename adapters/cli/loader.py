"""
Loader - builds the client, cache, repositories and services once.

Everything is wired by hand and passed by reference; nothing lives in
module globals, so tests can build a container around a fake transport.
"""

from dataclasses import dataclass
from typing import Optional

import httpx

from config.settings import Settings
from core.interfaces.storage import ICacheStore
from core.utils.json_cache import JsonCache

# Infrastructure
from infrastructure.database import (
    SupabaseRestClient,
    create_client,
    SupabaseTeamRepository,
    SupabasePlayerRepository,
    SupabaseEventRepository,
    SupabaseAuthRepository,
)
from infrastructure.storage import FileCacheStore, MemoryCacheStore

# Core services
from core.services import TeamService, PlayerService, EventService, AuthService, ChatService


@dataclass
class AppContainer:
    client: SupabaseRestClient
    cache: JsonCache
    team_repo: SupabaseTeamRepository
    player_repo: SupabasePlayerRepository
    event_repo: SupabaseEventRepository
    auth_repo: SupabaseAuthRepository
    team_service: TeamService
    player_service: PlayerService
    event_service: EventService
    auth_service: AuthService
    chat_service: ChatService

    async def start(self) -> None:
        """Restore the stored session before anything talks to the backend"""
        await self.auth_service.restore_session()

    async def close(self) -> None:
        await self.client.aclose()


def create_cache_store(settings: Settings) -> ICacheStore:
    if settings.cache_backend == "memory":
        return MemoryCacheStore()
    return FileCacheStore(settings.cache_dir)


def build_container(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    cache_store: Optional[ICacheStore] = None,
) -> AppContainer:
    client = create_client(settings, transport=transport)
    cache = JsonCache(cache_store or create_cache_store(settings))

    # === REPOSITORIES ===
    team_repo = SupabaseTeamRepository(client, cache)
    player_repo = SupabasePlayerRepository(client, cache, team_repo=team_repo)
    event_repo = SupabaseEventRepository(client, cache)
    auth_repo = SupabaseAuthRepository(client)

    # === BUSINESS SERVICES ===
    return AppContainer(
        client=client,
        cache=cache,
        team_repo=team_repo,
        player_repo=player_repo,
        event_repo=event_repo,
        auth_repo=auth_repo,
        team_service=TeamService(team_repo=team_repo),
        player_service=PlayerService(player_repo=player_repo),
        event_service=EventService(event_repo=event_repo),
        auth_service=AuthService(auth_repo=auth_repo, cache=cache, token_holder=client),
        chat_service=ChatService(cache=cache),
    )
