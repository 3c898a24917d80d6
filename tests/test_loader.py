"""Tests for settings, container wiring and the command line parser."""

import httpx
import pytest
from pydantic import ValidationError

from adapters.cli.loader import build_container, create_cache_store
from config.settings import Settings
from infrastructure.storage import FileCacheStore, MemoryCacheStore
from main import build_parser


def test_settings_normalise_values(tmp_path):
    s = Settings(
        supabase_url="https://abc.supabase.co/",
        supabase_key="k",
        request_timeout="0",
        cache_backend="MEMORY",
        cache_dir=tmp_path,
    )
    assert s.supabase_url == "https://abc.supabase.co"
    assert s.request_timeout is None
    assert s.cache_backend == "memory"
    assert s.is_configured


def test_settings_reject_unknown_cache_backend():
    with pytest.raises(ValidationError):
        Settings(cache_backend="redis")


def test_cache_store_choice(tmp_path):
    assert isinstance(create_cache_store(Settings(cache_backend="memory")), MemoryCacheStore)
    assert isinstance(create_cache_store(Settings(cache_backend="file", cache_dir=tmp_path)), FileCacheStore)


@pytest.mark.asyncio
async def test_container_restores_session_into_client(backend):
    store = MemoryCacheStore({"supabase.auth.token": "stored-token"})
    app = build_container(
        Settings(supabase_url="https://abc.supabase.co", supabase_key="anon-key"),
        transport=httpx.MockTransport(backend.handler),
        cache_store=store,
    )
    try:
        await app.start()
        await app.team_service.get_teams()
    finally:
        await app.close()

    assert app.client.access_token == "stored-token"
    assert backend.requests[0].headers["Authorization"] == "Bearer stored-token"
    assert app.player_repo.team_repo is app.team_repo


@pytest.mark.asyncio
async def test_unconfigured_container_serves_seed_data():
    def refuse(request):
        raise httpx.ConnectError("no backend", request=request)

    app = build_container(
        Settings(supabase_url="", supabase_key=""),
        transport=httpx.MockTransport(refuse),
        cache_store=MemoryCacheStore(),
    )
    try:
        teams = await app.team_service.get_teams()
    finally:
        await app.close()

    assert len(teams) == 3


def test_parser_subcommands():
    parser = build_parser()

    args = parser.parse_args(["players", "--team", "a1"])
    assert args.command == "players" and args.team == "a1"

    args = parser.parse_args(["events", "--upcoming"])
    assert args.upcoming is True

    args = parser.parse_args(["sign-in", "coach@hockey.na", "--password", "pw"])
    assert (args.email, args.password) == ("coach@hockey.na", "pw")

    with pytest.raises(SystemExit):
        parser.parse_args([])
