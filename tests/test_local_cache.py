"""Tests for the cache stores and the JSON cache view."""

import pytest

from core.domain.errors import CacheError
from core.utils.json_cache import JsonCache
from infrastructure.storage import FileCacheStore, MemoryCacheStore


@pytest.mark.asyncio
async def test_file_store_survives_new_instance(tmp_path):
    first = FileCacheStore(tmp_path / "cache")
    await first.set("local_teams", '[{"id": "1"}]')

    second = FileCacheStore(tmp_path / "cache")
    assert await second.get("local_teams") == '[{"id": "1"}]'


@pytest.mark.asyncio
async def test_file_store_missing_key_is_none(tmp_path):
    store = FileCacheStore(tmp_path)
    assert await store.get("nothing-here") is None


@pytest.mark.asyncio
async def test_file_store_overwrite_and_remove(tmp_path):
    store = FileCacheStore(tmp_path)
    await store.set("supabase.auth.token", "one")
    await store.set("supabase.auth.token", "two")
    assert await store.get("supabase.auth.token") == "two"

    await store.remove("supabase.auth.token")
    assert await store.get("supabase.auth.token") is None
    # second remove is a no-op
    await store.remove("supabase.auth.token")


@pytest.mark.asyncio
async def test_file_store_leaves_no_temp_files(tmp_path):
    store = FileCacheStore(tmp_path)
    await store.set("a/b", "value")

    assert [p.name for p in tmp_path.iterdir()] == ["a%2Fb.json"]


@pytest.mark.asyncio
async def test_file_store_unusable_directory_raises_cache_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    store = FileCacheStore(blocker)

    with pytest.raises(CacheError):
        await store.set("k", "v")
    with pytest.raises(CacheError):
        await store.get("k")


@pytest.mark.asyncio
async def test_json_cache_treats_corrupt_entry_as_missing():
    cache = JsonCache(MemoryCacheStore({"local_teams": "{not json"}))

    assert await cache.read("local_teams") is None
    assert await cache.read_list("local_teams") is None


@pytest.mark.asyncio
async def test_json_cache_read_list_rejects_non_list():
    cache = JsonCache(MemoryCacheStore({"local_teams": '{"id": "1"}'}))
    assert await cache.read_list("local_teams") is None


@pytest.mark.asyncio
async def test_json_cache_swallows_store_failures(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    cache = JsonCache(FileCacheStore(blocker))

    assert await cache.write("k", [1, 2]) is False
    assert await cache.read("k") is None
    assert await cache.append("k", {"id": "1"}) is False


@pytest.mark.asyncio
async def test_json_cache_append_creates_slot():
    store = MemoryCacheStore()
    cache = JsonCache(store)

    assert await cache.append("local_players", {"id": "1"}) is True
    assert await cache.append("local_players", {"id": "2"}) is True
    assert await cache.read_list("local_players") == [{"id": "1"}, {"id": "2"}]
