"""
Shared fixtures: an in-process fake Supabase backend behind httpx.MockTransport.

The fake understands the small PostgREST subset the repositories use
(select/order, eq./gte. filters, insert, patch, delete) and serves scripted
responses for the auth endpoints.
"""

import json
from typing import Dict, List, Optional, Tuple

import httpx
import pytest
import pytest_asyncio

from core.utils.json_cache import JsonCache
from infrastructure.database import (
    SupabaseRestClient,
    SupabaseTeamRepository,
    SupabasePlayerRepository,
    SupabaseEventRepository,
    SupabaseAuthRepository,
)
from infrastructure.storage import MemoryCacheStore

BASE_URL = "https://test.supabase.co"
API_KEY = "anon-key"


class FakeSupabase:
    """Minimal stand-in for a Supabase project"""

    def __init__(self):
        self.tables: Dict[str, List[dict]] = {
            "teams": [],
            "players": [],
            "events": [],
            "event_registrations": [],
        }
        self.offline = False
        self.rest_status: Optional[int] = None
        self.auth_script: Dict[str, List[Tuple[int, dict]]] = {}
        self.requests: List[httpx.Request] = []
        self._next_id = 100

    # === scripting helpers ===

    def script_auth(self, endpoint: str, *responses: Tuple[int, dict]) -> None:
        """Queue responses for an auth endpoint; the last one repeats"""
        self.auth_script[endpoint] = list(responses)

    def calls_to(self, path: str, method: Optional[str] = None) -> List[httpx.Request]:
        return [
            r for r in self.requests
            if r.url.path == path and (method is None or r.method == method)
        ]

    # === transport entry point ===

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.offline:
            raise httpx.ConnectError("backend unreachable", request=request)

        path = request.url.path
        if path.startswith("/auth/v1/"):
            return self._auth(request, path[len("/auth/v1/"):])
        if path.startswith("/rest/v1/"):
            if self.rest_status is not None:
                return httpx.Response(self.rest_status, json={"message": "scripted failure"})
            return self._rest(request, path[len("/rest/v1/"):])
        return httpx.Response(404, json={"message": "no route"})

    def _auth(self, request: httpx.Request, endpoint: str) -> httpx.Response:
        grant_type = request.url.params.get("grant_type")
        key = f"{endpoint}?grant_type={grant_type}" if grant_type else endpoint
        queue = self.auth_script.get(key)
        if not queue:
            return httpx.Response(404, json={"msg": f"no script for {key}"})
        status, body = queue.pop(0) if len(queue) > 1 else queue[0]
        return httpx.Response(status, json=body)

    def _matches(self, row: dict, params: httpx.QueryParams) -> bool:
        for column, expr in params.multi_items():
            if column in ("select", "order"):
                continue
            op, _, operand = expr.partition(".")
            value = "" if row.get(column) is None else str(row.get(column))
            if op == "eq" and value != operand:
                return False
            if op == "gte" and value < operand:
                return False
        return True

    def _rest(self, request: httpx.Request, table: str) -> httpx.Response:
        if table not in self.tables:
            return httpx.Response(404, json={"message": f"relation {table} does not exist"})
        rows = self.tables[table]
        params = request.url.params
        wants_rows = request.headers.get("Prefer") == "return=representation"

        if request.method == "GET":
            found = [dict(r) for r in rows if self._matches(r, params)]
            order = params.get("order")
            if order:
                found.sort(key=lambda r: str(r.get(order, "")))
            columns = params.get("select", "*")
            if columns != "*":
                keep = columns.split(",")
                found = [{k: r.get(k) for k in keep} for r in found]
            return httpx.Response(200, json=found)

        if request.method == "POST":
            body = json.loads(request.content)
            new_rows = body if isinstance(body, list) else [body]
            for row in new_rows:
                if not row.get("id"):
                    self._next_id += 1
                    row["id"] = str(self._next_id)
                rows.append(row)
            return httpx.Response(201, json=new_rows) if wants_rows else httpx.Response(201)

        if request.method == "PATCH":
            values = json.loads(request.content)
            changed = []
            for row in rows:
                if self._matches(row, params):
                    row.update(values)
                    changed.append(dict(row))
            return httpx.Response(200, json=changed) if wants_rows else httpx.Response(204)

        if request.method == "DELETE":
            self.tables[table] = [r for r in rows if not self._matches(r, params)]
            return httpx.Response(204)

        return httpx.Response(405)


@pytest.fixture
def backend():
    return FakeSupabase()


@pytest.fixture
def store():
    return MemoryCacheStore()


@pytest.fixture
def cache(store):
    return JsonCache(store)


@pytest_asyncio.fixture
async def client(backend):
    client = SupabaseRestClient(BASE_URL, API_KEY, transport=httpx.MockTransport(backend.handler))
    yield client
    await client.aclose()


@pytest.fixture
def team_repo(client, cache):
    return SupabaseTeamRepository(client, cache, seed_defaults=True, mirror_writes=True)


@pytest.fixture
def player_repo(client, cache, team_repo):
    return SupabasePlayerRepository(client, cache, team_repo=team_repo, seed_defaults=True, mirror_writes=True)


@pytest.fixture
def event_repo(client, cache):
    return SupabaseEventRepository(client, cache, seed_defaults=True, mirror_writes=True)


@pytest.fixture
def auth_repo(client):
    return SupabaseAuthRepository(client)


@pytest.fixture
def cached(store):
    """Decoded cache entry lookup (None when absent)"""
    def read(key: str):
        raw = store.snapshot().get(key)
        return None if raw is None else json.loads(raw)
    return read
