"""Tests for the event repository."""

from datetime import datetime, timedelta, timezone

import pytest

from core.domain.models import DataSource, EventCreate
from core.services import EventService


def _day(offset: int) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=offset)).date().isoformat()


def _event(event_id: str, title: str, day: str) -> dict:
    return {"id": event_id, "title": title, "location": "Windhoek", "date": day, "type": "match"}


@pytest.mark.asyncio
async def test_upcoming_excludes_past_and_sorts_by_date(event_repo, backend):
    backend.tables["events"] = [
        _event("3", "Later", _day(10)),
        _event("1", "Past", _day(-3)),
        _event("2", "Today", _day(0)),
    ]

    result = await event_repo.get_upcoming()

    assert result.source == DataSource.REMOTE
    assert [e.title for e in result.data] == ["Today", "Later"]
    assert backend.requests[-1].url.params["date"] == f"gte.{_day(0)}"


@pytest.mark.asyncio
async def test_upcoming_is_empty_on_error_even_with_cache(event_repo, backend, store):
    await store.set("local_events", '[{"id": "1", "title": "Cached", "date": "2099-01-01"}]')
    backend.rest_status = 500

    result = await event_repo.get_upcoming()

    assert result.data == []
    assert result.source == DataSource.NONE


@pytest.mark.asyncio
async def test_list_seeds_three_events(event_repo, backend):
    backend.offline = True

    result = await event_repo.list()

    assert result.source == DataSource.SEED
    assert [(e.title, e.type, e.time) for e in result.data] == [
        ("National Championship Finals", "match", "15:00"),
        ("Junior Training Camp", "training", "09:00"),
        ("Regional Tournament", "tournament", "10:00"),
    ]
    assert all(e.status == "upcoming" for e in result.data)


@pytest.mark.asyncio
async def test_create_assigns_client_id(event_repo, backend):
    event = EventCreate(
        title="Indoor Cup",
        location="Windhoek",
        date=_day(5),
        registration_deadline=_day(4),
    )

    result = await event_repo.create(event)

    assert result.source == DataSource.REMOTE
    assert result.data.id.isdigit()
    assert backend.tables["events"][0]["id"] == result.data.id


@pytest.mark.asyncio
async def test_register_inserts_registration(event_repo, backend):
    service = EventService(event_repo=event_repo)

    assert await service.register_for_event("7", "user-1") is True
    assert backend.tables["event_registrations"][0]["event_id"] == "7"
    assert backend.tables["event_registrations"][0]["user_id"] == "user-1"


@pytest.mark.asyncio
async def test_register_fails_offline(event_repo, backend):
    backend.offline = True

    result = await event_repo.register("7", "user-1")

    assert result.data is False
    assert result.error is not None
