"""
Supabase implementation of Event repository.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, List, Union

from core.domain.constants import (
    EVENTS_TABLE, EVENTS_ORDER, LOCAL_EVENTS_KEY, EVENT_REGISTRATIONS_TABLE,
)
from core.domain.errors import DataAccessError
from core.domain.models import Event, EventCreate, EventUpdate, EventRegistration, Fetched, DataSource
from core.domain.seed import default_events
from core.interfaces.repositories import IEventRepository
from infrastructure.database.cached_repository import CachedCollectionRepository, timestamp_id
from infrastructure.database.supabase_client import gte

logger = logging.getLogger(__name__)


class SupabaseEventRepository(CachedCollectionRepository[Event], IEventRepository):
    """Supabase implementation of event repository with local fallback"""

    table = EVENTS_TABLE
    order = EVENTS_ORDER
    cache_key = LOCAL_EVENTS_KEY
    model = Event
    log_tag = "[EVENT_REPO]"

    def _default_rows(self) -> List[dict]:
        return default_events()

    def _prepare_create(self, payload: dict) -> dict:
        payload = super()._prepare_create(payload)
        payload["id"] = payload.get("id") or timestamp_id()
        return payload

    async def list(self) -> Fetched[List[Event]]:
        return await self._list()

    async def get_upcoming(self) -> Fetched[List[Event]]:
        today = datetime.now(timezone.utc).date().isoformat()
        try:
            rows = await self.client.select(self.table, order=self.order, date=gte(today))
        except DataAccessError as e:
            logger.error(f"{self.log_tag} Error fetching upcoming events: {e}")
            return Fetched([], DataSource.NONE, e)
        return Fetched(self._to_models(rows), DataSource.REMOTE)

    async def get_by_id(self, event_id: str) -> Fetched[Optional[Event]]:
        return await self._get_by_id(event_id)

    async def create(self, event_data: Union[EventCreate, dict]) -> Fetched[Optional[Event]]:
        return await self._create(self._as_dict(event_data))

    async def update(self, event_id: str, event_data: Union[EventUpdate, dict]) -> Fetched[Optional[Event]]:
        return await self._update(event_id, self._as_patch(event_data))

    async def delete(self, event_id: str) -> Fetched[bool]:
        return await self._delete(event_id)

    async def register(self, event_id: str, user_id: str) -> Fetched[bool]:
        registration = EventRegistration(event_id=event_id, user_id=user_id)
        try:
            await self.client.insert(EVENT_REGISTRATIONS_TABLE, registration.to_row(), returning=False)
        except DataAccessError as e:
            logger.error(f"{self.log_tag} Error registering for event {event_id}: {e}")
            return Fetched(False, DataSource.NONE, e)
        logger.info(f"{self.log_tag} User {user_id} registered for event {event_id}")
        return Fetched(True, DataSource.REMOTE)
