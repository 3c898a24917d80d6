"""
Event service - business logic for event operations.
"""

from typing import Optional, List
from core.domain.models import Event, EventCreate, EventUpdate
from core.interfaces.repositories import IEventRepository


class EventService:
    """Service for event-related operations"""

    def __init__(self, event_repo: IEventRepository):
        self.event_repo = event_repo

    async def get_events(self) -> List[Event]:
        return (await self.event_repo.list()).data

    async def get_upcoming_events(self) -> List[Event]:
        """Events from today on. Empty on any backend error (no offline copy)."""
        return (await self.event_repo.get_upcoming()).data

    async def get_event(self, event_id: str) -> Optional[Event]:
        return (await self.event_repo.get_by_id(event_id)).data

    async def create_event(self, event_data: EventCreate) -> Optional[Event]:
        return (await self.event_repo.create(event_data)).data

    async def update_event(self, event_id: str, **fields) -> Optional[Event]:
        return (await self.event_repo.update(event_id, EventUpdate(**fields))).data

    async def delete_event(self, event_id: str) -> bool:
        return (await self.event_repo.delete(event_id)).data

    async def register_for_event(self, event_id: str, user_id: str) -> bool:
        return (await self.event_repo.register(event_id, user_id)).data
