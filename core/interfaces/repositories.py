"""
Repository interfaces - abstractions for data access.
This allows swapping implementations (Supabase REST -> SQLite -> fakes in tests, etc.)
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Union
from core.domain.models import (
    Team, TeamCreate, TeamUpdate,
    Player, PlayerCreate, PlayerUpdate,
    Event, EventCreate, EventUpdate,
    Fetched,
)


class ITeamRepository(ABC):
    """Interface for team data access"""

    @abstractmethod
    async def list(self) -> Fetched[List[Team]]:
        """Get all teams ordered by name, falling back to cache or defaults"""
        pass

    @abstractmethod
    async def get_by_id(self, team_id: str) -> Fetched[Optional[Team]]:
        """Get team by ID (remote only)"""
        pass

    @abstractmethod
    async def create(self, team_data: Union[TeamCreate, dict]) -> Fetched[Optional[Team]]:
        """Create a new team, keeping it locally if the backend is unreachable"""
        pass

    @abstractmethod
    async def update(self, team_id: str, team_data: Union[TeamUpdate, dict]) -> Fetched[Optional[Team]]:
        """Update team fields"""
        pass

    @abstractmethod
    async def delete(self, team_id: str) -> Fetched[bool]:
        """Delete team"""
        pass


class IPlayerRepository(ABC):
    """Interface for player data access"""

    @abstractmethod
    async def list(self) -> Fetched[List[Player]]:
        """Get all players ordered by name, falling back to cache or defaults"""
        pass

    @abstractmethod
    async def list_by_team(self, team_id: str) -> Fetched[List[Player]]:
        """Get players of one team, falling back to the cached roster"""
        pass

    @abstractmethod
    async def get_by_id(self, player_id: str) -> Fetched[Optional[Player]]:
        """Get player by ID (remote only)"""
        pass

    @abstractmethod
    async def create(self, player_data: Union[PlayerCreate, dict]) -> Fetched[Optional[Player]]:
        """Create a player; team names are resolved to team ids"""
        pass

    @abstractmethod
    async def update(self, player_id: str, player_data: Union[PlayerUpdate, dict]) -> Fetched[Optional[Player]]:
        """Update player fields"""
        pass

    @abstractmethod
    async def delete(self, player_id: str) -> Fetched[bool]:
        """Delete player"""
        pass

    @abstractmethod
    async def increment_team_player_count(self, team_id: str) -> Optional[int]:
        """Bump a team's players_count by one (read-then-write, not atomic)"""
        pass


class IEventRepository(ABC):
    """Interface for event data access"""

    @abstractmethod
    async def list(self) -> Fetched[List[Event]]:
        """Get all events ordered by date, falling back to cache or defaults"""
        pass

    @abstractmethod
    async def get_upcoming(self) -> Fetched[List[Event]]:
        """Get events dated today or later (remote only)"""
        pass

    @abstractmethod
    async def get_by_id(self, event_id: str) -> Fetched[Optional[Event]]:
        """Get event by ID (remote only)"""
        pass

    @abstractmethod
    async def create(self, event_data: Union[EventCreate, dict]) -> Fetched[Optional[Event]]:
        """Create a new event, keeping it locally if the backend is unreachable"""
        pass

    @abstractmethod
    async def update(self, event_id: str, event_data: Union[EventUpdate, dict]) -> Fetched[Optional[Event]]:
        """Update event fields"""
        pass

    @abstractmethod
    async def delete(self, event_id: str) -> Fetched[bool]:
        """Delete event"""
        pass

    @abstractmethod
    async def register(self, event_id: str, user_id: str) -> Fetched[bool]:
        """Register a user for an event"""
        pass


class IAuthRepository(ABC):
    """Interface for the remote auth endpoint. Raises AuthApiError with a display message."""

    @abstractmethod
    async def sign_up(self, email: str, password: str, metadata: Optional[dict] = None) -> dict:
        pass

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> dict:
        pass

    @abstractmethod
    async def refresh(self, refresh_token: str) -> dict:
        pass

    @abstractmethod
    async def verify_signup(self, email: str) -> None:
        """Ask the backend to confirm a pending signup"""
        pass

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        pass

    @abstractmethod
    async def get_user(self, access_token: str) -> dict:
        pass

    @abstractmethod
    async def recover(self, email: str) -> None:
        """Send a password reset email"""
        pass
