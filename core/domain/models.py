"""
Domain models - the core of business logic.
These models are storage-agnostic: the same shapes come back from the
backend, the local cache and the seed data.
"""

from dataclasses import dataclass
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Generic, TypeVar
from datetime import datetime
from enum import Enum

from core.domain.errors import DataAccessError


# === ENUMS ===

class DataSource(str, Enum):
    """Where a repository result actually came from"""
    REMOTE = "remote"    # backend answered
    CACHE = "cache"      # last-known-good local snapshot
    SEED = "seed"        # built-in defaults (also written to cache)
    LOCAL = "local"      # write kept only on this device
    NONE = "none"        # nothing could serve the request


class SessionState(str, Enum):
    SIGNED_OUT = "signed_out"
    SIGNED_IN = "signed_in"


class Row(BaseModel):
    """Base for backend rows - keeps unknown columns so cache copies stay verbatim"""
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True, from_attributes=True)

    def to_row(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class Patch(BaseModel):
    """Base for partial updates - only explicitly set fields are sent"""
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    def to_patch(self) -> dict:
        return self.model_dump(mode="json", exclude_unset=True, exclude_none=True)


# === TEAM ===

class TeamCreate(Row):
    """Data for creating a new team"""
    name: str
    division: str
    coach: str


class Team(Row):
    """Full team model"""
    id: Optional[str] = None
    name: str
    division: str
    coach: str
    players_count: Optional[int] = None
    created_at: Optional[datetime] = None


class TeamUpdate(Patch):
    name: Optional[str] = None
    division: Optional[str] = None
    coach: Optional[str] = None
    players_count: Optional[int] = None


# === PLAYER ===

class PlayerStats(BaseModel):
    goals: int = 0
    assists: int = 0


class PlayerCreate(Row):
    """Data for creating a player. team_id may be a team name; it gets resolved."""
    id: Optional[str] = None
    name: str
    team_id: str
    position: str
    jersey_number: int
    stats: PlayerStats = Field(default_factory=PlayerStats)
    created_at: Optional[datetime] = None


class Player(Row):
    """Full player model"""
    id: str
    name: str
    team_id: str
    position: str
    jersey_number: int
    stats: Optional[PlayerStats] = Field(default_factory=PlayerStats)
    created_at: Optional[datetime] = None


class PlayerUpdate(Patch):
    name: Optional[str] = None
    team_id: Optional[str] = None
    position: Optional[str] = None
    jersey_number: Optional[int] = None
    stats: Optional[PlayerStats] = None


# === EVENT ===

class EventCreate(Row):
    """Data for creating an event"""
    id: Optional[str] = None
    title: str
    description: str = ""
    location: str
    date: str
    time: str = ""
    teams: List[str] = Field(default_factory=list)
    type: str = "match"
    status: str = "upcoming"
    registration_deadline: str
    image: Optional[str] = None


class Event(Row):
    """Full event model. date/time/deadline are kept as the backend sends them."""
    id: str
    title: str
    description: str = ""
    location: str = ""
    date: str
    time: str = ""
    teams: List[str] = Field(default_factory=list)
    type: str = "match"
    status: str = "upcoming"
    created_at: Optional[datetime] = None
    registration_deadline: Optional[str] = None
    image: Optional[str] = None


class EventUpdate(Patch):
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    teams: Optional[List[str]] = None
    type: Optional[str] = None
    status: Optional[str] = None
    registration_deadline: Optional[str] = None
    image: Optional[str] = None


class EventRegistration(Row):
    event_id: str
    user_id: str


# === AUTH ===

class AuthUser(Row):
    """User object returned by the auth endpoint, plus whatever claims it carries"""
    id: str = "unknown"
    email: Optional[str] = None


class AuthSession(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    user: Optional[AuthUser] = None


@dataclass
class AuthResult:
    """Outcome of a session operation. error is a display string, never an exception."""
    user: Optional[AuthUser] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# === CHAT ===

class ChatMessage(Row):
    id: str
    sender_id: str
    sender_name: str
    sender_email: str = ""
    message: str
    is_admin: bool = False
    created_at: datetime
    read_by_ids: List[str] = Field(default_factory=list)


# === RESULTS ===

T = TypeVar("T")


@dataclass
class Fetched(Generic[T]):
    """
    Repository result that says where the data came from.
    Lets callers tell a synced write from one that only landed on the device.
    """
    data: T
    source: DataSource
    error: Optional[DataAccessError] = None

    @property
    def is_remote(self) -> bool:
        return self.source == DataSource.REMOTE

    @property
    def is_degraded(self) -> bool:
        return self.source in (DataSource.CACHE, DataSource.SEED, DataSource.LOCAL)
