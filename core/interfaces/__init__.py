from core.interfaces.repositories import (
    ITeamRepository,
    IPlayerRepository,
    IEventRepository,
    IAuthRepository,
)
from core.interfaces.storage import ICacheStore, IAccessTokenHolder

__all__ = [
    # Repositories
    "ITeamRepository",
    "IPlayerRepository",
    "IEventRepository",
    "IAuthRepository",
    # Storage
    "ICacheStore",
    "IAccessTokenHolder",
]
