from core.services.team_service import TeamService
from core.services.player_service import PlayerService
from core.services.event_service import EventService
from core.services.auth_service import AuthService
from core.services.chat_service import ChatService

__all__ = [
    "TeamService",
    "PlayerService",
    "EventService",
    "AuthService",
    "ChatService",
]
