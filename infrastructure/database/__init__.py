from infrastructure.database.supabase_client import SupabaseRestClient, create_client
from infrastructure.database.team_repository import SupabaseTeamRepository
from infrastructure.database.player_repository import SupabasePlayerRepository
from infrastructure.database.event_repository import SupabaseEventRepository
from infrastructure.database.auth_repository import SupabaseAuthRepository

__all__ = [
    "SupabaseRestClient",
    "create_client",
    "SupabaseTeamRepository",
    "SupabasePlayerRepository",
    "SupabaseEventRepository",
    "SupabaseAuthRepository",
]
