"""
Supabase implementation of Team repository.
"""

import logging
from typing import Optional, List, Union

from core.domain.constants import TEAMS_TABLE, TEAMS_ORDER, LOCAL_TEAMS_KEY
from core.domain.models import Team, TeamCreate, TeamUpdate, Fetched
from core.domain.seed import default_teams
from core.interfaces.repositories import ITeamRepository
from infrastructure.database.cached_repository import CachedCollectionRepository

logger = logging.getLogger(__name__)


class SupabaseTeamRepository(CachedCollectionRepository[Team], ITeamRepository):
    """Supabase implementation of team repository with local fallback"""

    table = TEAMS_TABLE
    order = TEAMS_ORDER
    cache_key = LOCAL_TEAMS_KEY
    model = Team
    log_tag = "[TEAM_REPO]"

    def _default_rows(self) -> List[dict]:
        return default_teams()

    def _prepare_create(self, payload: dict) -> dict:
        payload = super()._prepare_create(payload)
        # New teams always start empty; the player repository keeps the count
        payload["players_count"] = 0
        return payload

    async def list(self) -> Fetched[List[Team]]:
        return await self._list()

    async def get_by_id(self, team_id: str) -> Fetched[Optional[Team]]:
        return await self._get_by_id(team_id)

    async def create(self, team_data: Union[TeamCreate, dict]) -> Fetched[Optional[Team]]:
        return await self._create(self._as_dict(team_data))

    async def update(self, team_id: str, team_data: Union[TeamUpdate, dict]) -> Fetched[Optional[Team]]:
        return await self._update(team_id, self._as_patch(team_data))

    async def delete(self, team_id: str) -> Fetched[bool]:
        return await self._delete(team_id)

    async def set_cached_player_count(self, team_id: str, count: int) -> bool:
        """Patch players_count inside the cached collection only"""
        rows = await self.cache.read_list(self.cache_key)
        if not rows:
            return False
        for row in rows:
            if str(row.get("id")) == str(team_id):
                row["players_count"] = count
                return await self.cache.write(self.cache_key, rows)
        return False
