"""
Supabase implementation of Player repository.
"""

import logging
import re
from typing import Optional, List, Union

from core.domain.constants import (
    PLAYERS_TABLE, PLAYERS_ORDER, LOCAL_PLAYERS_KEY, TEAMS_TABLE, ID_PATTERN,
)
from core.domain.errors import DataAccessError
from core.domain.models import Player, PlayerCreate, PlayerUpdate, Fetched, DataSource
from core.domain.seed import default_players
from core.interfaces.repositories import IPlayerRepository
from infrastructure.database.cached_repository import CachedCollectionRepository
from infrastructure.database.supabase_client import SupabaseRestClient, eq
from infrastructure.database.team_repository import SupabaseTeamRepository
from core.utils.json_cache import JsonCache

logger = logging.getLogger(__name__)

_ID_RE = re.compile(ID_PATTERN, re.IGNORECASE)


def looks_like_id(value: str) -> bool:
    return bool(_ID_RE.match(value))


class SupabasePlayerRepository(CachedCollectionRepository[Player], IPlayerRepository):
    """Supabase implementation of player repository with local fallback"""

    table = PLAYERS_TABLE
    order = PLAYERS_ORDER
    cache_key = LOCAL_PLAYERS_KEY
    model = Player
    log_tag = "[PLAYER_REPO]"

    def __init__(
        self,
        client: SupabaseRestClient,
        cache: JsonCache,
        team_repo: SupabaseTeamRepository,
        seed_defaults: Optional[bool] = None,
        mirror_writes: Optional[bool] = None,
    ):
        super().__init__(client, cache, seed_defaults=seed_defaults, mirror_writes=mirror_writes)
        self.team_repo = team_repo

    def _default_rows(self) -> List[dict]:
        return default_players()

    async def list(self) -> Fetched[List[Player]]:
        return await self._list()

    async def list_by_team(self, team_id: str) -> Fetched[List[Player]]:
        error = None
        try:
            rows = await self.client.select(self.table, team_id=eq(team_id))
        except DataAccessError as e:
            logger.error(f"{self.log_tag} Error fetching players for team {team_id}: {e}")
            error, rows = e, []

        if rows:
            return Fetched(self._to_models(rows), DataSource.REMOTE)

        cached = await self.cache.read_list(self.cache_key)
        if cached is None:
            return Fetched([], DataSource.NONE, error)
        team_rows = [r for r in cached if str(r.get("team_id")) == str(team_id)]
        logger.info(f"{self.log_tag} Returning {len(team_rows)} players for team {team_id} from local storage")
        return Fetched(self._to_models(team_rows), DataSource.CACHE, error)

    async def get_by_id(self, player_id: str) -> Fetched[Optional[Player]]:
        return await self._get_by_id(player_id)

    async def resolve_team_id(self, team_ref: Optional[str]) -> Optional[str]:
        """
        Turn a team name into that team's backend id. Only remote teams are
        searched; id-shaped values and unmatched names pass through unchanged.
        """
        if not team_ref or looks_like_id(team_ref):
            return team_ref
        try:
            teams = await self.client.select(TEAMS_TABLE, columns="id,name")
        except DataAccessError as e:
            logger.error(f"{self.log_tag} Error looking up team id: {e}")
            return team_ref
        match = next((t for t in teams if t.get("name") == team_ref and t.get("id")), None)
        if match is None:
            logger.warning(f"{self.log_tag} No team named '{team_ref}', keeping value as team_id")
            return team_ref
        return str(match["id"])

    async def create(self, player_data: Union[PlayerCreate, dict]) -> Fetched[Optional[Player]]:
        payload = self._as_dict(player_data)
        payload["team_id"] = await self.resolve_team_id(payload.get("team_id"))
        payload.setdefault("stats", {"goals": 0, "assists": 0})

        result = await self._create(payload)
        # An unresolved team name cannot match any team row
        if result.is_remote and result.data is not None and looks_like_id(result.data.team_id):
            await self.increment_team_player_count(result.data.team_id)
        return result

    async def update(self, player_id: str, player_data: Union[PlayerUpdate, dict]) -> Fetched[Optional[Player]]:
        return await self._update(player_id, self._as_patch(player_data))

    async def delete(self, player_id: str) -> Fetched[bool]:
        return await self._delete(player_id)

    async def increment_team_player_count(self, team_id: str) -> Optional[int]:
        """
        Read the team, add one, write the new count back.

        Remote and cache are written independently; either may fail without
        undoing the other. Two concurrent callers can read the same count and
        both write count+1.
        """
        teams = (await self.team_repo.list()).data
        team = next((t for t in teams if str(t.id) == str(team_id)), None)
        if team is None:
            logger.warning(f"{self.log_tag} Team {team_id} not found, players_count unchanged")
            return None

        updated_count = (team.players_count or 0) + 1

        try:
            await self.client.update(
                TEAMS_TABLE, {"players_count": updated_count}, returning=False, id=eq(team_id)
            )
        except DataAccessError as e:
            logger.error(f"{self.log_tag} Error updating team player count in Supabase: {e}")

        await self.team_repo.set_cached_player_count(team_id, updated_count)
        return updated_count
