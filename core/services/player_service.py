"""
Player service - business logic for player operations.
"""

import logging
import random
from typing import Optional, List

from core.domain.models import Player, PlayerCreate, PlayerUpdate, PlayerStats
from core.interfaces.repositories import IPlayerRepository

logger = logging.getLogger(__name__)


class PlayerService:
    """Service for player-related operations"""

    def __init__(self, player_repo: IPlayerRepository):
        self.player_repo = player_repo

    async def get_players(self) -> List[Player]:
        return (await self.player_repo.list()).data

    async def get_players_by_team(self, team_id: str) -> List[Player]:
        return (await self.player_repo.list_by_team(team_id)).data

    async def get_player(self, player_id: str) -> Optional[Player]:
        return (await self.player_repo.get_by_id(player_id)).data

    async def create_player(
        self,
        name: str,
        team: str,
        position: str,
        jersey_number: Optional[int] = None,
        stats: Optional[PlayerStats] = None,
    ) -> Optional[Player]:
        """
        Register a player. `team` may be a team id or a team name.
        Without a jersey number one is drawn from 1-99.
        """
        player_data = PlayerCreate(
            name=name,
            team_id=team,
            position=position,
            jersey_number=jersey_number or random.randint(1, 99),
            stats=stats or PlayerStats(),
        )
        result = await self.player_repo.create(player_data)
        if result.is_degraded:
            logger.warning(f"[PLAYER_SERVICE] Player '{name}' saved on this device only")
        return result.data

    async def update_player(self, player_id: str, **fields) -> Optional[Player]:
        return (await self.player_repo.update(player_id, PlayerUpdate(**fields))).data

    async def delete_player(self, player_id: str) -> bool:
        return (await self.player_repo.delete(player_id)).data

    async def increment_team_player_count(self, team_id: str) -> Optional[int]:
        return await self.player_repo.increment_team_player_count(team_id)
