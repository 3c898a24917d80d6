"""
Team service - business logic for team operations.
Callers get plain values back; None/False/[] means the operation did not fully succeed.
"""

import logging
from typing import Optional, List

from core.domain.models import Team, TeamCreate, TeamUpdate, Fetched
from core.interfaces.repositories import ITeamRepository

logger = logging.getLogger(__name__)


class TeamService:
    """Service for team-related operations"""

    def __init__(self, team_repo: ITeamRepository):
        self.team_repo = team_repo

    async def get_teams(self) -> List[Team]:
        """All teams, from the backend or the best local substitute"""
        return (await self.team_repo.list()).data

    async def get_teams_with_source(self) -> Fetched[List[Team]]:
        return await self.team_repo.list()

    async def get_team(self, team_id: str) -> Optional[Team]:
        return (await self.team_repo.get_by_id(team_id)).data

    async def create_team(self, name: str, division: str, coach: str) -> Optional[Team]:
        """Create a team. Missing fields raise pydantic.ValidationError before any call."""
        team_data = TeamCreate(name=name, division=division, coach=coach)
        result = await self.team_repo.create(team_data)
        if result.is_degraded:
            logger.warning(f"[TEAM_SERVICE] Team '{name}' saved on this device only")
        return result.data

    async def update_team(self, team_id: str, **fields) -> Optional[Team]:
        return (await self.team_repo.update(team_id, TeamUpdate(**fields))).data

    async def delete_team(self, team_id: str) -> bool:
        return (await self.team_repo.delete(team_id)).data
