# liftboard/repositories/team_repo.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import select

from liftboard.models import Team
from liftboard.repositories.base import BaseRepository

class TeamRepository(BaseRepository[Team]):
    model = Team
    label = "Team"

    def get_for_coach(self, team_id: int, coach_id: int) -> Optional[Team]:
        stmt = select(Team).where(Team.id == team_id, Team.coach_id == coach_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_for_coach(self, coach_id: int) -> list[Team]:
        stmt = select(Team).where(Team.coach_id == coach_id).order_by(Team.id)
        return list(self.db.execute(stmt).scalars().all())

    def create(self, *, team_name: str, coach_id: int, sport: str | None = None) -> Team:
        return self.add_and_refresh(Team(team_name=team_name, coach_id=coach_id, sport=sport))
