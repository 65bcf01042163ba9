# liftboard/repositories/user_repo.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from liftboard.models import User, UserRole
from liftboard.repositories.base import BaseRepository

class UserRepository(BaseRepository[User]):
    model = User
    label = "User"

    # READS
    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.email) == email.lower())
        return self.db.execute(stmt).scalar_one_or_none()

    def get_athlete(self, athlete_id: int) -> Optional[User]:
        user = self.get(athlete_id)
        if user is None or user.role != UserRole.athlete:
            return None
        return user

    def list_athletes_on_teams(self, team_ids: list[int]) -> list[User]:
        if not team_ids:
            return []
        stmt = select(User).where(User.role == UserRole.athlete, User.team_id.in_(team_ids)).order_by(User.id)
        return list(self.db.execute(stmt).scalars().all())

    # WRITES
    def create(self, *, email: str, name: str, password_hash: str, role: str = "athlete",
               team_id: int | None = None) -> User:
        user = User(email=email, name=name, password_hash=password_hash, role=role, team_id=team_id)
        try:
            return self.add_and_refresh(user)
        except IntegrityError:
            self.db.rollback()
            # Re-raise a clean marker the router can map to 400
            raise ValueError("email_already_exists")
