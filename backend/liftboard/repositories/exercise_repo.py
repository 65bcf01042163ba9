# liftboard/repositories/exercise_repo.py
from __future__ import annotations
from typing import Iterable, Optional

from sqlalchemy import select, func

from liftboard.models import Exercise
from liftboard.repositories.base import BaseRepository
from liftboard.schemas.exercise import ExerciseRead
from liftboard.services.catalog import BUILTIN_EXERCISES, merge_exercises

class ExerciseRepository(BaseRepository[Exercise]):
    model = Exercise
    label = "Exercise"

    # READS
    def list_global(self) -> list[Exercise]:
        stmt = select(Exercise).where(Exercise.is_global.is_(True)).order_by(Exercise.id)
        return list(self.db.execute(stmt).scalars().all())

    def list_owned(self, owner_id: int) -> list[Exercise]:
        stmt = (select(Exercise)
                .where(Exercise.owner_id == owner_id, Exercise.is_global.is_(False))
                .order_by(func.lower(Exercise.name)))
        return list(self.db.execute(stmt).scalars().all())

    def list_visible(self, owner_id: Optional[int]) -> list[Exercise]:
        """Custom exercises of ``owner_id`` followed by the global catalog; globals win on name clashes."""
        custom = self.list_owned(owner_id) if owner_id is not None else []
        return merge_exercises(custom, self.list_global())

    # WRITES
    def create(self, *, name: str, category: str, owner_id: int, demo_url: str | None = None,
               description: str | None = None, applicable_sports: Iterable[str] = ("all",)) -> Exercise:
        exercise = Exercise(
            name=name,
            category=category,
            demo_url=demo_url,
            description=description or "",
            owner_id=owner_id,
            is_global=False,
            applicable_sports=list(applicable_sports),
        )
        return self.add_and_refresh(exercise)

    def update(self, exercise: Exercise, **fields) -> Exercise:
        for key, value in fields.items():
            setattr(exercise, key, value)
        return self.commit_and_refresh(exercise)

    def seed_globals(self, catalog: Iterable[ExerciseRead] = BUILTIN_EXERCISES) -> int:
        """Insert any built-in exercise that is not stored yet. Returns how many were added."""
        existing = {e.name.casefold() for e in self.list_global()}
        added = 0
        for item in catalog:
            if item.name.casefold() in existing:
                continue
            self.db.add(Exercise(name=item.name, category=item.category, is_global=True,
                                 owner_id=None, applicable_sports=list(item.applicable_sports)))
            added += 1
        self.db.commit()
        return added
