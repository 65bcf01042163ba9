# liftboard/repositories/athlete_repo.py
from __future__ import annotations
from datetime import date, datetime, timezone
from typing import Iterable, Optional

from sqlalchemy import select, func

from liftboard.models import AthleteMax, AthleteStatEntry
from liftboard.services.maxes import MaxCandidate, should_raise

class AthleteRepository:
    """Maxes and raw stat history for one athlete."""
    def __init__(self, db, athlete_id: int):
        self.db = db
        self.athlete_id = athlete_id

    # READS
    def list_maxes(self) -> list[AthleteMax]:
        stmt = select(AthleteMax).where(AthleteMax.athlete_id == self.athlete_id).order_by(AthleteMax.id)
        return list(self.db.execute(stmt).scalars().all())

    def get_max(self, exercise_name: str) -> Optional[AthleteMax]:
        stmt = select(AthleteMax).where(
            AthleteMax.athlete_id == self.athlete_id,
            func.lower(AthleteMax.exercise_name) == exercise_name.strip().lower(),
        )
        return self.db.execute(stmt).scalars().first()

    def list_stats(self, *, limit: int = 50) -> list[AthleteStatEntry]:
        stmt = (select(AthleteStatEntry)
                .where(AthleteStatEntry.athlete_id == self.athlete_id)
                .order_by(AthleteStatEntry.id.desc())
                .limit(limit))
        return list(reversed(self.db.execute(stmt).scalars().all()))

    # WRITES (callers commit)
    def _put_max(self, existing: Optional[AthleteMax], exercise_id: Optional[int],
                 exercise_name: str, one_rep_max: float) -> AthleteMax:
        now = datetime.now(timezone.utc)
        if existing is None:
            existing = AthleteMax(athlete_id=self.athlete_id, exercise_id=exercise_id,
                                  exercise_name=exercise_name.strip(), one_rep_max=one_rep_max, last_updated=now)
            self.db.add(existing)
        else:
            existing.one_rep_max = one_rep_max
            existing.last_updated = now
            if exercise_id is not None:
                existing.exercise_id = exercise_id
        return existing

    def set_max(self, *, exercise_name: str, one_rep_max: float, exercise_id: Optional[int] = None) -> AthleteMax:
        """Manual entry: authoritative even when lower than the stored value."""
        row = self._put_max(self.get_max(exercise_name), exercise_id, exercise_name, one_rep_max)
        self.db.commit()
        self.db.refresh(row)
        return row

    def raise_max(self, candidate: MaxCandidate) -> bool:
        """Store ``candidate`` only if it beats the current max. Returns True on a new PR."""
        existing = self.get_max(candidate.exercise_name)
        if not should_raise(existing, candidate.one_rep_max):
            return False
        self._put_max(existing, candidate.exercise_id, candidate.exercise_name, candidate.one_rep_max)
        self.db.flush()
        return True

    def raise_maxes(self, candidates: Iterable[MaxCandidate]) -> int:
        raised = sum(1 for c in candidates if self.raise_max(c))
        self.db.commit()
        return raised

    def add_stat(self, *, visible_name: str, weight: float, reps: int, on: date,
                 exercise_id: Optional[int] = None) -> AthleteStatEntry:
        entry = AthleteStatEntry(athlete_id=self.athlete_id, visible_name=visible_name.strip(),
                                 weight=weight, reps=reps, date=on, exercise_id=exercise_id)
        self.db.add(entry)
        self.db.flush()
        return entry

    @staticmethod
    def maxes_by_athlete(db, athlete_ids: list[int]) -> dict[int, list[AthleteMax]]:
        """Every max for a group of athletes, keyed by athlete id."""
        found: dict[int, list[AthleteMax]] = {i: [] for i in athlete_ids}
        if not athlete_ids:
            return found
        stmt = select(AthleteMax).where(AthleteMax.athlete_id.in_(athlete_ids)).order_by(AthleteMax.id)
        for row in db.execute(stmt).scalars():
            found[row.athlete_id].append(row)
        return found
