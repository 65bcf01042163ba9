# liftboard/repositories/log_repo.py
from __future__ import annotations
import logging
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from liftboard.models import WorkoutLog
from liftboard.schemas.workout_log import ExerciseLog
from liftboard.services.reconciler import finalize_exercises

log = logging.getLogger(__name__)

class WorkoutLogRepository:
    def __init__(self, db, athlete_id: int):
        self.db = db
        self.athlete_id = athlete_id

    # READS
    def get(self, day: date) -> Optional[WorkoutLog]:
        stmt = select(WorkoutLog).where(WorkoutLog.athlete_id == self.athlete_id, WorkoutLog.date == day)
        return self.db.execute(stmt).scalars().first()

    def list_range(self, *, start: Optional[date] = None, end: Optional[date] = None,
                   limit: int = 100) -> list[WorkoutLog]:
        stmt = select(WorkoutLog).where(WorkoutLog.athlete_id == self.athlete_id)
        if start is not None:
            stmt = stmt.where(WorkoutLog.date >= start)
        if end is not None:
            stmt = stmt.where(WorkoutLog.date <= end)
        stmt = stmt.order_by(WorkoutLog.date.desc()).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def list_all(self) -> list[WorkoutLog]:
        stmt = select(WorkoutLog).where(WorkoutLog.athlete_id == self.athlete_id).order_by(WorkoutLog.date.desc())
        return list(self.db.execute(stmt).scalars().all())

    @staticmethod
    def list_for_athletes(db, athlete_ids: list[int], *, start: Optional[date] = None,
                          end: Optional[date] = None, limit: int = 200) -> list[WorkoutLog]:
        """Logs across a group of athletes (a team), newest first."""
        if not athlete_ids:
            return []
        stmt = select(WorkoutLog).where(WorkoutLog.athlete_id.in_(athlete_ids))
        if start is not None:
            stmt = stmt.where(WorkoutLog.date >= start)
        if end is not None:
            stmt = stmt.where(WorkoutLog.date <= end)
        stmt = stmt.order_by(WorkoutLog.date.desc(), WorkoutLog.id.desc()).limit(limit)
        return list(db.execute(stmt).scalars().all())

    # WRITES
    def save(self, day: date, exercises: list[ExerciseLog], *, workout_program_id: Optional[int] = None,
             notes: Optional[str] = None) -> WorkoutLog:
        """
        Upsert the athlete's log for ``day``. Completed-set counts and the
        completion flag are recomputed here; ``completed_at`` is stamped on the
        first transition to complete and cleared if the day becomes incomplete.
        """
        tallied, is_completed = finalize_exercises(exercises)
        payload = [e.model_dump(mode="json") for e in tallied]

        row = self.get(day)
        if row is None:
            row = WorkoutLog(athlete_id=self.athlete_id, date=day)
            self._apply(row, payload, is_completed, workout_program_id, notes)
            self.db.add(row)
            try:
                self.db.commit()
            except IntegrityError:
                # a concurrent save created the row first
                self.db.rollback()
                log.warning("workout log insert raced athlete_id=%s date=%s; retrying as update",
                            self.athlete_id, day.isoformat())
                row = self.get(day)
                if row is None:
                    raise
                self._apply(row, payload, is_completed, workout_program_id, notes)
                self.db.commit()
        else:
            self._apply(row, payload, is_completed, workout_program_id, notes)
            self.db.commit()
        self.db.refresh(row)
        return row

    @staticmethod
    def _apply(row: WorkoutLog, payload: list, is_completed: bool,
               workout_program_id: Optional[int], notes: Optional[str]) -> None:
        if is_completed and not row.completed_at:
            row.completed_at = datetime.now(timezone.utc)
        elif not is_completed:
            row.completed_at = None
        row.exercises = payload
        row.is_completed = is_completed
        if workout_program_id is not None:
            row.workout_program_id = workout_program_id
        row.notes = notes
