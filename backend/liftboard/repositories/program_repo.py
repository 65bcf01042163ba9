# liftboard/repositories/program_repo.py
from __future__ import annotations
from datetime import date
from typing import Optional

from sqlalchemy import select, and_, or_

from liftboard.models import WorkoutProgram
from liftboard.repositories.base import BaseRepository
from liftboard.schemas.program import ProgramDocument

class ProgramRepository(BaseRepository[WorkoutProgram]):
    model = WorkoutProgram
    label = "Workout program"

    @staticmethod
    def to_document(row: WorkoutProgram) -> ProgramDocument:
        return ProgramDocument.model_validate(row)

    # READS
    def list_for_owner(self, owner_id: int, *, status: Optional[str] = None, team_id: Optional[int] = None,
                       start_date: Optional[date] = None, end_date: Optional[date] = None) -> list[WorkoutProgram]:
        stmt = select(WorkoutProgram).where(WorkoutProgram.owner_id == owner_id)
        if status == "published":
            stmt = stmt.where(WorkoutProgram.is_published.is_(True), WorkoutProgram.is_draft.is_(False))
        elif status == "draft":
            stmt = stmt.where(WorkoutProgram.is_draft.is_(True))
        if start_date and end_date:
            # any overlap between the program's range and the requested one
            stmt = stmt.where(or_(
                and_(WorkoutProgram.start_date >= start_date, WorkoutProgram.start_date <= end_date),
                and_(WorkoutProgram.end_date >= start_date, WorkoutProgram.end_date <= end_date),
                and_(WorkoutProgram.start_date <= start_date, WorkoutProgram.end_date >= end_date),
            ))
        rows = self.db.execute(stmt.order_by(WorkoutProgram.id.desc())).scalars().all()
        if team_id is not None:
            rows = [r for r in rows if team_id in (r.assigned_teams or [])]
        return list(rows)

    def list_published_for_team(self, team_id: int, *, start: date, end: date) -> list[ProgramDocument]:
        """Published programs assigned to ``team_id`` whose date range overlaps [start, end]."""
        stmt = (select(WorkoutProgram)
                .where(WorkoutProgram.is_published.is_(True),
                       WorkoutProgram.start_date <= end,
                       WorkoutProgram.end_date >= start)
                .order_by(WorkoutProgram.id.asc()))
        rows = self.db.execute(stmt).scalars().all()
        # assigned_teams is a JSON list; filter membership here so it stays dialect-neutral
        return [self.to_document(r) for r in rows if team_id in (r.assigned_teams or [])]

    # WRITES
    def create(self, doc: ProgramDocument, *, owner_id: int) -> WorkoutProgram:
        row = WorkoutProgram(owner_id=owner_id)
        self._apply(row, doc)
        return self.add_and_refresh(row)

    def save(self, row: WorkoutProgram, doc: ProgramDocument) -> WorkoutProgram:
        self._apply(row, doc)
        return self.commit_and_refresh(row)

    @staticmethod
    def _apply(row: WorkoutProgram, doc: ProgramDocument) -> None:
        # assign fresh lists so the JSON columns are flagged dirty
        row.program_name = doc.program_name
        row.assigned_teams = list(doc.assigned_teams)
        row.workouts = [w.model_dump(mode="json") for w in doc.workouts]
        row.start_date = doc.start_date
        row.end_date = doc.end_date
        row.is_published = doc.is_published
        row.is_draft = doc.is_draft
