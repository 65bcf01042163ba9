from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from liftboard.db import get_db
from liftboard.errors import AuthorizationError, NotFoundError, ValidationError
from liftboard.models import User, UserRole, AUTHOR_ROLES, WorkoutProgram
from liftboard.schemas.program import (
    MoveProgram,
    ProgramCreate,
    ProgramDocument,
    ProgramRead,
    ProgramStatus,
    ProgramUpdate,
    WorkoutDayWrite,
)
from liftboard.repositories.program_repo import ProgramRepository
from liftboard.repositories.team_repo import TeamRepository
from liftboard.services import programs as program_ops
from liftboard.services.calendar import parse_day
from liftboard.deps.auth import get_current_user, require_role

router = APIRouter(prefix="/programs", tags=["programs"])

author = require_role(*AUTHOR_ROLES)

def _owned(repo: ProgramRepository, program_id: int, user: User) -> tuple[WorkoutProgram, ProgramDocument]:
    row = repo.get_or_404(program_id)
    if row.owner_id != user.id:
        raise AuthorizationError("Not authorized to modify this program")
    return row, repo.to_document(row)

def _check_teams(db: Session, team_ids: list[int], user: User) -> None:
    teams = TeamRepository(db)
    for team_id in team_ids:
        if teams.get_for_coach(team_id, user.id) is None:
            raise AuthorizationError(f"Team {team_id} is not one of your teams")

@router.get("", response_model=list[ProgramRead])
def list_programs(
    db: Session = Depends(get_db),
    current: User = Depends(author),
    status_filter: ProgramStatus | None = Query(None, alias="status"),
    team_id: int | None = Query(None),
    start_date: str | None = Query(None),
    end_date: str | None = Query(None),
):
    return ProgramRepository(db).list_for_owner(
        current.id,
        status=status_filter,
        team_id=team_id,
        start_date=parse_day(start_date) if start_date else None,
        end_date=parse_day(end_date) if end_date else None,
    )

@router.post("", response_model=ProgramRead, status_code=status.HTTP_201_CREATED)
def create_program(payload: ProgramCreate, db: Session = Depends(get_db), current: User = Depends(author)):
    _check_teams(db, payload.assigned_teams, current)
    doc = ProgramDocument(
        program_name=payload.program_name,
        owner_id=current.id,
        assigned_teams=list(dict.fromkeys(payload.assigned_teams)),
        workouts=program_ops.collapse_workout_days(payload.workouts),
        start_date=payload.start_date,
        end_date=payload.end_date,
    )
    if payload.is_published:
        program_ops.publish(doc)
    return ProgramRepository(db).create(doc, owner_id=current.id)

@router.get("/{program_id}", response_model=ProgramRead)
def get_program(program_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    row = ProgramRepository(db).get_or_404(program_id)
    if row.owner_id == current.id:
        return row
    if (current.role == UserRole.athlete and row.is_published
            and current.team_id is not None and current.team_id in (row.assigned_teams or [])):
        return row
    raise AuthorizationError("Not authorized to view this program")

@router.put("/{program_id}", response_model=ProgramRead)
def update_program(
    program_id: int,
    payload: ProgramUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(author),
):
    repo = ProgramRepository(db)
    row, doc = _owned(repo, program_id, current)

    if payload.program_name is not None:
        doc.program_name = payload.program_name
    if payload.start_date is not None:
        doc.start_date = payload.start_date
    if payload.end_date is not None:
        doc.end_date = payload.end_date
    if doc.end_date < doc.start_date:
        raise ValidationError("end_date cannot be before start_date")
    if payload.workouts is not None:
        doc.workouts = program_ops.collapse_workout_days(payload.workouts)
    if payload.assigned_teams is not None:
        _check_teams(db, payload.assigned_teams, current)
        doc.assigned_teams = list(dict.fromkeys(payload.assigned_teams))
    if payload.is_published is True:
        program_ops.publish(doc)
    elif payload.is_published is False:
        program_ops.unpublish(doc)
    return repo.save(row, doc)

@router.delete("/{program_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_program(program_id: int, db: Session = Depends(get_db), current: User = Depends(author)):
    repo = ProgramRepository(db)
    row, _ = _owned(repo, program_id, current)
    repo.delete(row)

# Workout days

@router.put("/{program_id}/days", response_model=ProgramRead)
def put_workout_day(
    program_id: int,
    payload: WorkoutDayWrite,
    db: Session = Depends(get_db),
    current: User = Depends(author),
):
    if payload.date is None:
        raise ValidationError("date is required")
    repo = ProgramRepository(db)
    row, doc = _owned(repo, program_id, current)
    program_ops.add_or_replace_workout_day(doc, payload.date, payload)
    return repo.save(row, doc)

@router.delete("/{program_id}/days/{day}", response_model=ProgramRead)
def delete_workout_day(program_id: int, day: str, db: Session = Depends(get_db), current: User = Depends(author)):
    target = parse_day(day)
    repo = ProgramRepository(db)
    row, doc = _owned(repo, program_id, current)
    if not program_ops.remove_workout_day(doc, target):
        raise NotFoundError(f"No workout on {target.isoformat()}")
    return repo.save(row, doc)

@router.post("/{program_id}/move", response_model=ProgramRead)
def move_program(
    program_id: int,
    payload: MoveProgram,
    db: Session = Depends(get_db),
    current: User = Depends(author),
):
    repo = ProgramRepository(db)
    row, doc = _owned(repo, program_id, current)
    program_ops.move_program(doc, payload.new_start_date)
    return repo.save(row, doc)

# Publishing and team assignment

@router.post("/{program_id}/publish", response_model=ProgramRead)
def publish_program(program_id: int, db: Session = Depends(get_db), current: User = Depends(author)):
    repo = ProgramRepository(db)
    row, doc = _owned(repo, program_id, current)
    program_ops.publish(doc)
    return repo.save(row, doc)

@router.post("/{program_id}/unpublish", response_model=ProgramRead)
def unpublish_program(program_id: int, db: Session = Depends(get_db), current: User = Depends(author)):
    repo = ProgramRepository(db)
    row, doc = _owned(repo, program_id, current)
    program_ops.unpublish(doc)
    return repo.save(row, doc)

@router.put("/{program_id}/teams/{team_id}", response_model=ProgramRead)
def assign_team(
    program_id: int,
    team_id: int,
    db: Session = Depends(get_db),
    current: User = Depends(require_role(UserRole.coach)),
):
    repo = ProgramRepository(db)
    row, doc = _owned(repo, program_id, current)
    _check_teams(db, [team_id], current)
    program_ops.assign_to_team(doc, team_id)
    return repo.save(row, doc)

@router.delete("/{program_id}/teams/{team_id}", response_model=ProgramRead)
def unassign_team(
    program_id: int,
    team_id: int,
    db: Session = Depends(get_db),
    current: User = Depends(require_role(UserRole.coach)),
):
    repo = ProgramRepository(db)
    row, doc = _owned(repo, program_id, current)
    if not program_ops.unassign_team(doc, team_id):
        raise NotFoundError("Team is not assigned to this program")
    return repo.save(row, doc)
