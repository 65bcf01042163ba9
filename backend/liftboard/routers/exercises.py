from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from liftboard.db import get_db
from liftboard.models import User, UserRole, AUTHOR_ROLES
from liftboard.schemas.exercise import ExerciseCreate, ExerciseUpdate, ExerciseRead
from liftboard.repositories.exercise_repo import ExerciseRepository
from liftboard.repositories.team_repo import TeamRepository
from liftboard.services.catalog import check_can_modify, filter_exercises, validate_demo_url
from liftboard.deps.auth import get_current_user, require_role

router = APIRouter(prefix="/exercises", tags=["exercises"])

def _catalog_owner(db: Session, user: User) -> int | None:
    """Whose custom exercises the caller sees: their own, or their team coach's."""
    if user.role != UserRole.athlete:
        return user.id
    if user.team_id is None:
        return None
    team = TeamRepository(db).get(user.team_id)
    return team.coach_id if team else None

@router.get("", response_model=list[ExerciseRead])
def list_exercises(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    category: str | None = Query(None),
    search: str | None = Query(None),
    sport: str | None = Query(None),
):
    visible = ExerciseRepository(db).list_visible(_catalog_owner(db, current))
    return filter_exercises(visible, category=category, search=search, sport=sport)

@router.get("/{exercise_id}", response_model=ExerciseRead)
def get_exercise(exercise_id: int, db: Session = Depends(get_db), _current: User = Depends(get_current_user)):
    return ExerciseRepository(db).get_or_404(exercise_id)

@router.post("", response_model=ExerciseRead, status_code=status.HTTP_201_CREATED)
def create_exercise(
    payload: ExerciseCreate,
    db: Session = Depends(get_db),
    current: User = Depends(require_role(*AUTHOR_ROLES)),
):
    return ExerciseRepository(db).create(
        name=payload.name,
        category=payload.category,
        owner_id=current.id,
        demo_url=validate_demo_url(payload.demo_url),
        description=payload.description,
        applicable_sports=[s.value for s in payload.applicable_sports],
    )

@router.put("/{exercise_id}", response_model=ExerciseRead)
def update_exercise(
    exercise_id: int,
    payload: ExerciseUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(require_role(*AUTHOR_ROLES)),
):
    repo = ExerciseRepository(db)
    exercise = repo.get_or_404(exercise_id)
    check_can_modify(exercise, current.id, "edit")

    changes = payload.model_dump(exclude_unset=True)
    if "demo_url" in changes:
        changes["demo_url"] = validate_demo_url(changes["demo_url"])
    if changes.get("applicable_sports") is not None:
        changes["applicable_sports"] = [getattr(s, "value", s) for s in changes["applicable_sports"]]
    return repo.update(exercise, **changes)

@router.delete("/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exercise(
    exercise_id: int,
    db: Session = Depends(get_db),
    current: User = Depends(require_role(*AUTHOR_ROLES)),
):
    repo = ExerciseRepository(db)
    exercise = repo.get_or_404(exercise_id)
    check_can_modify(exercise, current.id, "delete")
    repo.delete(exercise)
