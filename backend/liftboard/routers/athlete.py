from datetime import date
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from liftboard.db import get_db
from liftboard.models import User, UserRole
from liftboard.schemas.athlete import (
    AthleteMaxRead,
    AthleteStats,
    MaxUpdate,
    StatCreate,
    StatLogged,
    StatRead,
    TrainingSummaryRead,
)
from liftboard.schemas.program import ProgramDocument, ResolvedWorkoutDay, WorkoutDay
from liftboard.schemas.workout_log import ReconciledLog, WorkoutLogHistory, WorkoutLogRead, WorkoutLogSave
from liftboard.repositories.athlete_repo import AthleteRepository
from liftboard.repositories.log_repo import WorkoutLogRepository
from liftboard.repositories.program_repo import ProgramRepository
from liftboard.services import calendar
from liftboard.services.maxes import MaxCandidate, candidates_from_exercises, estimate_for_max
from liftboard.services.programs import locate_workout_day, workout_days_in_range
from liftboard.services.reconciler import finalize_exercises, history_view, merge_with_existing_log
from liftboard.services.resolver import resolve_workout_day
from liftboard.services.stats import summarize_logs
from liftboard.settings import get_settings
from liftboard.deps.auth import require_role

router = APIRouter(prefix="/athlete", tags=["athlete"])

athlete_only = require_role(UserRole.athlete)

def _programs(db: Session, user: User, start: date, end: date) -> list[ProgramDocument]:
    if user.team_id is None:
        return []
    return ProgramRepository(db).list_published_for_team(user.team_id, start=start, end=end)

def _workout_on(db: Session, user: User, day: date) -> tuple[ProgramDocument | None, WorkoutDay | None]:
    return locate_workout_day(_programs(db, user, day, day), user.team_id, day)

def _resolved(db: Session, user: User, day: date) -> ResolvedWorkoutDay | None:
    program, workout = _workout_on(db, user, day)
    if workout is None:
        return None
    maxes = AthleteRepository(db, user.id).list_maxes()
    return resolve_workout_day(workout, maxes, program_id=program.id, program_name=program.program_name)

# Assigned workouts

@router.get("/today", response_model=ResolvedWorkoutDay | None)
def todays_workout(db: Session = Depends(get_db), current: User = Depends(athlete_only)):
    return _resolved(db, current, calendar.today())

@router.get("/workouts/{day}", response_model=ResolvedWorkoutDay | None)
def workout_for_day(day: str, db: Session = Depends(get_db), current: User = Depends(athlete_only)):
    return _resolved(db, current, calendar.parse_day(day))

@router.get("/workouts", response_model=list[ResolvedWorkoutDay])
def workouts_in_range(
    db: Session = Depends(get_db),
    current: User = Depends(athlete_only),
    start_date: str | None = Query(None),
    end_date: str | None = Query(None),
):
    default_start, default_end = calendar.month_bounds(calendar.today())
    start = calendar.parse_day(start_date) if start_date else default_start
    end = calendar.parse_day(end_date) if end_date else default_end
    maxes = AthleteRepository(db, current.id).list_maxes()
    return [
        resolve_workout_day(workout, maxes, program_id=program.id, program_name=program.program_name)
        for program, workout in workout_days_in_range(_programs(db, current, start, end), current.team_id, start, end)
    ]

# Maxes and stats

@router.get("/maxes", response_model=list[AthleteMaxRead])
def my_maxes(db: Session = Depends(get_db), current: User = Depends(athlete_only)):
    return AthleteRepository(db, current.id).list_maxes()

@router.put("/maxes", response_model=AthleteMaxRead)
def set_my_max(payload: MaxUpdate, db: Session = Depends(get_db), current: User = Depends(athlete_only)):
    return AthleteRepository(db, current.id).set_max(
        exercise_name=payload.exercise_name,
        one_rep_max=payload.one_rep_max,
        exercise_id=payload.exercise_id,
    )

@router.get("/stats", response_model=AthleteStats)
def my_stats(db: Session = Depends(get_db), current: User = Depends(athlete_only)):
    repo = AthleteRepository(db, current.id)
    logs = [WorkoutLogRead.model_validate(r) for r in WorkoutLogRepository(db, current.id).list_all()]
    summary = summarize_logs(logs, calendar.today())
    return AthleteStats(
        maxes=[AthleteMaxRead.model_validate(m) for m in repo.list_maxes()],
        stats=[StatRead.model_validate(s) for s in repo.list_stats(limit=get_settings().RECENT_STATS_LIMIT)],
        summary=TrainingSummaryRead.model_validate(summary),
    )

@router.post("/stats", response_model=StatLogged, status_code=status.HTTP_201_CREATED)
def log_stat(payload: StatCreate, db: Session = Depends(get_db), current: User = Depends(athlete_only)):
    repo = AthleteRepository(db, current.id)
    estimate = estimate_for_max(payload.weight, payload.reps)
    entry = repo.add_stat(
        visible_name=payload.exercise_name,
        weight=payload.weight,
        reps=payload.reps,
        on=payload.date or calendar.today(),
        exercise_id=payload.exercise_id,
    )
    is_pr = repo.raise_max(MaxCandidate(payload.exercise_id, payload.exercise_name, estimate))
    db.commit()
    db.refresh(entry)
    return StatLogged(
        stat=StatRead.model_validate(entry),
        estimated_one_rep_max=estimate,
        is_pr=is_pr,
        message="New personal record!" if is_pr else "Stat logged successfully",
    )

# Workout logs

@router.get("/workout-log/{day}", response_model=ReconciledLog)
def reconciled_log(day: str, db: Session = Depends(get_db), current: User = Depends(athlete_only)):
    target = calendar.parse_day(day)
    program, workout = _workout_on(db, current, target)
    row = WorkoutLogRepository(db, current.id).get(target)
    saved = WorkoutLogRead.model_validate(row) if row is not None else None

    logged = saved.exercises if saved else []
    if workout is not None:
        maxes = AthleteRepository(db, current.id).list_maxes()
        exercises = merge_with_existing_log(workout.exercises, logged, maxes)
    else:
        exercises = logged
    exercises, is_completed = finalize_exercises(exercises)

    return ReconciledLog(
        date=target,
        saved=saved is not None,
        workout_program_id=program.id if program else (saved.workout_program_id if saved else None),
        program_name=program.program_name if program else None,
        title=workout.title if workout else None,
        exercises=exercises,
        is_completed=is_completed,
        completed_at=saved.completed_at if saved and is_completed else None,
        notes=saved.notes if saved else None,
    )

@router.put("/workout-log/{day}", response_model=WorkoutLogRead)
def save_log(
    day: str,
    payload: WorkoutLogSave,
    db: Session = Depends(get_db),
    current: User = Depends(athlete_only),
):
    target = calendar.parse_day(day)
    program_id = payload.workout_program_id
    if program_id is None:
        program, _ = _workout_on(db, current, target)
        program_id = program.id if program else None

    row = WorkoutLogRepository(db, current.id).save(
        target, payload.exercises, workout_program_id=program_id, notes=payload.notes,
    )
    AthleteRepository(db, current.id).raise_maxes(candidates_from_exercises(payload.exercises))
    return row

@router.get("/workout-logs", response_model=list[WorkoutLogHistory])
def my_logs(
    db: Session = Depends(get_db),
    current: User = Depends(athlete_only),
    start_date: str | None = Query(None),
    end_date: str | None = Query(None),
):
    rows = WorkoutLogRepository(db, current.id).list_range(
        start=calendar.parse_day(start_date) if start_date else None,
        end=calendar.parse_day(end_date) if end_date else None,
        limit=get_settings().LOG_LIST_LIMIT,
    )
    return [history_view(r) for r in rows]
