from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from liftboard.db import get_db
from liftboard.errors import AuthorizationError, NotFoundError, ValidationError
from liftboard.models import Team, User, UserRole
from liftboard.schemas.athlete import AthleteMaxRead, MaxUpdate
from liftboard.schemas.coach import AthleteRef, LeaderboardRow, TeamLeaderboard, TeamRef, TeamWorkoutLog, TeamWorkoutLogs
from liftboard.schemas.user import UserRead
from liftboard.schemas.workout_log import WorkoutLogHistory
from liftboard.repositories.athlete_repo import AthleteRepository
from liftboard.repositories.log_repo import WorkoutLogRepository
from liftboard.repositories.team_repo import TeamRepository
from liftboard.repositories.user_repo import UserRepository
from liftboard.services.calendar import parse_day
from liftboard.services.matching import ExerciseKey
from liftboard.services.maxes import rank_athletes
from liftboard.services.reconciler import history_view
from liftboard.settings import get_settings
from liftboard.deps.auth import require_role

router = APIRouter(prefix="/coach", tags=["coach"])

coach_only = require_role(UserRole.coach)

def _team_ids(db: Session, coach: User) -> list[int]:
    return [t.id for t in TeamRepository(db).list_for_coach(coach.id)]

def _coached_athlete(db: Session, coach: User, athlete_id: int) -> User:
    athlete = UserRepository(db).get_athlete(athlete_id)
    if athlete is None:
        raise NotFoundError("Athlete not found")
    if athlete.team_id is None or athlete.team_id not in _team_ids(db, coach):
        raise AuthorizationError("Not authorized to view this athlete")
    return athlete

@router.get("/athletes", response_model=list[UserRead])
def my_athletes(db: Session = Depends(get_db), current: User = Depends(coach_only)):
    return UserRepository(db).list_athletes_on_teams(_team_ids(db, current))

@router.get("/athletes/{athlete_id}/workout-logs", response_model=list[WorkoutLogHistory])
def athlete_logs(
    athlete_id: int,
    db: Session = Depends(get_db),
    current: User = Depends(coach_only),
    start_date: str | None = Query(None),
    end_date: str | None = Query(None),
):
    athlete = _coached_athlete(db, current, athlete_id)
    rows = WorkoutLogRepository(db, athlete.id).list_range(
        start=parse_day(start_date) if start_date else None,
        end=parse_day(end_date) if end_date else None,
        limit=get_settings().LOG_LIST_LIMIT,
    )
    return [history_view(r) for r in rows]

@router.get("/athletes/{athlete_id}/maxes", response_model=list[AthleteMaxRead])
def athlete_maxes(athlete_id: int, db: Session = Depends(get_db), current: User = Depends(coach_only)):
    athlete = _coached_athlete(db, current, athlete_id)
    return AthleteRepository(db, athlete.id).list_maxes()

@router.put("/athletes/{athlete_id}/maxes", response_model=AthleteMaxRead)
def set_athlete_max(
    athlete_id: int,
    payload: MaxUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(coach_only),
):
    athlete = _coached_athlete(db, current, athlete_id)
    return AthleteRepository(db, athlete.id).set_max(
        exercise_name=payload.exercise_name,
        one_rep_max=payload.one_rep_max,
        exercise_id=payload.exercise_id,
    )

# Team views

def _coached_team(db: Session, coach: User, team_id: int) -> Team:
    team = TeamRepository(db).get_for_coach(team_id, coach.id)
    if team is None:
        raise NotFoundError("Team not found")
    return team

@router.get("/teams/{team_id}/leaderboard", response_model=TeamLeaderboard)
def team_leaderboard(
    team_id: int,
    db: Session = Depends(get_db),
    current: User = Depends(coach_only),
    exercise_id: int | None = Query(None),
    exercise_name: str | None = Query(None, max_length=100),
):
    team = _coached_team(db, current, team_id)
    if exercise_id is None and not (exercise_name or "").strip():
        raise ValidationError("exercise_id or exercise_name is required")
    athletes = UserRepository(db).list_athletes_on_teams([team.id])
    maxes = AthleteRepository.maxes_by_athlete(db, [a.id for a in athletes])
    board = rank_athletes(ExerciseKey(exercise_id, exercise_name or ""), athletes, maxes)
    return TeamLeaderboard(
        team=TeamRef.model_validate(team),
        exercise_name=exercise_name or (board[0].exercise_name if board else None),
        leaderboard=[LeaderboardRow.model_validate(e) for e in board],
    )

@router.get("/teams/{team_id}/workout-logs", response_model=TeamWorkoutLogs)
def team_logs(
    team_id: int,
    db: Session = Depends(get_db),
    current: User = Depends(coach_only),
    start_date: str | None = Query(None),
    end_date: str | None = Query(None),
):
    team = _coached_team(db, current, team_id)
    athletes = UserRepository(db).list_athletes_on_teams([team.id])
    names = {a.id: a.name for a in athletes}
    rows = WorkoutLogRepository.list_for_athletes(
        db,
        list(names),
        start=parse_day(start_date) if start_date else None,
        end=parse_day(end_date) if end_date else None,
        limit=get_settings().TEAM_LOG_LIST_LIMIT,
    )
    return TeamWorkoutLogs(
        team=TeamRef.model_validate(team),
        athletes=[AthleteRef.model_validate(a) for a in athletes],
        workout_logs=[
            TeamWorkoutLog(**history_view(r).model_dump(), athlete_name=names[r.athlete_id])
            for r in rows
        ],
    )
