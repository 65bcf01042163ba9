from liftboard.models.user import User, UserRole, AUTHOR_ROLES
from liftboard.models.team import Team
from liftboard.models.exercise import Exercise, ExerciseCategory
from liftboard.models.program import WorkoutProgram
from liftboard.models.athlete import AthleteMax, AthleteStatEntry
from liftboard.models.workout_log import WorkoutLog

__all__ = [
    "User",
    "UserRole",
    "AUTHOR_ROLES",
    "Team",
    "Exercise",
    "ExerciseCategory",
    "WorkoutProgram",
    "AthleteMax",
    "AthleteStatEntry",
    "WorkoutLog",
]
