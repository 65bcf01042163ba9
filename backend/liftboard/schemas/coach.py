from datetime import datetime
from pydantic import BaseModel, Field

from liftboard.schemas.workout_log import WorkoutLogHistory

class TeamRef(BaseModel):
    id: int
    team_name: str

    model_config = {"from_attributes": True}

class AthleteRef(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}

class LeaderboardRow(BaseModel):
    rank: int
    athlete_id: int
    athlete_name: str
    exercise_name: str
    one_rep_max: float
    last_updated: datetime | None = None

    model_config = {"from_attributes": True}

class TeamLeaderboard(BaseModel):
    team: TeamRef
    # the requested name, else the name on the top-ranked max
    exercise_name: str | None = None
    leaderboard: list[LeaderboardRow] = Field(default_factory=list)

class TeamWorkoutLog(WorkoutLogHistory):
    athlete_name: str

class TeamWorkoutLogs(BaseModel):
    team: TeamRef
    athletes: list[AthleteRef] = Field(default_factory=list)
    workout_logs: list[TeamWorkoutLog] = Field(default_factory=list)
