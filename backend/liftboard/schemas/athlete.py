from typing import Annotated
from datetime import date, datetime
from pydantic import BaseModel, Field, StringConstraints

from liftboard.schemas.program import CalendarDate

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]

class AthleteMaxRead(BaseModel):
    exercise_id: int | None = None
    exercise_name: str
    one_rep_max: float
    last_updated: datetime | None = None

    model_config = {"from_attributes": True}

class MaxUpdate(BaseModel):
    exercise_id: int | None = None
    exercise_name: NameStr
    one_rep_max: Annotated[float, Field(gt=0)]

class StatCreate(BaseModel):
    exercise_id: int | None = None
    exercise_name: NameStr
    weight: Annotated[float, Field(gt=0)]
    reps: Annotated[int, Field(ge=1, le=100)]
    date: CalendarDate | None = None

class StatRead(BaseModel):
    id: int
    visible_name: str
    weight: float
    reps: int
    date: date
    exercise_id: int | None = None

    model_config = {"from_attributes": True}

class StatLogged(BaseModel):
    stat: StatRead
    estimated_one_rep_max: float
    is_pr: bool
    message: str

class TrainingSummaryRead(BaseModel):
    workouts_completed: int
    total_sets: int
    total_volume: int
    current_streak: int

    model_config = {"from_attributes": True}

class AthleteStats(BaseModel):
    maxes: list[AthleteMaxRead]
    stats: list[StatRead]
    summary: TrainingSummaryRead
