from typing import Annotated
from datetime import date, datetime
from pydantic import BaseModel, Field, StringConstraints

from liftboard.schemas.program import CalendarDate

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
NonNegInt = Annotated[int, Field(ge=0)]
NonNegFloat = Annotated[float, Field(ge=0)]


class SetLog(BaseModel):
    set_number: Annotated[int, Field(ge=1)]
    # copied from the prescription at save time
    prescribed_reps: str | None = None
    prescribed_weight: float | None = None
    prescribed_percentage: float | None = None
    # filled in by the athlete
    completed_reps: NonNegInt | None = None
    completed_weight: NonNegFloat | None = None
    notes: Annotated[str, Field(max_length=500)] | None = None

    @property
    def is_completed(self) -> bool:
        return self.completed_weight is not None or self.completed_reps is not None


class ExerciseLog(BaseModel):
    exercise_id: int | None = None
    exercise_name: NameStr
    sets: list[SetLog] = Field(default_factory=list)
    notes: Annotated[str, Field(max_length=500)] | None = None
    # recomputed on every save
    total_sets_completed: int = 0


class WorkoutLogSave(BaseModel):
    exercises: list[ExerciseLog]
    workout_program_id: int | None = None
    notes: Annotated[str, Field(max_length=1000)] | None = None


class WorkoutLogRead(BaseModel):
    id: int
    athlete_id: int
    date: date
    workout_program_id: int | None = None
    exercises: list[ExerciseLog] = Field(default_factory=list)
    is_completed: bool = False
    completed_at: datetime | None = None
    notes: str | None = None

    model_config = {"from_attributes": True}


class ReconciledLog(BaseModel):
    """Prescribed vs completed view of one athlete's day."""
    date: date
    saved: bool = False
    workout_program_id: int | None = None
    program_name: str | None = None
    title: str | None = None
    exercises: list[ExerciseLog] = Field(default_factory=list)
    is_completed: bool = False
    completed_at: datetime | None = None
    notes: str | None = None


class ExerciseHistory(ExerciseLog):
    estimated_one_rep_max: int | None = None


class WorkoutLogHistory(WorkoutLogRead):
    exercises: list[ExerciseHistory] = Field(default_factory=list)


class LogRange(BaseModel):
    start_date: CalendarDate | None = None
    end_date: CalendarDate | None = None
