from typing import Annotated, Any, Literal
from datetime import date, datetime
from pydantic import BaseModel, BeforeValidator, Field, StringConstraints, computed_field, field_validator, model_validator

from liftboard.services.calendar import calendar_date, day_of_week_label
from liftboard.services.one_rep_max import format_number

# Any date/datetime/ISO string, stripped to its calendar day
CalendarDate = Annotated[date, BeforeValidator(calendar_date)]
PosInt = Annotated[int, Field(ge=1)]
Percentage = Annotated[float, Field(ge=0, le=120)]
NonNegFloat = Annotated[float, Field(ge=0)]
NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]

_LEGACY_SCALARS = ("sets", "reps", "percentage", "weight")


class SetConfig(BaseModel):
    """A group of identical sets, e.g. 3 x 5 @ 75%."""
    sets: PosInt
    # a single number ("5") or a range ("8-10")
    reps: Annotated[str, Field(max_length=20)]
    percentage: Percentage | None = None
    fixed_weight: NonNegFloat | None = None

    @field_validator("reps", mode="before")
    @classmethod
    def reps_as_text(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return format_number(v)
        return v

    @field_validator("reps")
    @classmethod
    def reps_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("reps cannot be blank")
        return v2

    def summary(self, unit: str = "lbs") -> str:
        text = f"{self.sets}x{self.reps}"
        if self.percentage:
            text += f" @{format_number(self.percentage)}%"
        if self.fixed_weight:
            text += f" @{format_number(self.fixed_weight)}{unit}"
        return text


class ExercisePrescription(BaseModel):
    """
    One exercise entry within a workout day.

    ``set_configs`` is the only stored source of truth. Legacy payloads that send
    scalar ``sets``/``reps``/``percentage``/``weight`` fields without configs are
    folded into a single config on the way in, and the scalar view is derived back
    out (``sets``, ``reps``, ...) for older consumers.
    """
    exercise_id: int | None = None
    exercise_name: NameStr
    set_configs: list[SetConfig] = Field(default_factory=list)
    notes: Annotated[str, Field(max_length=500)] | None = None
    demo_url: str | None = None
    order: int = 0

    @model_validator(mode="before")
    @classmethod
    def fold_legacy_scalars(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("set_configs"):
            return data
        if data.get("sets") in (None, "", 0):
            return data
        folded = dict(data)
        folded["set_configs"] = [{
            "sets": data.get("sets"),
            "reps": data.get("reps"),
            "percentage": data.get("percentage"),
            "fixed_weight": data.get("weight"),
        }]
        for key in _LEGACY_SCALARS:
            folded.pop(key, None)
        return folded

    @property
    def first_config(self) -> SetConfig | None:
        return self.set_configs[0] if self.set_configs else None

    @computed_field
    @property
    def sets(self) -> int:
        return sum(c.sets for c in self.set_configs)

    @computed_field
    @property
    def reps(self) -> str | None:
        return self.first_config.reps if self.first_config else None

    @computed_field
    @property
    def percentage(self) -> float | None:
        return self.first_config.percentage if self.first_config else None

    @computed_field
    @property
    def weight(self) -> float | None:
        return self.first_config.fixed_weight if self.first_config else None

    def summary(self, unit: str = "lbs") -> str:
        return ", ".join(c.summary(unit) for c in self.set_configs)

    def first_config_summary(self) -> dict[str, Any]:
        """Scalar projection: total sets plus the first config's reps/percentage/weight."""
        return {"sets": self.sets, "reps": self.reps, "percentage": self.percentage, "weight": self.weight}


class WorkoutDay(BaseModel):
    date: CalendarDate
    # always derived from ``date``
    day_of_week: str = ""
    title: Annotated[str, Field(max_length=100)] | None = None
    exercises: list[ExercisePrescription] = Field(default_factory=list)

    @model_validator(mode="after")
    def label_from_date(self) -> "WorkoutDay":
        self.day_of_week = day_of_week_label(self.date)
        return self


class WorkoutDayWrite(BaseModel):
    """Body of an add-or-replace call; the date comes from the request."""
    date: CalendarDate | None = None
    title: Annotated[str, Field(max_length=100)] | None = None
    exercises: list[ExercisePrescription] = Field(default_factory=list)


class ProgramDocument(BaseModel):
    """A workout program with its embedded days, as the services operate on it."""
    id: int | None = None
    program_name: NameStr
    owner_id: int | None = None
    assigned_teams: list[int] = Field(default_factory=list)
    workouts: list[WorkoutDay] = Field(default_factory=list)
    start_date: CalendarDate
    end_date: CalendarDate
    is_published: bool = False
    is_draft: bool = True

    model_config = {"from_attributes": True}


class ProgramCreate(BaseModel):
    program_name: NameStr
    start_date: CalendarDate
    end_date: CalendarDate
    workouts: list[WorkoutDay] = Field(default_factory=list)
    assigned_teams: list[int] = Field(default_factory=list)
    is_published: bool = False

    @model_validator(mode="after")
    def range_ordered(self) -> "ProgramCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class ProgramUpdate(BaseModel):
    program_name: NameStr | None = None
    start_date: CalendarDate | None = None
    end_date: CalendarDate | None = None
    workouts: list[WorkoutDay] | None = None
    assigned_teams: list[int] | None = None
    is_published: bool | None = None


class ProgramRead(ProgramDocument):
    id: int
    owner_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MoveProgram(BaseModel):
    new_start_date: CalendarDate


ProgramStatus = Literal["published", "draft"]


# Per-athlete resolved views (never persisted)

class ResolvedSetConfig(SetConfig):
    target_weight: float | None = None
    display_text: str = ""


class ResolvedExercise(BaseModel):
    exercise_id: int | None = None
    exercise_name: str
    notes: str | None = None
    demo_url: str | None = None
    order: int = 0
    set_configs: list[ResolvedSetConfig] = Field(default_factory=list)
    total_sets: int = 0
    summary: str = ""
    # first config's values, for single-line displays
    calculated_weight: float | None = None
    display_text: str = ""
    one_rep_max: float | None = None
    has_one_rep_max: bool = False


class ResolvedWorkoutDay(BaseModel):
    program_id: int | None = None
    program_name: str | None = None
    date: date
    day_of_week: str
    title: str | None = None
    exercises: list[ResolvedExercise] = Field(default_factory=list)
