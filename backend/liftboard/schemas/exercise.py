from enum import Enum
from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints

from liftboard.models.exercise import ExerciseCategory

class Sport(str, Enum):
    football = "football"
    basketball = "basketball"
    soccer = "soccer"
    baseball = "baseball"
    softball = "softball"
    volleyball = "volleyball"
    track = "track"
    swimming = "swimming"
    wrestling = "wrestling"
    tennis = "tennis"
    golf = "golf"
    lacrosse = "lacrosse"
    hockey = "hockey"
    other = "other"
    all = "all"

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
DescriptionStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=1000)]

class ExerciseCreate(BaseModel):
    name: NameStr
    category: ExerciseCategory
    demo_url: str | None = None
    description: DescriptionStr | None = None
    applicable_sports: list[Sport] = Field(default_factory=lambda: [Sport.all])

class ExerciseUpdate(BaseModel):
    name: NameStr | None = None
    category: ExerciseCategory | None = None
    demo_url: str | None = None
    description: DescriptionStr | None = None
    applicable_sports: list[Sport] | None = None

class ExerciseRead(BaseModel):
    # built-ins that were never persisted have no id
    id: int | None = None
    name: str
    category: ExerciseCategory
    demo_url: str | None = None
    description: str | None = None
    owner_id: int | None = None
    is_global: bool = False
    applicable_sports: list[str] = Field(default_factory=lambda: ["all"])
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
