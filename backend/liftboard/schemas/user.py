from typing import Annotated
from pydantic import BaseModel, EmailStr, Field, StringConstraints, field_validator, model_validator
from datetime import datetime

from liftboard.models.user import UserRole

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]

class UserBase(BaseModel):
    email: EmailStr = Field(max_length=255)
    name: NameStr

class UserRegister(UserBase):
    password: Annotated[str, Field(min_length=12, max_length=128)]
    role: UserRole = UserRole.athlete
    # athletes join a team at signup; access-code provisioning happens elsewhere
    team_id: int | None = None

    @field_validator("password")
    @classmethod
    def password_policy(cls, v: str) -> str:
        if not any(c.islower() for c in v):
            raise ValueError("password must include a lowercase letter")
        if not any(c.isupper() for c in v):
            raise ValueError("password must include an uppercase letter")
        if not any(c.isdigit() for c in v):
            raise ValueError("password must include a digit")
        if not any(not c.isalnum() for c in v):
            raise ValueError("password must include a special character")
        return v

    @model_validator(mode="after")
    def team_only_for_athletes(self) -> "UserRegister":
        if self.team_id is not None and self.role != UserRole.athlete:
            raise ValueError("only athletes join a team at registration")
        return self

class UserLogin(BaseModel):
    email: EmailStr
    password: Annotated[str, Field(min_length=1, max_length=256)]

class UserRead(UserBase):
    id: int
    role: UserRole
    team_id: int | None = None
    created_at: datetime | None = None
    model_config = {"from_attributes": True}
