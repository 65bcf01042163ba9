from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, DateTime, ForeignKey, func, Enum as SAEnum, Integer
from liftboard.db import Base

class UserRole(str, Enum):
    coach = "coach"
    athlete = "athlete"
    trainer = "trainer"

# roles allowed to author programs and custom exercises
AUTHOR_ROLES = (UserRole.coach.value, UserRole.trainer.value)

class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False, server_default="")
    role: Mapped[UserRole] = mapped_column(
        SAEnum(UserRole, name="user_role"),
        nullable=False,
        server_default=UserRole.athlete.value,
    )
    # athletes belong to exactly one team; coaches/trainers leave this empty
    team_id: Mapped[int | None] = mapped_column(ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    team = relationship("Team", back_populates="athletes")
    maxes = relationship("AthleteMax", back_populates="athlete", cascade="all, delete-orphan")
    stats = relationship("AthleteStatEntry", back_populates="athlete", cascade="all, delete-orphan")
