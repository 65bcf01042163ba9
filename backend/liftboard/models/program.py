from datetime import date
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, ForeignKey, String, Boolean, Date, DateTime, JSON, func
from liftboard.db import Base

class WorkoutProgram(Base):
    """
    A coach/trainer program. Workout days (and the exercise prescriptions and set
    configs inside them) are embedded as a JSON document; see
    ``liftboard.schemas.program.ProgramDocument`` for its shape.
    """
    __tablename__ = "workout_programs"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    program_name: Mapped[str] = mapped_column(String(100), nullable=False)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    assigned_teams: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    workouts: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_draft: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
