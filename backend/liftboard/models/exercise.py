from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, ForeignKey, String, Text, Boolean, DateTime, JSON, func, Enum as SAEnum
from liftboard.db import Base

class ExerciseCategory(str, Enum):
    upper_body = "upper_body"
    lower_body = "lower_body"
    core = "core"
    cardio = "cardio"
    olympic = "olympic"
    accessory = "accessory"

class Exercise(Base):
    __tablename__ = "exercises"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    category: Mapped[ExerciseCategory] = mapped_column(SAEnum(ExerciseCategory, name="exercise_category"), nullable=False)
    demo_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # null owner => global/built-in
    owner_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    is_global: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    applicable_sports: Mapped[list] = mapped_column(JSON, nullable=False, default=lambda: ["all"])
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())
