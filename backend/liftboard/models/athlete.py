import datetime as dt
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, String, Float, Date, DateTime, func
from liftboard.db import Base

class AthleteMax(Base):
    __tablename__ = "athlete_maxes"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    athlete_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    # may point at a deleted exercise; exercise_name is the source of truth
    exercise_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    exercise_name: Mapped[str] = mapped_column(String(100), nullable=False)
    one_rep_max: Mapped[float] = mapped_column(Float, nullable=False)
    last_updated: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    athlete = relationship("User", back_populates="maxes")

class AthleteStatEntry(Base):
    __tablename__ = "athlete_stats"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    athlete_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    visible_name: Mapped[str] = mapped_column(String(100), nullable=False)
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    exercise_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    athlete = relationship("User", back_populates="stats")
