from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, String, DateTime, func
from liftboard.db import Base

class Team(Base):
    __tablename__ = "teams"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    team_name: Mapped[str] = mapped_column(String(100), nullable=False)
    sport: Mapped[str | None] = mapped_column(String(40), nullable=True)
    # users.id of the owning coach (plain column: users already references teams)
    coach_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    athletes = relationship("User", back_populates="team")
