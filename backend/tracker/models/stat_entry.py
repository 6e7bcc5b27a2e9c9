from enum import Enum
import datetime as dt
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, Date, DateTime, String, func
from tracker.db import Base

class GameType(str, Enum):
    practice = "practice"
    scrimmage = "scrimmage"
    game = "game"

class StatEntry(Base):
    __tablename__ = "stat_entries"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    player_id: Mapped[int] = mapped_column(ForeignKey("players.id", ondelete="CASCADE"), index=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    game_type: Mapped[str] = mapped_column(String(20), nullable=False, server_default=GameType.practice.value)
    three_point_makes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    three_point_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    two_point_makes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    two_point_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    free_throw_makes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    free_throw_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    assists: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rebounds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    player = relationship("Player", back_populates="stat_entries")
