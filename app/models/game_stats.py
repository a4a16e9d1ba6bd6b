"""Per-user game statistics model."""

from sqlalchemy import Column, Float, ForeignKey, Integer, String, UniqueConstraint

from app.database import Base

GAME_TYPES = ("matematica", "computacao", "portugues", "historia")


class GameStats(Base):
    """Accumulated play time and scores for one user in one game."""

    __tablename__ = "game_stats"
    __table_args__ = (UniqueConstraint("user_id", "game_type", name="uq_game_stats_user_game"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    game_type = Column(String(32), nullable=False)
    total_hours = Column(Float, nullable=False, default=0.0)
    high_score = Column(Integer, nullable=False, default=0)
    total_score = Column(Integer, nullable=False, default=0)
