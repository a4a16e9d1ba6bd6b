"""Game statistics service."""

import logging
import math
import re

from sqlalchemy.orm import Session

from app.database import store_errors
from app.exceptions import ValidationError
from app.models.game_stats import GAME_TYPES, GameStats
from app.models.user import User

logger = logging.getLogger("prof_smart")

EMPTY_RANKING_ENTRY = {"name": "---", "high_score": 0}

# Numeric prefixes accepted from loosely typed game clients, e.g. "12pts" or "0.5h"
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _to_float(value: object) -> float:
    """Leading decimal number of ``value``, or 0 when there is none."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, int):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, float):
        number = value
    else:
        match = _FLOAT_PREFIX.match(str(value))
        if not match:
            return 0.0
        number = float(match.group(1))
    return number if math.isfinite(number) else 0.0


def _to_int(value: object) -> int:
    """Leading integer of ``value`` (fractions truncated), or 0 when there is none."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    match = _INT_PREFIX.match(str(value))
    return int(match.group(1)) if match else 0


class StatsService:
    """Tracks per-user totals and high scores for each game."""

    def update_stats(self, db: Session, user_id: int, game_type: str | None, score: object, duration: object) -> None:
        """Add one play session to the user's totals for ``game_type``.

        Score and duration use their leading number; anything without one counts as 0.
        """
        if game_type not in GAME_TYPES:
            raise ValidationError("Unknown game type.")

        points = _to_int(score)
        hours = _to_float(duration)

        with store_errors(db, "Error saving stats."):
            stats = (
                db.query(GameStats)
                .filter(GameStats.user_id == user_id, GameStats.game_type == game_type)
                .first()
            )
            if not stats:
                db.add(
                    GameStats(
                        user_id=user_id,
                        game_type=game_type,
                        total_hours=hours,
                        high_score=points,
                        total_score=points,
                    )
                )
            else:
                stats.total_hours = stats.total_hours + hours
                stats.total_score = stats.total_score + points
                stats.high_score = max(stats.high_score, points)
            db.commit()
        logger.info("Stats updated for user id=%s game=%s", user_id, game_type)

    def get_user_stats(self, db: Session, user_id: int) -> dict:
        """Totals for every known game, zero-filled where the user has not played."""
        result: dict = {
            "scores": dict.fromkeys(GAME_TYPES, 0),
            "highScores": dict.fromkeys(GAME_TYPES, 0),
            "hours": dict.fromkeys(GAME_TYPES, 0.0),
        }

        with store_errors(db, "Error fetching profile."):
            rows = db.query(GameStats).filter(GameStats.user_id == user_id).all()

        for row in rows:
            if row.game_type not in GAME_TYPES:
                continue
            result["scores"][row.game_type] = row.total_score
            result["highScores"][row.game_type] = row.high_score
            result["hours"][row.game_type] = row.total_hours
        return result

    def get_ranking(self, db: Session) -> dict:
        """Top high score holder for each game."""
        ranking = {}
        with store_errors(db, "Error fetching ranking."):
            for game in GAME_TYPES:
                top = (
                    db.query(User.name, GameStats.high_score)
                    .join(User, GameStats.user_id == User.id)
                    .filter(GameStats.game_type == game)
                    .order_by(GameStats.high_score.desc())
                    .first()
                )
                if top:
                    ranking[game] = {"name": top.name, "high_score": top.high_score}
                else:
                    ranking[game] = dict(EMPTY_RANKING_ENTRY)
        return ranking


_stats_service: StatsService | None = None


def get_stats_service() -> StatsService:
    """Get singleton stats service instance."""
    global _stats_service
    if _stats_service is None:
        _stats_service = StatsService()
    return _stats_service
