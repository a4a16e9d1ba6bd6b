"""Pydantic schemas for game statistics endpoints."""

from pydantic import BaseModel, Field


class StatsUpdateRequest(BaseModel):
    model_config = {"populate_by_name": True}

    game_type: str | None = Field(default=None, alias="gameType")
    score: int | float | str | None = None
    duration: int | float | str | None = None


class UserStatsResponse(BaseModel):
    model_config = {"populate_by_name": True}

    scores: dict[str, int]
    high_scores: dict[str, int] = Field(alias="highScores")
    hours: dict[str, float]


class RankingEntry(BaseModel):
    name: str
    high_score: int
