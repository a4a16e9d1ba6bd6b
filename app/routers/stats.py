"""Game statistics API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import CurrentUser, get_current_user
from app.schemas.auth import MessageResponse
from app.schemas.stats import RankingEntry, StatsUpdateRequest, UserStatsResponse
from app.services.stats import get_stats_service

router = APIRouter(prefix="/stats", tags=["Statistics"])


@router.post("/update", response_model=MessageResponse)
def update_stats(
    body: StatsUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Record one finished game session for the current user."""
    service = get_stats_service()
    service.update_stats(db, user.user_id, body.game_type, body.score, body.duration)
    return MessageResponse(msg="Stats updated")


@router.get("/me", response_model=UserStatsResponse)
def my_stats(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserStatsResponse:
    """Totals and high scores per game for the current user."""
    service = get_stats_service()
    return UserStatsResponse(**service.get_user_stats(db, user.user_id))


@router.get("/ranking", response_model=dict[str, RankingEntry])
def ranking(db: Session = Depends(get_db)) -> dict[str, RankingEntry]:
    """Top player for each game. Public."""
    service = get_stats_service()
    return {game: RankingEntry(**entry) for game, entry in service.get_ranking(db).items()}
