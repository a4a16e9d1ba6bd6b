"""API routers."""

from app.routers.auth import router as auth_router
from app.routers.stats import router as stats_router

__all__ = ["auth_router", "stats_router"]
