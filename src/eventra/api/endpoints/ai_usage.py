"""AI usage statistics endpoint"""
from fastapi import APIRouter, Query

from src.eventra.api.deps import DbSession, CurrentUser
from src.eventra.schemas.ai import UsageStatsResponse
from src.eventra.services.llm import get_usage_stats

router = APIRouter(prefix="/api/ai", tags=["AI Usage"])


@router.get("/usage", response_model=UsageStatsResponse)
def get_usage_endpoint(
    db: DbSession,
    user: CurrentUser,
    days: int = Query(7, ge=1, le=365)
):
    return get_usage_stats(db, user.id, days=days)
