"""AI lead intelligence endpoints - scoring, summaries and qualification"""
from datetime import datetime, timezone
from typing import Optional
from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from src.eventra.api.deps import DbSession, AICallerId, LLM, to_http_exception, require_field
from src.eventra.schemas.ai import (
    LeadInsightRequest, ScoreLeadResponse, CachedScoreResponse,
    SummaryResponse, CachedSummaryResponse, QualifyLeadResponse
)
from src.eventra.schemas.common import UsageInfo
from src.eventra.services.errors import AIError
from src.eventra.services.lead_intelligence import (
    score_lead, get_cached_score, summarize_lead, get_cached_summary, qualify_lead, get_lead
)

router = APIRouter(prefix="/api/ai", tags=["AI Leads"])


def _not_cached(message: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={"cached": False, "message": message})


@router.post("/score-lead", response_model=ScoreLeadResponse)
def score_lead_endpoint(db: DbSession, llm: LLM, caller_id: AICallerId, data: LeadInsightRequest):
    lead_id = require_field(data.lead_id, "Lead ID is required")
    try:
        content, usage = score_lead(db, llm, lead_id, user_id=caller_id or data.user_id)
    except AIError as e:
        raise to_http_exception(e)
    return ScoreLeadResponse(**content, usage=UsageInfo.from_usage(usage))


@router.get("/score-lead", response_model=CachedScoreResponse)
def get_cached_score_endpoint(db: DbSession, lead_id: Optional[str] = Query(None, alias="leadId")):
    require_field(lead_id, "Lead ID is required")
    insight = get_cached_score(db, lead_id)
    if not insight:
        return _not_cached("No cached score found")
    return CachedScoreResponse(
        **insight.content,
        created_at=insight.created_at,
        expires_at=insight.expires_at,
    )


@router.post("/summarize-lead", response_model=SummaryResponse)
def summarize_lead_endpoint(db: DbSession, llm: LLM, caller_id: AICallerId, data: LeadInsightRequest):
    lead_id = require_field(data.lead_id, "Lead ID is required")
    try:
        content, usage = summarize_lead(db, llm, lead_id, user_id=caller_id or data.user_id)
    except AIError as e:
        raise to_http_exception(e)
    return SummaryResponse(**content, usage=UsageInfo.from_usage(usage))


@router.get("/summarize-lead", response_model=CachedSummaryResponse)
def get_cached_summary_endpoint(db: DbSession, lead_id: Optional[str] = Query(None, alias="leadId")):
    require_field(lead_id, "Lead ID is required")
    insight = get_cached_summary(db, lead_id)
    if not insight:
        return _not_cached("No cached summary found")
    return CachedSummaryResponse(
        **insight.content,
        created_at=insight.created_at,
        expires_at=insight.expires_at,
    )


@router.post("/qualify-lead", response_model=QualifyLeadResponse)
def qualify_lead_endpoint(db: DbSession, llm: LLM, caller_id: AICallerId, data: LeadInsightRequest):
    lead_id = require_field(data.lead_id, "Lead ID is required")
    try:
        qualification, usage = qualify_lead(db, llm, lead_id, user_id=caller_id or data.user_id)
        lead = get_lead(db, lead_id)
    except AIError as e:
        raise to_http_exception(e)
    return QualifyLeadResponse(
        qualification=qualification,
        lead_id=lead.id,
        lead_name=lead.full_name,
        analyzed_at=datetime.now(timezone.utc),
        usage=UsageInfo.from_usage(usage),
    )
