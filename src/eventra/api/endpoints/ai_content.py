"""AI content generation and event analysis endpoints"""
from datetime import datetime, timezone
from fastapi import APIRouter

from src.eventra.api.deps import DbSession, AICallerId, LLM, to_http_exception, require_field
from src.eventra.schemas.ai import (
    GenerateContentRequest, GenerateContentResponse, EventInsightRequest, AnalyzeEventResponse
)
from src.eventra.schemas.common import UsageInfo
from src.eventra.services.content_generation import generate_content, analyze_event_profile
from src.eventra.services.errors import AIError

router = APIRouter(prefix="/api/ai", tags=["AI Content"])


@router.post("/generate-content", response_model=GenerateContentResponse)
def generate_content_endpoint(db: DbSession, llm: LLM, caller_id: AICallerId, data: GenerateContentRequest):
    content_type = require_field(data.type, "Content type is required")
    try:
        content, usage = generate_content(
            db, llm, content_type, data.context, user_id=caller_id or data.user_id
        )
    except AIError as e:
        raise to_http_exception(e)
    return GenerateContentResponse(content=content, type=content_type, usage=UsageInfo.from_usage(usage))


@router.post("/analyze-event", response_model=AnalyzeEventResponse)
def analyze_event_endpoint(db: DbSession, llm: LLM, caller_id: AICallerId, data: EventInsightRequest):
    event_id = require_field(data.event_id, "Event ID is required")
    try:
        profile, event, usage = analyze_event_profile(db, llm, event_id, user_id=caller_id or data.user_id)
    except AIError as e:
        raise to_http_exception(e)
    return AnalyzeEventResponse(
        profile=profile,
        event_id=event["id"],
        event_name=event["name"],
        analyzed_at=datetime.now(timezone.utc),
        usage=UsageInfo.from_usage(usage),
    )
