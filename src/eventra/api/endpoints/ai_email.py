"""AI email assistant endpoints"""
from fastapi import APIRouter, HTTPException

from src.eventra.api.deps import DbSession, AICallerId, LLM, to_http_exception, require_field
from src.eventra.schemas.ai import (
    EmailDraftRequest, SubjectLinesRequest, LeadInsightRequest, SubjectLinesResponse
)
from src.eventra.services.email_assistant import (
    generate_email_draft, generate_subject_lines, recommend_email
)
from src.eventra.services.errors import AIError

router = APIRouter(prefix="/api/ai", tags=["AI Email"])


@router.post("/generate-email-draft")
def generate_email_draft_endpoint(db: DbSession, llm: LLM, caller_id: AICallerId, data: EmailDraftRequest):
    if not data.lead_id or not data.template_id:
        raise HTTPException(status_code=400, detail="Lead ID and Template ID are required")
    try:
        return generate_email_draft(
            db, llm, data.lead_id, data.template_id,
            tone=data.tone,
            language=data.language,
            personalization_points=data.personalization_points,
            user_id=caller_id or data.user_id,
        )
    except AIError as e:
        raise to_http_exception(e)


@router.post("/generate-subject-lines", response_model=SubjectLinesResponse)
def generate_subject_lines_endpoint(db: DbSession, llm: LLM, caller_id: AICallerId, data: SubjectLinesRequest):
    if not data.lead_id or not data.template_id:
        raise HTTPException(status_code=400, detail="Lead ID and Template ID are required")
    try:
        return generate_subject_lines(
            db, llm, data.lead_id, data.template_id,
            email_body=data.email_body,
            tone=data.tone,
            count=data.count,
            user_id=caller_id or data.user_id,
        )
    except AIError as e:
        raise to_http_exception(e)


@router.post("/recommend-email")
def recommend_email_endpoint(db: DbSession, llm: LLM, caller_id: AICallerId, data: LeadInsightRequest):
    lead_id = require_field(data.lead_id, "Lead ID is required")
    try:
        return recommend_email(db, llm, lead_id, user_id=caller_id or data.user_id)
    except AIError as e:
        raise to_http_exception(e)
