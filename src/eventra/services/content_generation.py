"""Free-form content generation and event profile analysis"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from src.eventra.models.ai_insight import InsightEntityType, InsightType
from src.eventra.models.ai_usage import AIFeature
from src.eventra.services import prompts
from src.eventra.services.ai_json import extract_json_object, as_list, as_str
from src.eventra.services.company_context import build_system_prompt
from src.eventra.services.errors import AIError
from src.eventra.services.insights import store_insight, EVENT_PROFILE_TTL
from src.eventra.services.llm import LLMClient, TokenUsage
from src.eventra.services.task_intelligence import get_event

logger = logging.getLogger(__name__)

CONTENT_TYPES = tuple(prompts.CONTENT_PROMPTS.keys())


class InvalidContentTypeError(AIError):
    pass


def default_budget_breakdown() -> dict:
    return {
        "venue": {"percentage": 30, "recommendation": "Allocate for location rental and setup"},
        "marketing": {"percentage": 25, "recommendation": "Invest in promotion and advertising"},
        "catering": {"percentage": 20, "recommendation": "Provide quality food and beverages"},
        "technology": {"percentage": 10, "recommendation": "AV equipment and tech support"},
        "speakers": {"percentage": 10, "recommendation": "Expert presenters and facilitators"},
        "miscellaneous": {"percentage": 5, "recommendation": "Contingency and unexpected costs"},
    }


def default_roi_insights() -> dict:
    return {
        "expectedAttendance": {"min": 50, "max": 100},
        "leadGenerationPotential": "medium",
        "networkingValue": "medium",
        "brandAwareness": "medium",
        "estimatedROI": "150-200% based on typical event metrics",
    }


def default_target_audience() -> dict:
    return {"demographics": [], "jobRoles": [], "interests": [], "companySize": []}


def generate_content(
    db: Session,
    llm: LLMClient,
    content_type: str,
    context: Optional[dict] = None,
    user_id: Optional[str] = None,
) -> tuple[str, TokenUsage]:
    if content_type not in prompts.CONTENT_PROMPTS:
        raise InvalidContentTypeError("Invalid content type")

    context = context or {}
    system, template = prompts.CONTENT_PROMPTS[content_type]
    result = llm.generate_chat_completion(
        db,
        prompt=prompts.render_prompt(template, context=context),
        system=build_system_prompt(db, user_id, system),
        feature=AIFeature.CONTENT_GENERATION.value,
        max_tokens=800,
        temperature=0.7,
        user_id=user_id,
        request_data={"type": content_type, "context": context},
    )
    return result.content.strip(), result.usage


def _dict_or(value, fallback: dict) -> dict:
    return value if isinstance(value, dict) and value else fallback


def analyze_event_profile(
    db: Session,
    llm: LLMClient,
    event_id: str,
    user_id: Optional[str] = None,
) -> tuple[dict, dict, TokenUsage]:
    event = get_event(db, event_id)

    result = llm.generate_chat_completion(
        db,
        prompt=prompts.render_prompt(prompts.ANALYZE_EVENT_PROMPT, event=event),
        system=build_system_prompt(db, user_id, prompts.ANALYZE_EVENT_SYSTEM),
        feature=AIFeature.EVENT_INSIGHTS.value,
        max_tokens=2000,
        temperature=0.4,
        user_id=user_id,
        request_data={"eventId": event_id},
        json_mode=True,
    )
    data = extract_json_object(result.content)

    profile = {
        "targetAudience": _dict_or(data.get("targetAudience"), default_target_audience()),
        "suitableIndustries": as_list(data.get("suitableIndustries")),
        "budgetBreakdown": _dict_or(data.get("budgetBreakdown"), default_budget_breakdown()),
        "roiInsights": _dict_or(data.get("roiInsights"), default_roi_insights()),
        "recommendations": as_list(data.get("recommendations")),
        "summary": as_str(data.get("summary"), f"{event.event_type or 'Event'} event focused on {event.name}"),
    }

    store_insight(
        db, InsightEntityType.EVENT, event_id, InsightType.EVENT_PROFILE,
        content=profile,
        metadata={"model": result.model, "tokens_used": result.usage.total_tokens},
        expires_in_hours=EVENT_PROFILE_TTL,
    )
    return profile, {"id": event.id, "name": event.name}, result.usage
