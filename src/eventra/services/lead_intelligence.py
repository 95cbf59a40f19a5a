"""Lead intelligence - AI scoring, summaries and qualification"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from src.eventra.models.ai_insight import AIInsight, InsightEntityType, InsightType
from src.eventra.models.ai_usage import AIFeature
from src.eventra.models.event import Event
from src.eventra.models.lead import Lead
from src.eventra.services import prompts
from src.eventra.services.ai_json import extract_json_object, as_int, as_float, as_list, as_choice, as_str
from src.eventra.services.company_context import build_system_prompt, get_company_intelligence
from src.eventra.services.errors import EntityNotFoundError
from src.eventra.services.insights import (
    store_insight, get_insight, SCORE_TTL, SUMMARY_TTL, QUALIFICATION_TTL,
)
from src.eventra.services.lead_activity import get_recent_activities
from src.eventra.services.llm import LLMClient, TokenUsage
from src.eventra.services.scoring import effective_lead_score

logger = logging.getLogger(__name__)

AI_INTELLIGENCE_KEY = "ai_intelligence"
AI_INTELLIGENCE_VERSION = 2

QUALIFICATION_LEVELS = ("high", "medium", "low", "not_qualified")

DEFAULT_COMPANY_PROFILE = {
    "products": [
        "Event Management Platform",
        "Lead Generation Tools",
        "Marketing Automation",
        "Analytics & Reporting",
    ],
    "target_industries": [
        "Technology",
        "Professional Services",
        "Marketing & Advertising",
        "Education",
        "Healthcare",
        "Finance",
        "Manufacturing",
    ],
    "company_sizes": ["1-50", "50-200", "200-1000", "1000+"],
    "pain_points": [
        "Manual event planning processes",
        "Inefficient lead tracking",
        "Lack of marketing automation",
        "Poor event ROI visibility",
        "Fragmented event tools",
    ],
}


def get_lead(db: Session, lead_id: str) -> Lead:
    lead = db.get(Lead, lead_id)
    if not lead:
        raise EntityNotFoundError("Lead")
    return lead


def update_ai_intelligence(db: Session, lead: Lead, **fields) -> dict:
    """Merge fields into the lead's versioned AI record.

    A record written under another version is discarded, not merged.
    """
    meta = dict(lead.meta or {})
    current = meta.get(AI_INTELLIGENCE_KEY)
    if not isinstance(current, dict) or current.get("version") != AI_INTELLIGENCE_VERSION:
        if current:
            logger.info(f"Replacing outdated ai_intelligence record on lead_id={lead.id}")
        current = {}

    record = {
        **current,
        **fields,
        "version": AI_INTELLIGENCE_VERSION,
        "updated_at": datetime.now(timezone.utc).isoformat(),
    }
    meta[AI_INTELLIGENCE_KEY] = record
    lead.meta = meta
    db.commit()
    return record


def score_lead(
    db: Session,
    llm: LLMClient,
    lead_id: str,
    user_id: Optional[str] = None,
) -> tuple[dict, TokenUsage]:
    lead = get_lead(db, lead_id)
    event = db.get(Event, lead.event_id) if lead.event_id else None

    result = llm.generate_chat_completion(
        db,
        prompt=prompts.render_prompt(prompts.SCORE_LEAD_PROMPT, lead=lead, event=event),
        system=prompts.SCORE_LEAD_SYSTEM,
        feature=AIFeature.LEAD_SCORING.value,
        max_tokens=1000,
        temperature=0.3,
        user_id=user_id,
        request_data={"leadId": lead_id},
        json_mode=True,
    )
    data = extract_json_object(result.content)

    content = {
        "score": as_int(data.get("score"), 0, 0, 100),
        "confidence": as_float(data.get("confidence"), 0.5),
        "reasoning": as_str(data.get("reasoning")),
        "strengths": as_list(data.get("strengths")),
        "weaknesses": as_list(data.get("weaknesses")),
        "recommendations": as_list(data.get("recommendations")),
    }

    store_insight(
        db, InsightEntityType.LEAD, lead_id, InsightType.SCORE,
        content=content,
        confidence=content["confidence"],
        metadata={"model": result.model, "tokens_used": result.usage.total_tokens},
        expires_in_hours=SCORE_TTL,
    )
    update_ai_intelligence(db, lead, score=content["score"], score_reasoning=content["reasoning"])
    return content, result.usage


def get_cached_score(db: Session, lead_id: str) -> Optional[AIInsight]:
    return get_insight(db, InsightEntityType.LEAD, lead_id, InsightType.SCORE)


def summarize_lead(
    db: Session,
    llm: LLMClient,
    lead_id: str,
    user_id: Optional[str] = None,
) -> tuple[dict, TokenUsage]:
    lead = get_lead(db, lead_id)
    activities = get_recent_activities(db, lead_id, limit=5)

    result = llm.generate_chat_completion(
        db,
        prompt=prompts.render_prompt(prompts.SUMMARIZE_LEAD_PROMPT, lead=lead, activities=activities),
        system=prompts.SUMMARIZE_LEAD_SYSTEM,
        feature=AIFeature.LEAD_SUMMARY.value,
        max_tokens=600,
        temperature=0.4,
        user_id=user_id,
        request_data={"leadId": lead_id},
        json_mode=True,
    )
    data = extract_json_object(result.content)

    content = {
        "summary": as_str(data.get("summary")),
        "keyInsights": as_list(data.get("keyInsights")),
        "nextSteps": as_list(data.get("nextSteps")),
        "sentiment": as_choice(data.get("sentiment"), ("positive", "neutral", "negative"), "neutral"),
        "urgency": as_choice(data.get("urgency"), ("high", "medium", "low"), "medium"),
    }

    store_insight(
        db, InsightEntityType.LEAD, lead_id, InsightType.SUMMARY,
        content=content,
        metadata={"model": result.model, "tokens_used": result.usage.total_tokens},
        expires_in_hours=SUMMARY_TTL,
    )
    update_ai_intelligence(
        db, lead,
        summary=content["summary"],
        key_insights=content["keyInsights"],
        next_steps=content["nextSteps"],
        sentiment=content["sentiment"],
        urgency=content["urgency"],
    )
    return content, result.usage


def get_cached_summary(db: Session, lead_id: str) -> Optional[AIInsight]:
    return get_insight(db, InsightEntityType.LEAD, lead_id, InsightType.SUMMARY)


def _company_profile(db: Session, user_id: Optional[str]) -> dict:
    profile = dict(DEFAULT_COMPANY_PROFILE)
    intel = get_company_intelligence(db, user_id)
    if intel is None:
        return profile

    icp = intel.icp_data or {}
    if intel.core_products:
        profile["products"] = intel.core_products
    if intel.target_industries:
        profile["target_industries"] = intel.target_industries
    if icp.get("companySizes"):
        profile["company_sizes"] = icp["companySizes"]
    return profile


def qualify_lead(
    db: Session,
    llm: LLMClient,
    lead_id: str,
    user_id: Optional[str] = None,
) -> tuple[dict, TokenUsage]:
    lead = get_lead(db, lead_id)

    result = llm.generate_chat_completion(
        db,
        prompt=prompts.render_prompt(
            prompts.QUALIFY_LEAD_PROMPT,
            lead=lead,
            lead_score=effective_lead_score(lead),
            profile=_company_profile(db, user_id),
        ),
        system=build_system_prompt(db, user_id, prompts.QUALIFY_LEAD_SYSTEM),
        feature=AIFeature.LEAD_QUALIFICATION.value,
        max_tokens=1200,
        temperature=0.3,
        user_id=user_id,
        request_data={"leadId": lead_id},
        json_mode=True,
    )
    data = extract_json_object(result.content)

    industry = data.get("industryMatch") if isinstance(data.get("industryMatch"), dict) else {}
    size = data.get("companySizeMatch") if isinstance(data.get("companySizeMatch"), dict) else {}

    qualification = {
        "fitScore": as_int(data.get("fitScore"), 50, 0, 100),
        "industryMatch": {
            "score": as_int(industry.get("score"), 50, 0, 100),
            "reasoning": as_str(industry.get("reasoning"), "Industry information limited"),
            "isTargetIndustry": bool(industry.get("isTargetIndustry", False)),
        },
        "companySizeMatch": {
            "score": as_int(size.get("score"), 50, 0, 100),
            "reasoning": as_str(size.get("reasoning"), "Company size information limited"),
            "appropriateForProducts": bool(size.get("appropriateForProducts", True)),
        },
        "painPoints": as_list(data.get("painPoints")),
        "opportunities": as_list(data.get("opportunities")),
        "risks": as_list(data.get("risks")),
        "recommendations": as_list(
            data.get("recommendations"), ["Gather more information about the lead"]
        ),
        "qualification": as_choice(data.get("qualification"), QUALIFICATION_LEVELS, "medium"),
        "reasoning": as_str(data.get("reasoning"), "Requires further qualification"),
    }

    store_insight(
        db, InsightEntityType.LEAD, lead_id, InsightType.QUALIFICATION,
        content=qualification,
        confidence=qualification["fitScore"] / 100,
        metadata={"model": result.model, "tokens_used": result.usage.total_tokens},
        expires_in_hours=QUALIFICATION_TTL,
    )
    update_ai_intelligence(
        db, lead,
        product_fit={
            "fit_score": qualification["fitScore"],
            "qualification": qualification["qualification"],
            "reasoning": qualification["reasoning"],
        },
    )
    return qualification, result.usage
