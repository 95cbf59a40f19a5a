"""Company intelligence context injected into AI system prompts"""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.eventra.models.company_intelligence import CompanyIntelligence

logger = logging.getLogger(__name__)

DEFAULT_BASE_PROMPT = (
    "You are a revenue operations assistant. Provide actionable recommendations "
    "based on the company's goals and strategy."
)

GOAL_LABELS = {
    "brand_awareness": "Brand Awareness",
    "pipeline": "Pipeline Generation",
    "revenue": "Revenue / Deal Closing",
    "partnership": "Partnership / Channel",
}


def get_company_intelligence(db: Session, user_id: Optional[str]) -> Optional[CompanyIntelligence]:
    if not user_id:
        return None
    return db.execute(
        select(CompanyIntelligence).where(CompanyIntelligence.user_id == user_id)
    ).scalar_one_or_none()


def _fmt_money(value: Optional[float], fallback: str) -> str:
    if value is None:
        return fallback
    return f"${value:,.0f}"


def format_company_context_prompt(intel: Optional[CompanyIntelligence]) -> str:
    if intel is None:
        return ""

    icp = intel.icp_data or {}
    parts: list[str] = []

    if intel.company_description:
        parts.append(f"Company: {intel.company_description}")
    if intel.core_products:
        parts.append(f"Products/Services: {', '.join(intel.core_products)}")
    if intel.target_industries:
        parts.append(f"Target Industries: {', '.join(intel.target_industries)}")
    if intel.company_stage:
        parts.append(f"Company Stage: {intel.company_stage}")
    if intel.primary_market:
        parts.append(f"Primary Market: {intel.primary_market}")
    if intel.compliance_requirements:
        parts.append(f"Compliance Requirements: {', '.join(intel.compliance_requirements)}")

    if intel.primary_business_goal:
        label = GOAL_LABELS.get(intel.primary_business_goal, intel.primary_business_goal)
        parts.append(f"Primary Business Goal: {label}")
    if icp.get("companySizes"):
        parts.append(f"ICP Company Sizes: {', '.join(icp['companySizes'])}")
    if icp.get("jobTitles"):
        parts.append(f"ICP Job Titles: {', '.join(icp['jobTitles'])}")
    if icp.get("industries"):
        parts.append(f"ICP Industries: {', '.join(icp['industries'])}")
    if intel.typical_deal_size_min or intel.typical_deal_size_max:
        low = _fmt_money(intel.typical_deal_size_min, "$0")
        high = _fmt_money(intel.typical_deal_size_max, "no upper limit")
        parts.append(f"Typical Deal Size: {low} - {high}")
    if intel.sales_cycle_length:
        parts.append(f"Sales Cycle: {intel.sales_cycle_length}")
    if intel.key_differentiators:
        parts.append(f"Key Differentiators: {', '.join(intel.key_differentiators)}")
    if intel.strategic_notes:
        parts.append(f"Strategic Notes: {intel.strategic_notes}")

    if intel.followup_style:
        parts.append(f"Follow-up Style: {intel.followup_style}")
    if intel.risk_tolerance:
        parts.append(f"Risk Tolerance: {intel.risk_tolerance}")
    if intel.tone_preference:
        parts.append(f"Tone Preference: {intel.tone_preference}")
    if intel.ai_behaviors:
        parts.append(f"AI Behaviors: {', '.join(intel.ai_behaviors)}")

    if not parts:
        return ""
    return "Company Context:\n" + "\n".join(parts)


def create_system_prompt(intel: Optional[CompanyIntelligence], base_prompt: Optional[str] = None) -> str:
    base = base_prompt or DEFAULT_BASE_PROMPT
    context = format_company_context_prompt(intel)
    if not context:
        return base

    goal = intel.primary_business_goal if intel and intel.primary_business_goal else "business"
    return (
        f"{base}\n\n{context}\n\n"
        f"Based on this context, analyze the following and provide recommendations "
        f"that align with the company's {goal} goal."
    )


def build_system_prompt(db: Session, user_id: Optional[str], base_prompt: str) -> str:
    intel = get_company_intelligence(db, user_id)
    if intel is None and user_id:
        logger.debug(f"No company intelligence for user_id={user_id}, using base prompt")
    return create_system_prompt(intel, base_prompt)


def save_company_intelligence(db: Session, user_id: str, **fields) -> CompanyIntelligence:
    """Last write wins; creates the row on first save."""
    intel = get_company_intelligence(db, user_id)
    if intel is None:
        intel = CompanyIntelligence(user_id=user_id)
        db.add(intel)

    for field, value in fields.items():
        setattr(intel, field, value)

    db.flush()
    logger.info(f"Company intelligence saved: user_id={user_id}, is_draft={intel.is_draft}")
    return intel
