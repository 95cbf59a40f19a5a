"""Email assistant - drafts, subject lines and template recommendations"""
import logging
import re
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.eventra.models.ai_usage import AIFeature
from src.eventra.models.email_template import EmailTemplate, TemplateStatus
from src.eventra.models.event import Event
from src.eventra.models.lead_activity import ActivityType
from src.eventra.services import prompts
from src.eventra.services.ai_json import extract_json_object, as_int, as_list, as_choice, as_str
from src.eventra.services.company_context import build_system_prompt
from src.eventra.services.errors import EntityNotFoundError
from src.eventra.services.insights import as_utc
from src.eventra.services.lead_activity import log_activity, count_recent_contacts
from src.eventra.services.lead_intelligence import get_lead
from src.eventra.services.llm import LLMClient
from src.eventra.services.scoring import effective_lead_score

logger = logging.getLogger(__name__)

VARIABLE_PATTERN = re.compile(r"\{\{([^}]+)\}\}")

MAX_RECOMMENDED_TEMPLATES = 3
FALLBACK_TEMPLATE_SCORE = 70
LEGACY_TEMPLATE_SCORE = 90


def extract_variables(text: Optional[str]) -> list[str]:
    """Unique placeholder names in order of first appearance."""
    if not text:
        return []
    names = [m.strip() for m in VARIABLE_PATTERN.findall(text)]
    return list(dict.fromkeys(n for n in names if n))


def fill_variables(text: str, values: dict[str, str]) -> str:
    def replace(match: re.Match) -> str:
        name = match.group(1).strip()
        if name in values and values[name] is not None:
            return str(values[name])
        return match.group(0)

    return VARIABLE_PATTERN.sub(replace, text)


def template_variables(template: EmailTemplate) -> list[str]:
    names: list[str] = []
    for block in template.blocks:
        names.extend(extract_variables(block.content))
    for subject in template.subjects:
        names.extend(extract_variables(subject.subject))
    return list(dict.fromkeys(names))


def get_template(db: Session, template_id: str) -> EmailTemplate:
    template = db.get(EmailTemplate, template_id)
    if not template:
        raise EntityNotFoundError("Template")
    return template


def _lead_event(db: Session, event_id: Optional[str]) -> Optional[Event]:
    return db.get(Event, event_id) if event_id else None


def generate_email_draft(
    db: Session,
    llm: LLMClient,
    lead_id: str,
    template_id: str,
    tone: Optional[str] = None,
    language: Optional[str] = None,
    personalization_points: Optional[list[str]] = None,
    user_id: Optional[str] = None,
) -> dict:
    lead = get_lead(db, lead_id)
    template = get_template(db, template_id)
    event = _lead_event(db, lead.event_id)

    tone = tone or template.tone or "professional"
    language = language or "English"
    variables = template_variables(template)

    result = llm.generate_chat_completion(
        db,
        prompt=prompts.render_prompt(
            prompts.EMAIL_DRAFT_PROMPT,
            lead=lead,
            event=event,
            template=template,
            lead_score=effective_lead_score(lead),
            tone=tone,
            language=language,
            variables=variables,
            personalization_points=personalization_points or [],
        ),
        system=build_system_prompt(db, user_id, prompts.EMAIL_DRAFT_SYSTEM),
        feature=AIFeature.EMAIL_ASSISTANT.value,
        max_tokens=1500,
        temperature=0.8,
        user_id=user_id,
        request_data={"leadId": lead_id, "templateId": template_id},
        json_mode=True,
    )
    draft = extract_json_object(result.content)

    filled = draft.get("variables") if isinstance(draft.get("variables"), dict) else {}
    subject = fill_variables(str(draft.get("subject") or ""), filled)
    body = fill_variables(str(draft.get("body") or ""), filled)

    template.usage_count = (template.usage_count or 0) + 1
    log_activity(db, lead_id, ActivityType.EMAIL_DRAFTED, {
        "template_id": template.id,
        "template_name": template.name,
        "tone": tone,
        "language": language,
        "tokens_used": result.usage.total_tokens,
        "subject_length": len(subject),
        "body_length": len(body),
    })
    logger.info(f"Email drafted: lead_id={lead_id}, template_id={template_id}")

    return {
        "subject": subject,
        "body": body,
        "variables": filled,
        "selectedCta": as_str(draft.get("selectedCta"), None),
        "metadata": {
            "templateName": template.name,
            "templateGoal": template.goal,
            "tone": tone,
            "language": language,
            "leadName": lead.full_name,
            "leadCompany": lead.company,
            "tokensUsed": result.usage.total_tokens,
        },
    }


def _subject_line(item) -> Optional[dict]:
    if isinstance(item, str):
        item = {"text": item}
    if not isinstance(item, dict):
        return None
    text = str(item.get("text") or "").strip()
    if not text:
        return None
    return {
        "text": text,
        "tone": as_str(item.get("tone"), "professional"),
        "length": len(text),
        "approach": as_str(item.get("approach")),
    }


def generate_subject_lines(
    db: Session,
    llm: LLMClient,
    lead_id: str,
    template_id: str,
    email_body: Optional[str] = None,
    tone: Optional[str] = None,
    count: int = 3,
    user_id: Optional[str] = None,
) -> dict:
    lead = get_lead(db, lead_id)
    template = get_template(db, template_id)
    tone = tone or template.tone

    result = llm.generate_chat_completion(
        db,
        prompt=prompts.render_prompt(
            prompts.SUBJECT_LINES_PROMPT,
            lead=lead,
            template=template,
            tone=tone,
            email_body=email_body,
            count=count,
        ),
        system=prompts.SUBJECT_LINES_SYSTEM,
        feature=AIFeature.EMAIL_ASSISTANT.value,
        max_tokens=600,
        temperature=0.8,
        user_id=user_id,
        request_data={"leadId": lead_id, "templateId": template_id, "count": count},
        json_mode=True,
    )
    data = extract_json_object(result.content)

    lines = [line for line in map(_subject_line, as_list(data.get("subjectLines"))) if line]
    return {
        "subjectLines": lines[:count],
        "metadata": {
            "tokensUsed": result.usage.total_tokens,
            "leadName": lead.full_name,
            "templateName": template.name,
        },
    }


def _days_since(value: Optional[datetime], now: datetime) -> Optional[int]:
    if value is None:
        return None
    return int((now - as_utc(value)).total_seconds() // 86400)


def _template_entry(template: EmailTemplate, score: int, reasons: list) -> dict:
    return {
        "templateId": template.id,
        "templateName": template.name,
        "score": score,
        "reasons": reasons,
        "goal": template.goal,
        "tone": template.tone,
    }


def recommend_email(
    db: Session,
    llm: LLMClient,
    lead_id: str,
    user_id: Optional[str] = None,
) -> dict:
    lead = get_lead(db, lead_id)
    event = _lead_event(db, lead.event_id)
    now = datetime.now(timezone.utc)

    contact_frequency = count_recent_contacts(db, lead_id, days=7)
    days_since_last_contact = _days_since(lead.last_contacted_at, now)
    days_since_event = _days_since(event.start_date, now) if event else None

    templates = list(db.execute(
        select(EmailTemplate)
        .where(EmailTemplate.status == TemplateStatus.ACTIVE.value)
        .order_by(EmailTemplate.name)
    ).scalars().all())
    if not templates:
        raise EntityNotFoundError(
            "Template", "No email templates found. Please create at least one template first."
        )

    lead_score = effective_lead_score(lead)
    result = llm.generate_chat_completion(
        db,
        prompt=prompts.render_prompt(
            prompts.RECOMMEND_EMAIL_PROMPT,
            lead=lead,
            event=event,
            lead_score=lead_score,
            days_since_last_contact=days_since_last_contact,
            days_since_event=days_since_event,
            contact_frequency=contact_frequency,
            templates=templates,
        ),
        system=build_system_prompt(db, user_id, prompts.RECOMMEND_EMAIL_SYSTEM),
        feature=AIFeature.EMAIL_ASSISTANT.value,
        max_tokens=1000,
        temperature=0.7,
        user_id=user_id,
        request_data={"leadId": lead_id},
        json_mode=True,
    )
    data = extract_json_object(result.content)

    by_id = {t.id: t for t in templates}
    raw_recommendations = as_list(data.get("recommendedTemplates"))
    primary_id = data.get("primaryRecommendation") or data.get("recommendedTemplateId")

    # single-template answer shape
    if not raw_recommendations and data.get("recommendedTemplateId"):
        raw_recommendations = [{
            "templateId": data["recommendedTemplateId"],
            "score": LEGACY_TEMPLATE_SCORE,
            "reasons": as_list(data.get("reasons")),
        }]

    recommendations: list[dict] = []
    for rec in raw_recommendations:
        if not isinstance(rec, dict):
            continue
        template = by_id.get(str(rec.get("templateId")))
        if template is None or any(r["templateId"] == template.id for r in recommendations):
            continue
        recommendations.append(
            _template_entry(template, as_int(rec.get("score"), 0, 0, 100), as_list(rec.get("reasons")))
        )
    recommendations = recommendations[:MAX_RECOMMENDED_TEMPLATES]

    if not recommendations:
        logger.info(f"No valid templates returned for lead_id={lead_id}, using fallback")
        recommendations = [
            _template_entry(templates[0], FALLBACK_TEMPLATE_SCORE, ["Default template selected"])
        ]

    if not isinstance(primary_id, str) or primary_id not in {r["templateId"] for r in recommendations}:
        primary_id = recommendations[0]["templateId"]

    should_send = as_choice(data.get("shouldSend"), ("yes", "wait", "no"), "wait")
    risk_flags = as_list(data.get("riskFlags"))
    top = recommendations[0]

    log_activity(db, lead_id, ActivityType.EMAIL_RECOMMENDED, {
        "should_send": should_send,
        "recommended_template_id": primary_id,
        "recommended_template_name": top["templateName"],
        "recommended_templates": recommendations,
        "reasons": top["reasons"],
        "risk_flags": risk_flags,
        "lead_score": lead_score,
        "days_since_last_contact": days_since_last_contact,
        "days_since_event": days_since_event,
        "contact_frequency": contact_frequency,
    })

    return {
        "shouldSend": should_send,
        "recommendedTemplateId": primary_id,
        "recommendedTemplateName": top["templateName"],
        "reasons": top["reasons"],
        "recommendedTemplates": recommendations,
        "primaryRecommendation": primary_id,
        "riskFlags": risk_flags,
        "metadata": {
            "leadStatus": lead.status,
            "leadScore": lead_score,
            "daysSinceLastContact": days_since_last_contact,
            "daysSinceEvent": days_since_event,
            "contactFrequency": contact_frequency,
            "tokensUsed": result.usage.total_tokens,
        },
    }
