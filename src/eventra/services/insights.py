"""Insight cache - one expiring row per (entity, insight type)"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from sqlalchemy import select, delete, or_
from sqlalchemy.orm import Session

from src.eventra.database import SessionLocal
from src.eventra.models.ai_insight import AIInsight, InsightEntityType, InsightType

logger = logging.getLogger(__name__)

# hours
SCORE_TTL = 24
SUMMARY_TTL = 24 * 7
QUALIFICATION_TTL = 24 * 7
RISK_ANALYSIS_TTL = 24
PREDICTION_TTL = 24
EVENT_PROFILE_TTL = 24 * 7


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; every stored value is UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def store_insight(
    db: Session,
    entity_type: InsightEntityType,
    entity_id: str,
    insight_type: InsightType,
    content: Any,
    confidence: Optional[float] = None,
    metadata: Optional[dict] = None,
    expires_in_hours: Optional[float] = None,
) -> AIInsight:
    now = datetime.now(timezone.utc)
    expires_at = now + timedelta(hours=expires_in_hours) if expires_in_hours else None

    insight = db.execute(
        select(AIInsight).where(
            AIInsight.entity_type == entity_type.value,
            AIInsight.entity_id == entity_id,
            AIInsight.insight_type == insight_type.value,
        )
    ).scalar_one_or_none()

    if insight is None:
        insight = AIInsight(
            entity_type=entity_type.value,
            entity_id=entity_id,
            insight_type=insight_type.value,
        )
        db.add(insight)

    insight.content = content
    insight.confidence = confidence
    insight.meta = dict(metadata or {})
    insight.expires_at = expires_at
    insight.created_at = now
    insight.updated_at = now

    db.commit()
    db.refresh(insight)
    logger.info(
        f"Insight stored: {entity_type.value}/{entity_id}/{insight_type.value}, "
        f"expires_at={expires_at.isoformat() if expires_at else None}"
    )
    return insight


def get_insight(
    db: Session,
    entity_type: InsightEntityType,
    entity_id: str,
    insight_type: InsightType,
) -> Optional[AIInsight]:
    now = datetime.now(timezone.utc)
    return db.execute(
        select(AIInsight).where(
            AIInsight.entity_type == entity_type.value,
            AIInsight.entity_id == entity_id,
            AIInsight.insight_type == insight_type.value,
            or_(AIInsight.expires_at.is_(None), AIInsight.expires_at > now),
        )
    ).scalar_one_or_none()


def purge_expired_insights(db: Session) -> int:
    now = datetime.now(timezone.utc)
    result = db.execute(
        delete(AIInsight).where(
            AIInsight.expires_at.is_not(None),
            AIInsight.expires_at <= now,
        ).execution_options(synchronize_session=False)
    )
    db.commit()
    return result.rowcount or 0


def run_insight_purge() -> int:
    """Scheduler entry point; owns its session."""
    db = SessionLocal()
    try:
        purged = purge_expired_insights(db)
        if purged:
            logger.info(f"Purged {purged} expired insights")
        return purged
    except Exception:
        db.rollback()
        logger.exception("Insight purge failed")
        raise
    finally:
        db.close()
