"""Lead activity log"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from src.eventra.models.lead import Lead
from src.eventra.models.lead_activity import LeadActivity, ActivityType, CONTACT_ACTIVITY_TYPES


def log_activity(
    db: Session,
    lead_id: str,
    activity_type: ActivityType,
    data: Optional[dict] = None,
    commit: bool = True,
) -> LeadActivity:
    now = datetime.now(timezone.utc)
    activity = LeadActivity(
        lead_id=lead_id,
        activity_type=activity_type.value,
        activity_data=data or {},
        created_at=now,
    )
    db.add(activity)

    if activity_type in CONTACT_ACTIVITY_TYPES:
        lead = db.get(Lead, lead_id)
        if lead:
            lead.last_contacted_at = now

    if commit:
        db.commit()
        db.refresh(activity)
    else:
        db.flush()
    return activity


def count_recent_contacts(db: Session, lead_id: str, days: int = 7) -> int:
    since = datetime.now(timezone.utc) - timedelta(days=days)
    return db.execute(
        select(func.count(LeadActivity.id)).where(
            LeadActivity.lead_id == lead_id,
            LeadActivity.activity_type.in_([t.value for t in CONTACT_ACTIVITY_TYPES]),
            LeadActivity.created_at >= since,
        )
    ).scalar_one()


def get_recent_activities(db: Session, lead_id: str, limit: int = 5) -> list[LeadActivity]:
    return list(db.execute(
        select(LeadActivity)
        .where(LeadActivity.lead_id == lead_id)
        .order_by(LeadActivity.created_at.desc())
        .limit(limit)
    ).scalars().all())
