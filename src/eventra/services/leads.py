"""Lead listing and creation"""
from typing import Optional, List
from sqlalchemy import select, or_
from sqlalchemy.orm import Session

from src.eventra.models.lead import Lead


def get_leads(
    db: Session,
    event_id: Optional[str] = None,
    priority: Optional[str] = None,
    search: Optional[str] = None,
    limit: int = 100,
    offset: int = 0
) -> List[Lead]:
    query = select(Lead).order_by(Lead.created_at.desc())

    if event_id:
        query = query.where(Lead.event_id == event_id)
    if priority:
        query = query.where(Lead.priority == priority)
    if search:
        pattern = f"%{search}%"
        query = query.where(or_(
            Lead.first_name.ilike(pattern),
            Lead.last_name.ilike(pattern),
            Lead.email.ilike(pattern),
            Lead.company.ilike(pattern),
        ))

    query = query.limit(limit).offset(offset)
    return list(db.execute(query).scalars().all())


def create_lead(db: Session, **fields) -> Lead:
    lead = Lead(**fields)
    db.add(lead)
    db.flush()
    return lead
