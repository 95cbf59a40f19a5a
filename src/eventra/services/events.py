"""Event lookup and creation"""
from typing import Optional, List
from sqlalchemy import select
from sqlalchemy.orm import Session

from src.eventra.models.event import Event


def get_event_by_id(db: Session, event_id: str) -> Optional[Event]:
    return db.get(Event, event_id)


def get_events(db: Session, event_type: Optional[str] = None, limit: int = 100, offset: int = 0) -> List[Event]:
    query = select(Event).order_by(Event.start_date.desc())
    if event_type:
        query = query.where(Event.event_type == event_type)
    query = query.limit(limit).offset(offset)
    return list(db.execute(query).scalars().all())


def create_event(db: Session, **fields) -> Event:
    event = Event(**fields)
    db.add(event)
    db.flush()
    return event
