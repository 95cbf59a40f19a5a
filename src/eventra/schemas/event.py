"""Event schemas"""
from datetime import datetime
from typing import Optional, List

from src.eventra.schemas.common import CamelModel


class EventBase(CamelModel):
    name: str
    event_type: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = None
    total_budget: Optional[float] = None
    target_leads: Optional[int] = None
    actual_leads: Optional[int] = None
    expected_attendees: Optional[int] = None


class EventCreate(EventBase):
    pass


class EventResponse(EventBase):
    id: str
    created_at: datetime
    updated_at: datetime


class EventListResponse(CamelModel):
    events: List[EventResponse]
    total: int
