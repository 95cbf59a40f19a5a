"""Event endpoints"""
from typing import Optional
from fastapi import APIRouter, HTTPException, Query

from src.eventra.api.deps import DbSession, csv_download
from src.eventra.schemas.event import EventCreate, EventResponse, EventListResponse
from src.eventra.services.csv_io import export_events_csv
from src.eventra.services.events import get_event_by_id, get_events, create_event

router = APIRouter(prefix="/api/events", tags=["Events"])


@router.get("", response_model=EventListResponse)
def list_events(
    db: DbSession,
    event_type: Optional[str] = Query(None, alias="eventType"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0)
):
    events = get_events(db, event_type=event_type, limit=limit, offset=offset)
    return EventListResponse(
        events=[EventResponse.model_validate(e) for e in events],
        total=len(events)
    )


@router.post("", response_model=EventResponse, status_code=201)
def create_new_event(db: DbSession, data: EventCreate):
    event = create_event(db, **data.model_dump())
    db.commit()
    db.refresh(event)
    return event


@router.get("/export")
def export_events(db: DbSession):
    return csv_download(export_events_csv(db), "events.csv")


@router.get("/{event_id}", response_model=EventResponse)
def get_event(db: DbSession, event_id: str):
    event = get_event_by_id(db, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event
