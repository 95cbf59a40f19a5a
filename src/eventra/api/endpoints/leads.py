"""Lead endpoints - listing, activities and CSV export/import"""
from typing import Optional
from fastapi import APIRouter, HTTPException, Query, UploadFile, File

from src.eventra.api.deps import DbSession, csv_download
from src.eventra.models.lead import Lead
from src.eventra.models.lead_activity import ActivityType
from src.eventra.schemas.lead import (
    LeadCreate, LeadResponse, LeadListResponse, ActivityCreate, ActivityResponse, LeadImportResult
)
from src.eventra.services.csv_io import (
    export_leads_csv, import_leads_csv, decode_csv_content, lead_import_template
)
from src.eventra.services.lead_activity import log_activity
from src.eventra.services.leads import get_leads, create_lead

router = APIRouter(prefix="/api/leads", tags=["Leads"])


@router.get("", response_model=LeadListResponse)
def list_leads(
    db: DbSession,
    event_id: Optional[str] = Query(None, alias="eventId"),
    priority: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0)
):
    leads = get_leads(db, event_id=event_id, priority=priority, search=search, limit=limit, offset=offset)
    return LeadListResponse(
        leads=[LeadResponse.model_validate(lead) for lead in leads],
        total=len(leads)
    )


@router.post("", response_model=LeadResponse, status_code=201)
def create_new_lead(db: DbSession, data: LeadCreate):
    lead = create_lead(db, **data.model_dump())
    db.commit()
    db.refresh(lead)
    return lead


@router.get("/export")
def export_leads(db: DbSession, event_id: Optional[str] = Query(None, alias="eventId")):
    return csv_download(export_leads_csv(db, event_id=event_id), "leads.csv")


@router.get("/import/template")
def download_import_template():
    return csv_download(lead_import_template(), "leads_import_template.csv")


@router.post("/import", response_model=LeadImportResult)
async def import_leads(
    db: DbSession,
    file: UploadFile = File(...),
    event_id: Optional[str] = Query(None, alias="eventId")
):
    if not file.filename or not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=400, detail="File must be a CSV")

    content = await file.read()
    try:
        csv_content = decode_csv_content(content)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return import_leads_csv(db, csv_content, default_event_id=event_id)


@router.get("/{lead_id}", response_model=LeadResponse)
def get_lead(db: DbSession, lead_id: str):
    lead = db.get(Lead, lead_id)
    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead


@router.post("/{lead_id}/activities", response_model=ActivityResponse, status_code=201)
def add_lead_activity(db: DbSession, lead_id: str, data: ActivityCreate):
    if not db.get(Lead, lead_id):
        raise HTTPException(status_code=404, detail="Lead not found")
    return log_activity(db, lead_id, ActivityType(data.activity_type), data.activity_data)
