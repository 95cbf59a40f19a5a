"""Lead schemas"""
from datetime import datetime
from typing import Optional, List, Dict, Any
from pydantic import EmailStr, Field

from src.eventra.models.lead_activity import ActivityType
from src.eventra.schemas.common import CamelModel


class LeadBase(CamelModel):
    first_name: str = ""
    last_name: str = ""
    email: EmailStr
    phone: Optional[str] = None
    company: Optional[str] = None
    job_title: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    location: Optional[str] = None
    source: Optional[str] = None
    status: str = "new"
    priority: Optional[str] = None
    lead_score: Optional[int] = Field(None, ge=0, le=100)
    budget: Optional[float] = None
    notes: Optional[str] = None
    event_id: Optional[str] = None


class LeadCreate(LeadBase):
    pass


class LeadResponse(LeadBase):
    id: str
    email: str
    metadata: Dict[str, Any] = Field(default_factory=dict, validation_alias="meta")
    last_contacted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class LeadListResponse(CamelModel):
    leads: List[LeadResponse]
    total: int


class ActivityCreate(CamelModel):
    activity_type: ActivityType
    activity_data: Dict[str, Any] = Field(default_factory=dict)


class ActivityResponse(CamelModel):
    id: str
    lead_id: str
    activity_type: str
    activity_data: Dict[str, Any]
    created_at: datetime


class LeadImportRowError(CamelModel):
    row_number: int
    errors: List[str]
    original_data: Dict[str, str]


class LeadImportResult(CamelModel):
    added: int
    updated: int
    skipped: int
    errors: List[LeadImportRowError]
    total_processed: int
