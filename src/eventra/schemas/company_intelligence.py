"""Company intelligence schemas"""
from datetime import datetime
from typing import Optional, List
from pydantic import Field

from src.eventra.schemas.common import CamelModel


class IcpData(CamelModel):
    company_sizes: List[str] = Field(default_factory=list)
    job_titles: List[str] = Field(default_factory=list)
    industries: List[str] = Field(default_factory=list)
    budget_min: Optional[float] = None
    budget_max: Optional[float] = None


class CompanyIntelligenceBase(CamelModel):
    company_description: Optional[str] = None
    core_products: List[str] = Field(default_factory=list)
    target_industries: List[str] = Field(default_factory=list)
    company_stage: Optional[str] = None
    compliance_requirements: List[str] = Field(default_factory=list)
    primary_market: Optional[str] = None

    primary_business_goal: Optional[str] = None
    icp_data: IcpData = Field(default_factory=IcpData)
    typical_deal_size_min: Optional[float] = None
    typical_deal_size_max: Optional[float] = None
    sales_cycle_length: Optional[str] = None
    key_differentiators: List[str] = Field(default_factory=list)
    strategic_notes: Optional[str] = None

    followup_style: Optional[str] = None
    risk_tolerance: Optional[str] = None
    ai_behaviors: List[str] = Field(default_factory=list)
    tone_preference: Optional[str] = None


class CompanyIntelligenceUpdate(CompanyIntelligenceBase):
    is_draft: bool = True


class CompanyIntelligenceResponse(CompanyIntelligenceBase):
    id: str
    user_id: str
    is_draft: bool
    created_at: datetime
    updated_at: datetime
