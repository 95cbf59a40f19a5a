"""CompanyIntelligence model - per-user company profile injected into AI prompts"""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Boolean, Float, Text, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import Mapped, mapped_column

from src.eventra.models.base import Base, new_id


def empty_icp() -> dict:
    return {"companySizes": [], "jobTitles": [], "industries": []}


class CompanyIntelligence(Base):
    __tablename__ = "company_intelligence"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), unique=True, nullable=False)

    company_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    core_products: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    target_industries: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    company_stage: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    compliance_requirements: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    primary_market: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    primary_business_goal: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    icp_data: Mapped[dict] = mapped_column(JSON, nullable=False, default=empty_icp)
    typical_deal_size_min: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    typical_deal_size_max: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    sales_cycle_length: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    key_differentiators: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    strategic_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    followup_style: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    risk_tolerance: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    ai_behaviors: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    tone_preference: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    is_draft: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )
