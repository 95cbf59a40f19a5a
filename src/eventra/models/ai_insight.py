"""AIInsight model - cached, expiring LLM results keyed by entity and insight kind"""
import enum
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Float, DateTime, JSON, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from src.eventra.models.base import Base, new_id


class InsightEntityType(str, enum.Enum):
    LEAD = "lead"
    EVENT = "event"
    TASK = "task"


class InsightType(str, enum.Enum):
    SCORE = "score"
    SUMMARY = "summary"
    QUALIFICATION = "qualification"
    RECOMMENDATION = "recommendation"
    PREDICTION = "prediction"
    RISK_ANALYSIS = "risk_analysis"
    EVENT_PROFILE = "event_profile"


class AIInsight(Base):
    __tablename__ = "ai_insights"
    __table_args__ = (
        UniqueConstraint("entity_type", "entity_id", "insight_type", name="uq_ai_insights_entity_insight"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    entity_type: Mapped[str] = mapped_column(String(20), nullable=False)
    entity_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    insight_type: Mapped[str] = mapped_column(String(30), nullable=False)
    content: Mapped[dict] = mapped_column(JSON, nullable=False)
    confidence: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    meta: Mapped[dict] = mapped_column("metadata", JSON, nullable=False, default=dict)
    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True, index=True)
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
