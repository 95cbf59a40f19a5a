"""AIUsage model - one row per completion request for cost and rate tracking"""
import enum
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Integer, Float, Text, DateTime, JSON, Index, func
from sqlalchemy.orm import Mapped, mapped_column

from src.eventra.models.base import Base, new_id


class AIFeature(str, enum.Enum):
    LEAD_SCORING = "lead_scoring"
    LEAD_SUMMARY = "lead_summary"
    LEAD_QUALIFICATION = "lead_qualification"
    CONTENT_GENERATION = "content_generation"
    TASK_SUGGESTIONS = "task_suggestions"
    TASK_PREDICTION = "task_prediction"
    EMAIL_ASSISTANT = "email_assistant"
    EVENT_INSIGHTS = "event_insights"


class UsageStatus(str, enum.Enum):
    SUCCESS = "success"
    ERROR = "error"
    RATE_LIMITED = "rate_limited"


class AIUsage(Base):
    __tablename__ = "ai_usage"
    __table_args__ = (
        Index("ix_ai_usage_user_created", "user_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    feature: Mapped[str] = mapped_column(String(50), nullable=False)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    prompt_tokens: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    completion_tokens: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_tokens: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    estimated_cost: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    request_data: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    response_time_ms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    error_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
