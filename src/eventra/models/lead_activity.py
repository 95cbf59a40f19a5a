"""LeadActivity model - timeline of touches on a lead"""
import enum
from datetime import datetime
from sqlalchemy import String, DateTime, ForeignKey, JSON, Index, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.eventra.models.base import Base, new_id


class ActivityType(str, enum.Enum):
    EMAIL_RECOMMENDED = "email_recommended"
    EMAIL_DRAFTED = "email_drafted"
    EMAIL_COPIED = "email_copied"
    EMAIL_SENT = "email_sent"
    CALL_MADE = "call_made"
    MEETING_HELD = "meeting_held"
    MEETING_SCHEDULED = "meeting_scheduled"
    NOTE_ADDED = "note_added"
    STATUS_CHANGED = "status_changed"


CONTACT_ACTIVITY_TYPES = [
    ActivityType.EMAIL_SENT,
    ActivityType.EMAIL_COPIED,
    ActivityType.CALL_MADE,
    ActivityType.MEETING_HELD,
]


class LeadActivity(Base):
    __tablename__ = "lead_activities"
    __table_args__ = (
        Index("ix_lead_activities_lead_created", "lead_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    lead_id: Mapped[str] = mapped_column(String(36), ForeignKey("leads.id"), nullable=False)
    activity_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    activity_data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    lead = relationship("Lead", backref="activities")
