"""Email template models - template header plus subjects, content blocks and CTAs"""
import enum
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Integer, Boolean, Text, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.eventra.models.base import Base, new_id


class TemplateCategory(str, enum.Enum):
    FOLLOW_UP = "follow_up"
    WARM_UP = "warm_up"
    PRODUCT_INFO = "product_info"


class TemplateGoal(str, enum.Enum):
    BOOK_MEETING = "book_meeting"
    SHARE_INFO = "share_info"
    REENGAGE = "reengage"
    QUALIFY = "qualify"


class TemplateTone(str, enum.Enum):
    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"
    CONCISE = "concise"
    TECHNICAL = "technical"


class TemplateLanguage(str, enum.Enum):
    EN = "en"
    ZH = "zh"
    BILINGUAL = "bilingual"


class TemplateStatus(str, enum.Enum):
    ACTIVE = "active"
    DISABLED = "disabled"
    ARCHIVED = "archived"


class BlockType(str, enum.Enum):
    OPENING = "opening"
    EVENT_CONTEXT = "event_context"
    VALUE_PROP = "value_prop"
    PROOF = "proof"
    CTA = "cta"
    SIGNATURE = "signature"


class CtaType(str, enum.Enum):
    BOOK_CALL = "book_call"
    REPLY = "reply"
    DOWNLOAD = "download"
    VISIT_PAGE = "visit_page"


class EmailTemplate(Base):
    __tablename__ = "email_templates"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(30), nullable=False)
    goal: Mapped[str] = mapped_column(String(30), nullable=False)
    tone: Mapped[str] = mapped_column(String(30), nullable=False, default=TemplateTone.PROFESSIONAL.value)
    language: Mapped[str] = mapped_column(String(20), nullable=False, default=TemplateLanguage.EN.value)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=TemplateStatus.ACTIVE.value)
    personas: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    max_words: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    usage_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
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

    subjects = relationship(
        "EmailTemplateSubject", back_populates="template",
        order_by="EmailTemplateSubject.sort_order", cascade="all, delete-orphan"
    )
    blocks = relationship(
        "EmailTemplateBlock", back_populates="template",
        order_by="EmailTemplateBlock.sort_order", cascade="all, delete-orphan"
    )
    ctas = relationship("EmailTemplateCta", back_populates="template", cascade="all, delete-orphan")


class EmailTemplateSubject(Base):
    __tablename__ = "email_template_subjects"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    template_id: Mapped[str] = mapped_column(String(36), ForeignKey("email_templates.id"), nullable=False, index=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    subject: Mapped[str] = mapped_column(String(500), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    template = relationship("EmailTemplate", back_populates="subjects")


class EmailTemplateBlock(Base):
    __tablename__ = "email_template_blocks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    template_id: Mapped[str] = mapped_column(String(36), ForeignKey("email_templates.id"), nullable=False, index=True)
    block_type: Mapped[str] = mapped_column(String(30), nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    allowed_vars: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    ai_guidance: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    template = relationship("EmailTemplate", back_populates="blocks")


class EmailTemplateCta(Base):
    __tablename__ = "email_template_ctas"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    template_id: Mapped[str] = mapped_column(String(36), ForeignKey("email_templates.id"), nullable=False, index=True)
    cta_type: Mapped[str] = mapped_column(String(30), nullable=False)
    cta_text: Mapped[str] = mapped_column(String(255), nullable=False)
    cta_url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)

    template = relationship("EmailTemplate", back_populates="ctas")
