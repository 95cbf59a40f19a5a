"""Pydantic schemas for email templates"""
from datetime import datetime
from typing import Optional, List
from pydantic import Field

from src.eventra.models.email_template import (
    TemplateCategory, TemplateGoal, TemplateTone, TemplateLanguage, TemplateStatus, BlockType, CtaType
)
from src.eventra.schemas.common import CamelModel


class TemplateSubjectIn(CamelModel):
    subject: str = Field(..., min_length=1, max_length=500)
    is_active: bool = True


class TemplateBlockIn(CamelModel):
    block_type: BlockType
    content: str = Field(..., min_length=1)
    allowed_vars: List[str] = Field(default_factory=list)
    ai_guidance: Optional[str] = None


class TemplateCtaIn(CamelModel):
    cta_type: CtaType
    cta_text: str = Field(..., min_length=1, max_length=255)
    cta_url: Optional[str] = None


class EmailTemplateCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: TemplateCategory
    goal: TemplateGoal
    tone: TemplateTone = TemplateTone.PROFESSIONAL.value
    language: TemplateLanguage = TemplateLanguage.EN.value
    status: TemplateStatus = TemplateStatus.ACTIVE.value
    personas: List[str] = Field(default_factory=list)
    max_words: Optional[int] = Field(None, ge=1)
    notes: Optional[str] = None
    subjects: List[TemplateSubjectIn] = Field(default_factory=list)
    blocks: List[TemplateBlockIn] = Field(default_factory=list)
    ctas: List[TemplateCtaIn] = Field(default_factory=list)


class TemplateSubjectResponse(CamelModel):
    id: str
    sort_order: int
    subject: str
    is_active: bool


class TemplateBlockResponse(CamelModel):
    id: str
    block_type: str
    sort_order: int
    content: str
    allowed_vars: List[str]
    ai_guidance: Optional[str] = None


class TemplateCtaResponse(CamelModel):
    id: str
    cta_type: str
    cta_text: str
    cta_url: Optional[str] = None


class EmailTemplateResponse(CamelModel):
    id: str
    name: str
    category: str
    goal: str
    tone: str
    language: str
    status: str
    personas: List[str]
    max_words: Optional[int] = None
    notes: Optional[str] = None
    usage_count: int
    created_at: datetime
    updated_at: datetime


class EmailTemplateDetailResponse(EmailTemplateResponse):
    subjects: List[TemplateSubjectResponse]
    blocks: List[TemplateBlockResponse]
    ctas: List[TemplateCtaResponse]
    variables: List[str]


class EmailTemplateListResponse(CamelModel):
    templates: List[EmailTemplateResponse]
    total: int
