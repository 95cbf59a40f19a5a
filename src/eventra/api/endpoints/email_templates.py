"""Email template endpoints"""
from typing import Optional
from fastapi import APIRouter, HTTPException, Query

from src.eventra.api.deps import DbSession
from src.eventra.models.email_template import EmailTemplate
from src.eventra.schemas.email_template import (
    EmailTemplateCreate, EmailTemplateResponse, EmailTemplateDetailResponse, EmailTemplateListResponse,
    TemplateSubjectResponse, TemplateBlockResponse, TemplateCtaResponse
)
from src.eventra.services.email_assistant import template_variables
from src.eventra.services.email_templates import get_templates, create_template

router = APIRouter(prefix="/api/email-templates", tags=["Email Templates"])


def template_to_detail(template: EmailTemplate) -> EmailTemplateDetailResponse:
    return EmailTemplateDetailResponse(
        **EmailTemplateResponse.model_validate(template).model_dump(),
        subjects=[TemplateSubjectResponse.model_validate(s) for s in template.subjects],
        blocks=[TemplateBlockResponse.model_validate(b) for b in template.blocks],
        ctas=[TemplateCtaResponse.model_validate(c) for c in template.ctas],
        variables=template_variables(template),
    )


@router.get("", response_model=EmailTemplateListResponse)
def list_templates(
    db: DbSession,
    status: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0)
):
    templates = get_templates(db, status=status, category=category, limit=limit, offset=offset)
    return EmailTemplateListResponse(
        templates=[EmailTemplateResponse.model_validate(t) for t in templates],
        total=len(templates)
    )


@router.post("", response_model=EmailTemplateDetailResponse, status_code=201)
def create_new_template(db: DbSession, data: EmailTemplateCreate):
    fields = data.model_dump()
    template = create_template(
        db,
        subjects=fields.pop("subjects"),
        blocks=fields.pop("blocks"),
        ctas=fields.pop("ctas"),
        **fields
    )
    db.commit()
    db.refresh(template)
    return template_to_detail(template)


@router.get("/{template_id}", response_model=EmailTemplateDetailResponse)
def get_template(db: DbSession, template_id: str):
    template = db.get(EmailTemplate, template_id)
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    return template_to_detail(template)
