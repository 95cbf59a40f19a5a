"""Email template listing and creation"""
from typing import Optional, List
from sqlalchemy import select
from sqlalchemy.orm import Session

from src.eventra.models.email_template import (
    EmailTemplate, EmailTemplateSubject, EmailTemplateBlock, EmailTemplateCta
)


def get_templates(
    db: Session,
    status: Optional[str] = None,
    category: Optional[str] = None,
    limit: int = 100,
    offset: int = 0
) -> List[EmailTemplate]:
    query = select(EmailTemplate).order_by(EmailTemplate.updated_at.desc())

    if status:
        query = query.where(EmailTemplate.status == status)
    if category:
        query = query.where(EmailTemplate.category == category)

    query = query.limit(limit).offset(offset)
    return list(db.execute(query).scalars().all())


def create_template(
    db: Session,
    subjects: List[dict],
    blocks: List[dict],
    ctas: List[dict],
    **fields
) -> EmailTemplate:
    template = EmailTemplate(**fields)
    template.subjects = [
        EmailTemplateSubject(sort_order=i, **subject) for i, subject in enumerate(subjects)
    ]
    template.blocks = [
        EmailTemplateBlock(sort_order=i, **block) for i, block in enumerate(blocks)
    ]
    template.ctas = [EmailTemplateCta(**cta) for cta in ctas]
    db.add(template)
    db.flush()
    return template
