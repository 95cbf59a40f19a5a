"""Database models"""
from src.eventra.models.base import Base
from src.eventra.models.user import User
from src.eventra.models.event import Event
from src.eventra.models.lead import Lead
from src.eventra.models.lead_activity import LeadActivity
from src.eventra.models.task import Task
from src.eventra.models.email_template import (
    EmailTemplate, EmailTemplateSubject, EmailTemplateBlock, EmailTemplateCta
)
from src.eventra.models.ai_insight import AIInsight
from src.eventra.models.ai_usage import AIUsage
from src.eventra.models.company_intelligence import CompanyIntelligence

__all__ = [
    "Base", "User", "Event", "Lead", "LeadActivity", "Task",
    "EmailTemplate", "EmailTemplateSubject", "EmailTemplateBlock", "EmailTemplateCta",
    "AIInsight", "AIUsage", "CompanyIntelligence",
]
