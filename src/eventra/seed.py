"""Seed data for local development"""
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session
from sqlalchemy import select

from src.eventra.database import SessionLocal
from src.eventra.models.user import User
from src.eventra.models.event import Event
from src.eventra.models.lead import Lead
from src.eventra.models.task import Task, TaskStatus, TaskPriority
from src.eventra.models.email_template import (
    EmailTemplate, EmailTemplateSubject, EmailTemplateBlock, EmailTemplateCta,
    TemplateCategory, TemplateGoal, BlockType, CtaType
)


def create_demo_user(db: Session) -> User:
    existing = db.execute(
        select(User).where(User.email == "demo@example.com")
    ).scalar_one_or_none()

    if existing:
        print("Demo user already exists")
        return existing

    user = User(email="demo@example.com", name="Demo User", is_active=True)
    db.add(user)
    db.commit()
    db.refresh(user)
    print(f"Created demo user: {user.email} (ID: {user.id})")
    return user


def create_demo_event(db: Session) -> Event:
    existing = db.execute(
        select(Event).where(Event.name == "Cloud Summit")
    ).scalar_one_or_none()

    if existing:
        print("Demo event already exists")
        return existing

    start = datetime.now(timezone.utc) + timedelta(days=45)
    event = Event(
        name="Cloud Summit",
        event_type="conference",
        description="Annual conference for cloud infrastructure buyers",
        start_date=start,
        end_date=start + timedelta(days=2),
        location="San Francisco, CA",
        total_budget=120000,
        target_leads=300,
        expected_attendees=1500,
    )
    db.add(event)
    db.flush()

    leads_data = [
        ("Ana", "Ruiz", "ana.ruiz@example.com", "Northwind", "VP Engineering", "hot"),
        ("Ben", "Okafor", "ben.okafor@example.com", "Contoso", "IT Manager", "warm"),
        ("Chen", "Li", "chen.li@example.com", "Fabrikam", "Analyst", "cold"),
    ]
    for first, last, email, company, title, priority in leads_data:
        db.add(Lead(
            event_id=event.id,
            first_name=first,
            last_name=last,
            email=email,
            company=company,
            job_title=title,
            priority=priority,
            source="booth",
        ))

    tasks_data = [
        ("Book venue", 40, TaskPriority.HIGH),
        ("Design booth", 25, TaskPriority.MEDIUM),
        ("Confirm speakers", 20, TaskPriority.URGENT),
        ("Send invitations", 14, TaskPriority.MEDIUM),
    ]
    for title, days_before, priority in tasks_data:
        db.add(Task(
            event_id=event.id,
            title=title,
            status=TaskStatus.PENDING.value,
            priority=priority.value,
            due_date=start - timedelta(days=days_before),
        ))

    db.commit()
    db.refresh(event)
    print(f"Created demo event: {event.name} (ID: {event.id}) with {len(leads_data)} leads")
    return event


def create_demo_template(db: Session) -> EmailTemplate:
    existing = db.execute(
        select(EmailTemplate).where(EmailTemplate.name == "Post-event follow-up")
    ).scalar_one_or_none()

    if existing:
        print("Demo template already exists")
        return existing

    template = EmailTemplate(
        name="Post-event follow-up",
        category=TemplateCategory.FOLLOW_UP.value,
        goal=TemplateGoal.BOOK_MEETING.value,
        personas=["engineering leader"],
        max_words=150,
    )
    template.subjects = [
        EmailTemplateSubject(sort_order=0, subject="Great meeting you at {{event_name}}, {{first_name}}"),
    ]
    template.blocks = [
        EmailTemplateBlock(
            block_type=BlockType.OPENING.value, sort_order=0,
            content="Hi {{first_name}}, thanks for stopping by our booth at {{event_name}}.",
            allowed_vars=["first_name", "event_name"],
        ),
        EmailTemplateBlock(
            block_type=BlockType.CTA.value, sort_order=1,
            content="Would a 20 minute call next week work for {{company}}?",
            allowed_vars=["company"],
        ),
    ]
    template.ctas = [
        EmailTemplateCta(cta_type=CtaType.BOOK_CALL.value, cta_text="Book a call"),
    ]
    db.add(template)
    db.commit()
    db.refresh(template)
    print(f"Created demo template: {template.name} (ID: {template.id})")
    return template


def run_seed():
    db = SessionLocal()
    try:
        create_demo_user(db)
        create_demo_event(db)
        create_demo_template(db)
        print("Seed completed successfully")
    finally:
        db.close()


if __name__ == "__main__":
    run_seed()
