"""Pytest fixtures - in-memory database, fake completion provider and API client"""
import json
import os
from datetime import datetime, timedelta, timezone

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["AI_AUTH_MODE"] = "warn"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.eventra.database import get_db
from src.eventra.main import app
from src.eventra.models import Base, User, Event, Lead, Task
from src.eventra.models.email_template import (
    EmailTemplate, EmailTemplateSubject, EmailTemplateBlock, EmailTemplateCta
)
from src.eventra.services.llm import ChatProvider, ProviderResponse, TokenUsage, LLMClient, get_llm_client

# Create test engine BEFORE any session is opened
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSession = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    db = TestSession()
    try:
        yield db
    finally:
        db.close()


class FakeProvider(ChatProvider):
    """Returns queued responses in order; an Exception in the queue is raised instead."""

    def __init__(self):
        self.responses: list = []
        self.calls: list[dict] = []

    def queue(self, *responses):
        for response in responses:
            if isinstance(response, (dict, list)):
                response = json.dumps(response)
            self.responses.append(response)

    def complete(self, model, messages, max_tokens, temperature, json_mode=False):
        self.calls.append({
            "model": model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "json_mode": json_mode,
        })
        response = self.responses.pop(0) if self.responses else "{}"
        if isinstance(response, Exception):
            raise response
        return ProviderResponse(
            content=response,
            model=model,
            usage=TokenUsage(prompt_tokens=120, completion_tokens=80, total_tokens=200),
            finish_reason="stop",
        )


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db():
    session = TestSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def llm(provider) -> LLMClient:
    return LLMClient(provider)


@pytest.fixture
def client(llm):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_llm_client] = lambda: llm
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user(db) -> User:
    user = User(email="owner@example.com", name="Owner", is_active=True)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def event(db) -> Event:
    event = Event(
        name="Cloud Summit",
        event_type="conference",
        start_date=datetime.now(timezone.utc) + timedelta(days=30),
        location="Berlin",
        total_budget=50000,
        target_leads=200,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


@pytest.fixture
def lead(db, event) -> Lead:
    lead = Lead(
        event_id=event.id,
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        company="Analytical Engines",
        job_title="CTO",
        industry="Technology",
        priority="warm",
    )
    db.add(lead)
    db.commit()
    db.refresh(lead)
    return lead


@pytest.fixture
def make_template(db):
    def factory(name: str, status: str = "active") -> EmailTemplate:
        template = EmailTemplate(
            name=name,
            category="follow_up",
            goal="book_meeting",
            status=status,
        )
        template.subjects = [EmailTemplateSubject(sort_order=0, subject="Hi {{first_name}}")]
        template.blocks = [
            EmailTemplateBlock(
                block_type="opening", sort_order=0,
                content="Great to meet you at {{event_name}}, {{ first_name }}.",
                allowed_vars=["event_name", "first_name"],
            )
        ]
        template.ctas = [EmailTemplateCta(cta_type="book_call", cta_text="Book a call")]
        db.add(template)
        db.commit()
        db.refresh(template)
        return template
    return factory


@pytest.fixture
def make_task(db, event):
    def factory(title: str, **fields) -> Task:
        task = Task(event_id=fields.pop("event_id", event.id), title=title, **fields)
        db.add(task)
        db.commit()
        db.refresh(task)
        return task
    return factory


@pytest.fixture
def session_factory():
    return TestSession
