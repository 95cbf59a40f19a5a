"""Tests for caller identification on AI endpoints"""
from sqlalchemy import select

from src.eventra.config import settings
from src.eventra.models.ai_usage import AIUsage
from src.eventra.models.user import User


class TestEnforcedMode:
    def test_anonymous_request_rejected(self, client, provider, lead, monkeypatch):
        monkeypatch.setattr(settings, "AI_AUTH_MODE", "enforce")
        response = client.post("/api/ai/score-lead", json={"leadId": lead.id})
        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}
        assert provider.calls == []

    def test_inactive_user_rejected(self, client, provider, lead, db, monkeypatch):
        monkeypatch.setattr(settings, "AI_AUTH_MODE", "enforce")
        inactive = User(email="gone@eventra.io", name="Gone", is_active=False)
        db.add(inactive)
        db.commit()

        response = client.post(
            "/api/ai/score-lead", headers={"X-User-Id": inactive.id}, json={"leadId": lead.id}
        )
        assert response.status_code == 401

    def test_known_user_allowed(self, client, provider, lead, user, db, monkeypatch):
        monkeypatch.setattr(settings, "AI_AUTH_MODE", "enforce")
        provider.queue({"score": 55})
        response = client.post(
            "/api/ai/score-lead", headers={"X-User-Id": user.id}, json={"leadId": lead.id}
        )
        assert response.status_code == 200
        assert db.execute(select(AIUsage)).scalar_one().user_id == user.id


def test_warn_mode_allows_anonymous(client, provider, lead, db):
    provider.queue({"score": 55})
    response = client.post("/api/ai/score-lead", json={"leadId": lead.id})
    assert response.status_code == 200
    assert db.execute(select(AIUsage)).scalar_one().user_id is None


class TestUsageEndpoint:
    def test_requires_user(self, client):
        assert client.get("/api/ai/usage").status_code == 401

    def test_reports_own_usage(self, client, provider, lead, user):
        headers = {"X-User-Id": user.id}
        provider.queue({"score": 55}, {"summary": "x"})
        client.post("/api/ai/score-lead", headers=headers, json={"leadId": lead.id})
        client.post("/api/ai/summarize-lead", headers=headers, json={"leadId": lead.id})
        client.post("/api/ai/score-lead", json={"leadId": lead.id})

        body = client.get("/api/ai/usage", headers=headers, params={"days": 30}).json()
        assert body["totalRequests"] == 2
        assert body["totalTokens"] == 400
        assert set(body["byFeature"]) == {"lead_scoring", "lead_summary"}

    def test_days_bounds(self, client, user):
        response = client.get("/api/ai/usage", headers={"X-User-Id": user.id}, params={"days": 0})
        assert response.status_code == 400
