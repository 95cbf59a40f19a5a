"""Tests for content generation and event analysis"""
from sqlalchemy import select

from src.eventra.models.ai_insight import AIInsight
from src.eventra.models.ai_usage import AIUsage


class TestGenerateContent:
    def test_plain_text_is_returned_trimmed(self, client, provider):
        provider.queue("\n  Subject: Great meeting you\n\nHi Ada, ...  \n")
        response = client.post(
            "/api/ai/generate-content",
            json={"type": "email_followup", "context": {"leadName": "Ada", "company": "Analytical Engines"}},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["content"].startswith("Subject: Great meeting you")
        assert body["type"] == "email_followup"
        assert "Analytical Engines" in provider.calls[0]["messages"][1]["content"]
        assert provider.calls[0]["json_mode"] is False

    def test_type_required(self, client, provider):
        response = client.post("/api/ai/generate-content", json={"context": {}})
        assert response.status_code == 400
        assert response.json() == {"error": "Content type is required"}

    def test_unknown_type(self, client, provider, db):
        response = client.post("/api/ai/generate-content", json={"type": "haiku"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid content type"}
        assert provider.calls == []
        assert db.execute(select(AIUsage)).scalars().all() == []


class TestAnalyzeEvent:
    def test_missing_sections_get_defaults(self, client, provider, event, db):
        provider.queue({"suitableIndustries": ["SaaS"], "budgetBreakdown": {}})

        response = client.post("/api/ai/analyze-event", json={"eventId": event.id})
        assert response.status_code == 200
        body = response.json()
        assert body["eventName"] == "Cloud Summit"
        profile = body["profile"]
        assert profile["suitableIndustries"] == ["SaaS"]
        assert profile["budgetBreakdown"]["venue"]["percentage"] == 30
        assert profile["roiInsights"]["leadGenerationPotential"] == "medium"
        assert profile["summary"] == "conference event focused on Cloud Summit"

        insight = db.execute(select(AIInsight)).scalar_one()
        assert insight.insight_type == "event_profile"
        assert insight.expires_at is not None

    def test_unknown_event(self, client, provider):
        response = client.post("/api/ai/analyze-event", json={"eventId": "missing"})
        assert response.status_code == 404
        assert provider.calls == []
