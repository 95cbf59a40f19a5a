"""Tests for the email assistant endpoints"""
from sqlalchemy import select

from src.eventra.models.email_template import EmailTemplate
from src.eventra.models.lead_activity import LeadActivity
from src.eventra.services.email_assistant import extract_variables, fill_variables


def test_extract_variables():
    text = "Hi {{first_name}}, see you at {{ event_name }}. Bye {{first_name}} {{}}"
    assert extract_variables(text) == ["first_name", "event_name"]
    assert extract_variables(None) == []


def test_fill_variables_leaves_unknown_placeholders():
    filled = fill_variables("Hi {{ first_name }} from {{company}}", {"first_name": "Ada"})
    assert filled == "Hi Ada from {{company}}"


class TestEmailDraft:
    def test_draft_fills_variables_and_logs_activity(self, client, provider, lead, make_template, db):
        template = make_template("Post-event follow-up")
        provider.queue({
            "subject": "Hi {{first_name}}",
            "body": "Great to meet you at {{event_name}}.",
            "variables": {"first_name": "Ada", "event_name": "Cloud Summit"},
            "selectedCta": "Book a call",
        })

        response = client.post(
            "/api/ai/generate-email-draft",
            json={"leadId": lead.id, "templateId": template.id, "tone": "friendly"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["subject"] == "Hi Ada"
        assert body["body"] == "Great to meet you at Cloud Summit."
        assert body["metadata"]["tone"] == "friendly"
        assert body["metadata"]["language"] == "English"
        assert body["metadata"]["leadName"] == "Ada Lovelace"

        db.expire_all()
        assert db.get(EmailTemplate, template.id).usage_count == 1
        activity = db.execute(select(LeadActivity)).scalar_one()
        assert activity.activity_type == "email_drafted"
        assert activity.activity_data["template_id"] == template.id
        assert db.get(type(lead), lead.id).last_contacted_at is None

    def test_prompt_lists_template_variables(self, client, provider, lead, make_template):
        template = make_template("Post-event follow-up")
        provider.queue({"subject": "s", "body": "b"})
        client.post("/api/ai/generate-email-draft", json={"leadId": lead.id, "templateId": template.id})

        prompt = provider.calls[0]["messages"][1]["content"]
        assert "event_name" in prompt
        assert "Ada Lovelace" in prompt

    def test_both_ids_required(self, client, lead):
        response = client.post("/api/ai/generate-email-draft", json={"leadId": lead.id})
        assert response.status_code == 400
        assert response.json() == {"error": "Lead ID and Template ID are required"}

    def test_unknown_template(self, client, provider, lead):
        response = client.post(
            "/api/ai/generate-email-draft", json={"leadId": lead.id, "templateId": "missing"}
        )
        assert response.status_code == 404
        assert response.json() == {"error": "Template not found"}


class TestSubjectLines:
    def test_lengths_and_count(self, client, provider, lead, make_template):
        template = make_template("Post-event follow-up")
        provider.queue({"subjectLines": [
            {"text": "  Quick question, Ada  ", "tone": "casual", "approach": "curiosity"},
            "Following up from Cloud Summit",
            {"text": ""},
            {"text": "One more idea", "length": 999},
        ]})

        response = client.post(
            "/api/ai/generate-subject-lines",
            json={"leadId": lead.id, "templateId": template.id, "count": 2},
        )
        assert response.status_code == 200
        lines = response.json()["subjectLines"]
        assert len(lines) == 2
        assert lines[0] == {"text": "Quick question, Ada", "tone": "casual", "length": 19, "approach": "curiosity"}
        assert lines[1]["tone"] == "professional"
        assert all(line["length"] == len(line["text"]) for line in lines)

    def test_non_text_tone_and_approach(self, client, provider, lead, make_template):
        template = make_template("Post-event follow-up")
        provider.queue({"subjectLines": [{"text": "Hello again", "tone": ["warm"], "approach": {"kind": "x"}}]})

        response = client.post(
            "/api/ai/generate-subject-lines",
            json={"leadId": lead.id, "templateId": template.id, "count": 1},
        )
        assert response.status_code == 200
        assert response.json()["subjectLines"] == [
            {"text": "Hello again", "tone": "professional", "length": 11, "approach": ""}
        ]

    def test_count_out_of_range(self, client, lead, make_template):
        template = make_template("Post-event follow-up")
        response = client.post(
            "/api/ai/generate-subject-lines",
            json={"leadId": lead.id, "templateId": template.id, "count": 20},
        )
        assert response.status_code == 400


class TestRecommendEmail:
    def test_recommendations_limited_to_active_templates(self, client, provider, lead, make_template, db):
        first = make_template("A intro")
        second = make_template("B case study")
        third = make_template("C meeting ask")
        fourth = make_template("D nurture")
        archived = make_template("E old", status="archived")
        provider.queue({
            "shouldSend": "YES",
            "recommendedTemplates": [
                {"templateId": archived.id, "score": 99, "reasons": ["old favourite"]},
                {"templateId": third.id, "score": 88, "reasons": ["Asked for a demo"]},
                {"templateId": first.id, "score": 70, "reasons": []},
                {"templateId": third.id, "score": 50, "reasons": []},
                {"templateId": second.id, "score": 60, "reasons": []},
                {"templateId": fourth.id, "score": 40, "reasons": []},
            ],
            "primaryRecommendation": "not-a-template",
            "riskFlags": ["Contacted recently"],
        })

        response = client.post("/api/ai/recommend-email", json={"leadId": lead.id})
        assert response.status_code == 200
        body = response.json()
        assert body["shouldSend"] == "yes"
        assert [r["templateId"] for r in body["recommendedTemplates"]] == [third.id, first.id, second.id]
        assert body["primaryRecommendation"] == third.id
        assert body["recommendedTemplateName"] == "C meeting ask"
        assert body["reasons"] == ["Asked for a demo"]
        assert body["riskFlags"] == ["Contacted recently"]

        activity = db.execute(select(LeadActivity)).scalar_one()
        assert activity.activity_type == "email_recommended"

    def test_fallback_to_first_template(self, client, provider, lead, make_template):
        first = make_template("A intro")
        make_template("B case study")
        provider.queue({"shouldSend": "maybe", "recommendedTemplates": [{"templateId": "hallucinated"}]})

        body = client.post("/api/ai/recommend-email", json={"leadId": lead.id}).json()
        assert body["shouldSend"] == "wait"
        assert body["recommendedTemplates"] == [{
            "templateId": first.id,
            "templateName": "A intro",
            "score": 70,
            "reasons": ["Default template selected"],
            "goal": "book_meeting",
            "tone": "professional",
        }]
        assert body["recommendedTemplateId"] == first.id

    def test_single_template_answer(self, client, provider, lead, make_template):
        make_template("A intro")
        second = make_template("B case study")
        provider.queue({"recommendedTemplateId": second.id, "reasons": ["Technical buyer"]})

        body = client.post("/api/ai/recommend-email", json={"leadId": lead.id}).json()
        assert body["recommendedTemplates"][0]["score"] == 90
        assert body["primaryRecommendation"] == second.id

    def test_no_templates(self, client, provider, lead):
        response = client.post("/api/ai/recommend-email", json={"leadId": lead.id})
        assert response.status_code == 404
        assert "create at least one template" in response.json()["error"]
        assert provider.calls == []
