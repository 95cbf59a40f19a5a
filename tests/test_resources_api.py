"""Tests for the event, lead, task, template and company intelligence endpoints"""
from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from src.eventra.models.lead import Lead


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["database"] == "connected"


class TestEvents:
    def test_create_list_get(self, client):
        response = client.post("/api/events", json={
            "name": "Data Days",
            "eventType": "workshop",
            "startDate": (datetime.now(timezone.utc) + timedelta(days=10)).isoformat(),
            "targetLeads": 40,
        })
        assert response.status_code == 201
        event_id = response.json()["id"]

        listed = client.get("/api/events", params={"eventType": "workshop"}).json()
        assert listed["total"] == 1
        assert client.get(f"/api/events/{event_id}").json()["targetLeads"] == 40

    def test_unknown_event(self, client):
        response = client.get("/api/events/missing")
        assert response.status_code == 404
        assert response.json() == {"error": "Event not found"}

    def test_name_required(self, client):
        response = client.post("/api/events", json={"eventType": "workshop"})
        assert response.status_code == 400
        assert response.json()["error"].startswith("name:")

    def test_export(self, client, event):
        response = client.get("/api/events/export")
        assert response.status_code == 200
        assert response.headers["content-disposition"] == 'attachment; filename="events.csv"'
        assert response.content.startswith(b"\xef\xbb\xbf")
        assert "Cloud Summit" in response.content.decode("utf-8-sig")


class TestLeads:
    def test_create_and_search(self, client, event):
        response = client.post("/api/leads", json={
            "firstName": "Grace",
            "lastName": "Hopper",
            "email": "grace@navy.mil",
            "company": "US Navy",
            "eventId": event.id,
        })
        assert response.status_code == 201
        assert response.json()["metadata"] == {}

        found = client.get("/api/leads", params={"search": "navy"}).json()
        assert found["total"] == 1
        assert found["leads"][0]["firstName"] == "Grace"
        assert client.get("/api/leads", params={"search": "nobody"}).json()["total"] == 0

    def test_invalid_email_rejected(self, client):
        response = client.post("/api/leads", json={"firstName": "X", "email": "not-an-email"})
        assert response.status_code == 400

    def test_priority_filter(self, client, lead):
        assert client.get("/api/leads", params={"priority": "warm"}).json()["total"] == 1
        assert client.get("/api/leads", params={"priority": "hot"}).json()["total"] == 0

    def test_activity_updates_last_contacted(self, client, lead, db):
        response = client.post(
            f"/api/leads/{lead.id}/activities",
            json={"activityType": "email_sent", "activityData": {"subject": "Hello"}},
        )
        assert response.status_code == 201
        assert response.json()["activityType"] == "email_sent"

        db.expire_all()
        assert db.get(Lead, lead.id).last_contacted_at is not None

    def test_unknown_activity_type(self, client, lead):
        response = client.post(f"/api/leads/{lead.id}/activities", json={"activityType": "carrier_pigeon"})
        assert response.status_code == 400

    def test_import_upload(self, client, event, db):
        content = "Email,Name\ngrace@navy.mil,Grace Hopper\nbroken,Nobody\n".encode("utf-8-sig")
        response = client.post(
            "/api/leads/import",
            params={"eventId": event.id},
            files={"file": ("leads.csv", content, "text/csv")},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["added"] == 1
        assert body["skipped"] == 1
        assert body["totalProcessed"] == 2
        assert body["errors"][0]["rowNumber"] == 3

        grace = db.execute(select(Lead)).scalar_one()
        assert grace.event_id == event.id
        assert grace.last_name == "Hopper"

    def test_import_requires_csv_file(self, client):
        response = client.post(
            "/api/leads/import", files={"file": ("leads.xlsx", b"data", "application/octet-stream")}
        )
        assert response.status_code == 400
        assert response.json() == {"error": "File must be a CSV"}

    def test_import_template(self, client):
        response = client.get("/api/leads/import/template")
        assert response.content.decode("utf-8-sig").startswith("first_name,last_name,email")


class TestTasks:
    def test_create_done_task_sets_completed_at(self, client, event):
        response = client.post("/api/tasks", json={
            "eventId": event.id,
            "title": "Ship swag",
            "status": "done",
            "dueDate": (datetime.now(timezone.utc) + timedelta(days=2)).isoformat(),
        })
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "done"
        assert body["priority"] == "medium"
        assert body["completedAt"] is not None

    def test_create_for_unknown_event(self, client):
        response = client.post("/api/tasks", json={"eventId": "missing", "title": "Ship swag"})
        assert response.status_code == 404

    def test_list_by_event(self, client, make_task, event):
        make_task("Book venue")
        make_task("Order badges")
        body = client.get("/api/tasks", params={"eventId": event.id}).json()
        assert body["total"] == 2
        assert {t["status"] for t in body["tasks"]} == {"pending"}

    def test_export(self, client, make_task):
        make_task("Book venue")
        text = client.get("/api/tasks/export").content.decode("utf-8-sig")
        assert text.splitlines()[0] == "title,status,priority,due_date,event,owner,description"
        assert "Book venue,pending,medium" in text


class TestEmailTemplates:
    def test_create_reports_variables(self, client):
        response = client.post("/api/email-templates", json={
            "name": "Demo recap",
            "category": "follow_up",
            "goal": "book_meeting",
            "subjects": [{"subject": "{{first_name}}, your recap"}],
            "blocks": [
                {"blockType": "opening", "content": "Thanks for visiting {{ event_name }}."},
                {"blockType": "cta", "content": "Can {{company}} spare 20 minutes?"},
            ],
            "ctas": [{"ctaType": "book_call", "ctaText": "Pick a time"}],
        })
        assert response.status_code == 201
        body = response.json()
        assert body["tone"] == "professional"
        assert [b["sortOrder"] for b in body["blocks"]] == [0, 1]
        assert body["variables"] == ["event_name", "company", "first_name"]

        fetched = client.get(f"/api/email-templates/{body['id']}").json()
        assert fetched["ctas"][0]["ctaText"] == "Pick a time"

    def test_list_by_status(self, client, make_template):
        make_template("Live")
        make_template("Old", status="archived")
        body = client.get("/api/email-templates", params={"status": "active"}).json()
        assert [t["name"] for t in body["templates"]] == ["Live"]

    def test_invalid_category(self, client):
        response = client.post("/api/email-templates", json={
            "name": "x", "category": "spam", "goal": "book_meeting",
        })
        assert response.status_code == 400


class TestCompanyIntelligence:
    def test_requires_user(self, client):
        response = client.get("/api/company-intelligence")
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_save_and_read(self, client, user):
        headers = {"X-User-Id": user.id}
        assert client.get("/api/company-intelligence", headers=headers).status_code == 404

        response = client.put("/api/company-intelligence", headers=headers, json={
            "companyDescription": "Badge scanning for trade shows",
            "primaryBusinessGoal": "pipeline",
            "icpData": {"companySizes": ["50-200"], "jobTitles": ["Head of Events"]},
        })
        assert response.status_code == 200
        body = response.json()
        assert body["isDraft"] is True
        assert body["icpData"]["companySizes"] == ["50-200"]

        client.put("/api/company-intelligence", headers=headers, json={
            "companyDescription": "Lead capture for events", "isDraft": False,
        })
        latest = client.get("/api/company-intelligence", headers=headers).json()
        assert latest["companyDescription"] == "Lead capture for events"
        assert latest["isDraft"] is False
        assert latest["primaryBusinessGoal"] is None
