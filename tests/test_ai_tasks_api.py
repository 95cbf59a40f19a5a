"""Tests for task planning - risks, bottlenecks, suggestions and predictions"""
from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from src.eventra.models.ai_insight import AIInsight
from src.eventra.models.task import Task
from src.eventra.services.task_intelligence import (
    analyze_task_risks, detect_bottlenecks, get_baseline_estimate, is_duplicate_title,
    calculate_urgency, normalize_event_type,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _task(task_id: str, status: str = "pending", priority: str = "medium", due_in_days=None, dependencies=None):
    return Task(
        id=task_id,
        event_id="event-1",
        title=f"Task {task_id}",
        status=status,
        priority=priority,
        due_date=NOW + timedelta(days=due_in_days) if due_in_days is not None else None,
        dependencies=dependencies or [],
    )


class TestRiskRules:
    def test_overdue_task_is_critical(self):
        analysis = analyze_task_risks([_task("a", due_in_days=-2)], NOW + timedelta(days=30), now=NOW)

        assert analysis["criticalCount"] == 1
        assert analysis["overallRiskScore"] == 90
        risk = analysis["risks"][0]
        assert risk["riskLevel"] == "critical"
        assert risk["risks"][0]["description"] == "Task is 2 days overdue"
        assert "Immediate action required" in risk["recommendations"][0]

    def test_done_task_due_soon_is_not_a_risk(self):
        tasks = [_task("a", status="done", due_in_days=3), _task("b", due_in_days=3)]
        analysis = analyze_task_risks(tasks, NOW + timedelta(days=30), now=NOW)

        assert [r["taskId"] for r in analysis["risks"]] == ["b"]
        assert analysis["risks"][0]["riskLevel"] == "high"
        assert analysis["overallRiskScore"] == 35

    def test_many_dependencies_and_urgent_pending(self):
        task = _task("a", priority="urgent", dependencies=["x", "y", "z", "w"])
        analysis = analyze_task_risks([task], None, now=NOW)

        types = sorted(r["type"] for r in analysis["risks"][0]["risks"])
        assert types == ["complexity", "dependency"]
        assert analysis["risks"][0]["riskLevel"] == "high"

    def test_overall_score_rounds_half_up(self):
        tasks = [_task("a", due_in_days=-1), _task("b"), _task("c"), _task("d")]
        analysis = analyze_task_risks(tasks, NOW + timedelta(days=30), now=NOW)
        assert analysis["overallRiskScore"] == 23

    def test_no_tasks(self):
        assert analyze_task_risks([], NOW, now=NOW) == {"risks": [], "overallRiskScore": 0, "criticalCount": 0}


class TestBottlenecks:
    def test_blocking_task(self):
        tasks = [_task("blocker", due_in_days=1)] + [
            _task(f"t{i}", due_in_days=10 + i, dependencies=["blocker"]) for i in range(3)
        ]
        bottlenecks = detect_bottlenecks(tasks)

        assert len(bottlenecks) == 1
        assert bottlenecks[0]["type"] == "dependency"
        assert bottlenecks[0]["impact"] == "medium"
        assert sorted(bottlenecks[0]["affectedTasks"]) == ["t0", "t1", "t2"]

    def test_completed_blocker_is_ignored(self):
        tasks = [_task("blocker", status="done")] + [
            _task(f"t{i}", dependencies=["blocker"]) for i in range(5)
        ]
        assert detect_bottlenecks(tasks) == []

    def test_same_day_cluster(self):
        tasks = [_task(f"t{i}", due_in_days=5) for i in range(6)]
        bottlenecks = detect_bottlenecks(tasks)

        assert len(bottlenecks) == 1
        assert bottlenecks[0]["type"] == "time"
        assert bottlenecks[0]["impact"] == "high"


class TestHeuristics:
    def test_baseline_by_event_type_and_title(self):
        assert get_baseline_estimate("Book the venue", "conference") == 60
        assert get_baseline_estimate("Order lanyards", "conference") == 30
        assert get_baseline_estimate("Booth design", "Trade Show") == 90
        assert get_baseline_estimate("Anything", None) == 21
        assert get_baseline_estimate("Anything", "hackathon") == 21

    def test_normalize_event_type(self):
        assert normalize_event_type("Trade-Show") == "trade_show"
        assert normalize_event_type("tradeshow") == "trade_show"
        assert normalize_event_type(None) == "conference"

    def test_duplicate_titles(self):
        existing = ["Venue booking and contract negotiation"]
        assert is_duplicate_title("VENUE BOOKING AND CONTRACT NEGOTIATION", existing)
        assert is_duplicate_title("Venue booking & contract negotiation", existing)
        assert not is_duplicate_title("Speaker travel arrangements", existing)

    def test_urgency(self):
        assert calculate_urgency(None, NOW) == "low"
        assert calculate_urgency(NOW + timedelta(days=5), NOW) == "high"
        assert calculate_urgency(NOW + timedelta(days=12), NOW) == "medium"
        assert calculate_urgency(NOW + timedelta(days=40), NOW) == "low"


class TestTaskEndpoints:
    def test_analyze_risks_stores_insight(self, client, make_task, event, db):
        make_task("Print badges", due_date=datetime.now(timezone.utc) - timedelta(days=2))
        make_task("Order coffee", due_date=datetime.now(timezone.utc) + timedelta(days=20))

        response = client.post("/api/ai/analyze-risks", json={"eventId": event.id})
        assert response.status_code == 200
        body = response.json()
        assert body["totalTasks"] == 2
        assert body["criticalCount"] == 1
        assert body["overallRiskScore"] == 45

        insight = db.execute(select(AIInsight)).scalar_one()
        assert insight.insight_type == "risk_analysis"
        assert insight.entity_id == event.id

    def test_analyze_risks_requires_event(self, client):
        assert client.post("/api/ai/analyze-risks", json={}).status_code == 400
        response = client.post("/api/ai/analyze-risks", json={"eventId": "missing"})
        assert response.status_code == 404
        assert response.json() == {"error": "Event not found"}

    def test_generate_tasks_drops_duplicates(self, client, provider, make_task, event):
        make_task("Venue booking and contract negotiation")
        provider.queue({"tasks": [
            {"title": "Venue booking & contract negotiation", "priority": "high"},
            {"title": "Speaker travel arrangements", "priority": "critical", "estimated_days_before_event": -30},
            {"description": "no title"},
        ]})

        response = client.post("/api/ai/generate-tasks", json={"eventId": event.id})
        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["confidence"] == 0.85
        suggestion = body["tasks"][0]
        assert suggestion["title"] == "Speaker travel arrangements"
        assert suggestion["priority"] == "medium"
        assert suggestion["estimatedDaysBeforeEvent"] == -30
        assert suggestion["description"] == "No description provided"

    def test_generate_tasks_accepts_bare_array(self, client, provider, event):
        provider.queue('Here you go:\n[{"title": "Launch registration page"}]')
        body = client.post("/api/ai/generate-tasks", json={"eventId": event.id}).json()
        assert body["tasks"][0]["estimatedDaysBeforeEvent"] == -7

    def test_predict_completion_blends_with_baseline(self, client, provider, make_task, db):
        task = make_task("Book the venue")
        provider.queue({"estimatedDays": 10, "complexity": "HIGH", "reasoning": "Contracts take time"})

        response = client.post("/api/ai/predict-completion", json={"taskId": task.id})
        assert response.status_code == 200
        body = response.json()
        prediction = body["prediction"]
        assert prediction["estimatedDays"] == 30
        assert prediction["confidence"] == 60
        assert prediction["factors"] == {"complexity": "high", "dependencies": 0, "urgency": "low"}
        assert body["task"] == {"id": task.id, "title": "Book the venue", "status": "pending"}

        insight = db.execute(select(AIInsight)).scalar_one()
        assert insight.meta["baseline_days"] == 60
        assert insight.meta["ai_days"] == 10

    def test_predict_completion_unknown_task(self, client, provider):
        response = client.post("/api/ai/predict-completion", json={"taskId": "missing"})
        assert response.status_code == 404
        assert provider.calls == []

    def test_analyze_dependencies_filters_unknown_ids(self, client, provider, make_task, event):
        venue = make_task("Book venue")
        catering = make_task("Order catering")
        provider.queue({"dependencies": [
            {"taskId": catering.id, "dependsOn": [venue.id, "ghost", catering.id], "reasoning": "Need headcount"},
            {"taskId": "ghost", "dependsOn": [venue.id]},
            {"taskId": venue.id, "dependsOn": []},
        ]})

        response = client.post("/api/ai/analyze-dependencies", json={"eventId": event.id})
        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["dependencies"][0] == {
            "taskId": catering.id, "dependsOn": [venue.id], "reasoning": "Need headcount"
        }

    def test_analyze_dependencies_ignores_mistyped_ids(self, client, provider, make_task, event):
        venue = make_task("Book venue")
        catering = make_task("Order catering")
        provider.queue({"dependencies": [
            {"taskId": [catering.id], "dependsOn": [venue.id]},
            {"taskId": {"id": venue.id}, "dependsOn": [catering.id]},
            {"taskId": catering.id, "dependsOn": [[venue.id], {"id": venue.id}, venue.id], "reasoning": ["x"]},
        ]})

        response = client.post("/api/ai/analyze-dependencies", json={"eventId": event.id})
        assert response.status_code == 200
        assert response.json()["dependencies"] == [
            {"taskId": catering.id, "dependsOn": [venue.id], "reasoning": ""}
        ]

    def test_generate_tasks_array_after_braced_prose(self, client, provider, event):
        provider.queue('For {event} I suggest: [{"title": "Print badges", "description": 5, "category": ["ops"]}]')
        response = client.post("/api/ai/generate-tasks", json={"eventId": event.id})
        assert response.status_code == 200
        suggestion = response.json()["tasks"][0]
        assert suggestion["title"] == "Print badges"
        assert suggestion["description"] == "No description provided"
        assert suggestion["category"] is None

    def test_analyze_dependencies_without_tasks(self, client, provider, event):
        response = client.post("/api/ai/analyze-dependencies", json={"eventId": event.id})
        assert response.status_code == 404
        assert response.json() == {"error": "Tasks not found"}

    def test_progress_insights(self, client, make_task, event):
        now = datetime.now(timezone.utc)
        make_task("Done", status="done", due_date=now - timedelta(days=1))
        make_task("Soon", due_date=now + timedelta(days=3))
        make_task("Later", due_date=now + timedelta(days=20))
        make_task("Whenever")

        response = client.get("/api/ai/progress-insights", params={"eventId": event.id})
        assert response.status_code == 200
        body = response.json()
        assert body["completionRate"] == 25
        assert body["completedTasks"] == 1
        assert body["atRiskTasks"] == 1
        assert body["onTrackTasks"] == 2
        assert body["predictions"]["confidence"] == 75
        assert body["predictions"]["daysUntilEvent"] == 30

    def test_progress_insights_empty_event(self, client, event):
        body = client.get("/api/ai/progress-insights", params={"eventId": event.id}).json()
        assert body["totalTasks"] == 0
        assert body["predictions"] is None

    def test_progress_completion_rate_rounds_half_up(self, client, make_task, event):
        make_task("Done", status="done")
        for i in range(7):
            make_task(f"Open {i}")

        body = client.get("/api/ai/progress-insights", params={"eventId": event.id}).json()
        assert body["completionRate"] == 13
        assert body["predictions"]["confidence"] == 100
