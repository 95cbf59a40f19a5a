"""Tests for the insight cache store"""
from datetime import datetime, timedelta, timezone

from sqlalchemy import select, func

from src.eventra.models.ai_insight import AIInsight, InsightEntityType, InsightType
from src.eventra.services import insights
from src.eventra.services.insights import store_insight, get_insight, purge_expired_insights, run_insight_purge


def _expire(db, insight: AIInsight):
    insight.expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)
    db.commit()


class TestStoreInsight:
    def test_store_again_replaces_row(self, db):
        store_insight(db, InsightEntityType.LEAD, "lead-1", InsightType.SCORE, {"score": 40}, expires_in_hours=24)
        store_insight(db, InsightEntityType.LEAD, "lead-1", InsightType.SCORE, {"score": 85}, expires_in_hours=24)

        count = db.execute(select(func.count(AIInsight.id))).scalar_one()
        assert count == 1
        cached = get_insight(db, InsightEntityType.LEAD, "lead-1", InsightType.SCORE)
        assert cached.content == {"score": 85}

    def test_distinct_types_are_separate_rows(self, db):
        store_insight(db, InsightEntityType.LEAD, "lead-1", InsightType.SCORE, {"score": 40})
        store_insight(db, InsightEntityType.LEAD, "lead-1", InsightType.SUMMARY, {"summary": "x"})
        count = db.execute(select(func.count(AIInsight.id))).scalar_one()
        assert count == 2

    def test_expiry_window(self, db):
        insight = store_insight(
            db, InsightEntityType.TASK, "task-1", InsightType.PREDICTION, {"estimatedDays": 5},
            expires_in_hours=24,
        )
        expires_at = insights.as_utc(insight.expires_at)
        expected = datetime.now(timezone.utc) + timedelta(hours=24)
        assert abs((expires_at - expected).total_seconds()) < 60

    def test_no_ttl_never_expires(self, db):
        insight = store_insight(db, InsightEntityType.EVENT, "event-1", InsightType.EVENT_PROFILE, {"summary": "x"})
        assert insight.expires_at is None
        assert get_insight(db, InsightEntityType.EVENT, "event-1", InsightType.EVENT_PROFILE) is not None


class TestExpiry:
    def test_expired_insight_is_not_returned(self, db):
        insight = store_insight(
            db, InsightEntityType.LEAD, "lead-1", InsightType.SCORE, {"score": 40}, expires_in_hours=24
        )
        _expire(db, insight)
        assert get_insight(db, InsightEntityType.LEAD, "lead-1", InsightType.SCORE) is None

    def test_purge_removes_only_expired(self, db):
        stale = store_insight(
            db, InsightEntityType.LEAD, "lead-1", InsightType.SCORE, {"score": 40}, expires_in_hours=24
        )
        store_insight(db, InsightEntityType.LEAD, "lead-2", InsightType.SCORE, {"score": 60}, expires_in_hours=24)
        store_insight(db, InsightEntityType.EVENT, "event-1", InsightType.EVENT_PROFILE, {"summary": "x"})
        _expire(db, stale)

        assert purge_expired_insights(db) == 1
        remaining = db.execute(select(AIInsight.entity_id)).scalars().all()
        assert sorted(remaining) == ["event-1", "lead-2"]

    def test_scheduled_purge_uses_own_session(self, db, session_factory, monkeypatch):
        stale = store_insight(
            db, InsightEntityType.LEAD, "lead-1", InsightType.SCORE, {"score": 40}, expires_in_hours=24
        )
        _expire(db, stale)
        monkeypatch.setattr(insights, "SessionLocal", session_factory)

        assert run_insight_purge() == 1
        db.expire_all()
        assert db.execute(select(func.count(AIInsight.id))).scalar_one() == 0
