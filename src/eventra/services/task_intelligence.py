"""Task intelligence - generation, completion prediction, risks and bottlenecks"""
import logging
import math
import re
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.eventra.models.ai_insight import InsightEntityType, InsightType
from src.eventra.models.ai_usage import AIFeature
from src.eventra.models.event import Event
from src.eventra.models.task import Task, TaskStatus, TaskPriority
from src.eventra.services import prompts
from src.eventra.services.ai_json import (
    extract_json, extract_json_object, as_int, as_list, as_choice, as_str, round_half_up,
)
from src.eventra.services.company_context import build_system_prompt
from src.eventra.services.errors import EntityNotFoundError, AIResponseParseError
from src.eventra.services.insights import store_insight, as_utc, PREDICTION_TTL, RISK_ANALYSIS_TTL
from src.eventra.services.llm import LLMClient, TokenUsage

logger = logging.getLogger(__name__)

# days
EVENT_TYPE_BASELINES: dict[str, dict[str, int]] = {
    "conference": {
        "venue": 60,
        "marketing": 45,
        "logistics": 30,
        "registration": 35,
        "speakers": 50,
        "default": 30,
    },
    "workshop": {
        "venue": 30,
        "materials": 20,
        "marketing": 25,
        "registration": 20,
        "default": 20,
    },
    "webinar": {
        "platform": 10,
        "marketing": 15,
        "content": 14,
        "rehearsal": 7,
        "default": 10,
    },
    "trade_show": {
        "booth": 90,
        "marketing": 60,
        "logistics": 45,
        "staffing": 30,
        "default": 45,
    },
    "networking": {
        "venue": 20,
        "invitations": 15,
        "catering": 10,
        "default": 15,
    },
    "default": {
        "default": 21,
    },
}

EVENT_TYPE_CONTEXTS: dict[str, dict[str, Any]] = {
    "conference": {
        "description": "Large professional conference with keynotes, breakout sessions, and networking",
        "typical_tasks": [
            "Venue booking and contract negotiation",
            "Speaker recruitment and coordination",
            "Registration system setup",
            "Marketing campaign launch",
            "Sponsor outreach and packages",
            "Audio/visual equipment rental",
            "Catering and menu planning",
            "Signage and branding materials",
        ],
    },
    "trade_show": {
        "description": "Exhibition with vendor booths, product demonstrations, and industry networking",
        "typical_tasks": [
            "Booth space reservation and layout design",
            "Exhibitor recruitment and sales",
            "Floor plan and logistics coordination",
            "Lead capture system setup",
            "Promotional materials production",
            "Shipping and logistics coordination",
            "On-site staff scheduling",
            "Post-event lead follow-up system",
        ],
    },
    "webinar": {
        "description": "Online virtual event with presentations and Q&A",
        "typical_tasks": [
            "Platform selection and setup",
            "Registration landing page creation",
            "Presenter briefing and tech rehearsal",
            "Email marketing campaign",
            "Slide deck preparation and review",
            "Recording and editing setup",
            "Post-event survey distribution",
            "Recording distribution and follow-up",
        ],
    },
    "workshop": {
        "description": "Hands-on training session with interactive activities",
        "typical_tasks": [
            "Curriculum and materials development",
            "Venue setup with tables and equipment",
            "Materials printing and distribution",
            "Instructor coordination",
            "Registration and attendee management",
            "Hands-on activity preparation",
            "Feedback collection system",
            "Certificate of completion design",
        ],
    },
    "networking": {
        "description": "Social event focused on relationship building and connections",
        "typical_tasks": [
            "Venue selection with appropriate atmosphere",
            "Food and beverage planning",
            "Icebreaker activities planning",
            "Name badge and check-in system",
            "Music and entertainment booking",
            "Photo booth or activities setup",
            "Follow-up connection facilitation",
            "Post-event photo sharing",
        ],
    },
    "gala": {
        "description": "Formal evening event with dinner, entertainment, and fundraising",
        "typical_tasks": [
            "Luxury venue selection and booking",
            "Entertainment and performers booking",
            "Formal invitation design and distribution",
            "Gourmet catering and bar service",
            "Auction or fundraising component setup",
            "Decor and ambiance planning",
            "VIP guest coordination",
            "Photography and videography",
        ],
    },
    "product_launch": {
        "description": "Event to unveil and promote a new product or service",
        "typical_tasks": [
            "Product demo preparation and rehearsal",
            "Media and influencer outreach",
            "Press release and PR materials",
            "Launch venue and staging setup",
            "Product samples and promotional items",
            "Social media campaign coordination",
            "Live stream and recording setup",
            "Post-launch analytics tracking",
        ],
    },
    "seminar": {
        "description": "Educational session with expert presentations and discussions",
        "typical_tasks": [
            "Expert speaker recruitment",
            "Educational content development",
            "Venue with appropriate seating",
            "Registration and confirmation system",
            "Handout materials preparation",
            "Q&A session planning",
            "Certificate of attendance design",
            "Follow-up resources distribution",
        ],
    },
    "fundraiser": {
        "description": "Charitable event to raise funds for a cause or organization",
        "typical_tasks": [
            "Fundraising goal and strategy planning",
            "Donor outreach and invitation",
            "Silent auction or raffle organization",
            "Payment and donation processing setup",
            "Sponsorship package creation",
            "Volunteer recruitment and training",
            "Impact presentation preparation",
            "Thank-you communication plan",
        ],
    },
    "retreat": {
        "description": "Multi-day off-site event for team building or strategic planning",
        "typical_tasks": [
            "Retreat location and accommodation booking",
            "Agenda and activity planning",
            "Team-building exercises preparation",
            "Transportation and logistics coordination",
            "Meal planning for multiple days",
            "Breakout session facilitation setup",
            "Materials and supplies procurement",
            "Post-retreat survey and follow-up",
        ],
    },
}

TASK_PRIORITIES = tuple(p.value for p in TaskPriority)
DUPLICATE_OVERLAP_THRESHOLD = 0.7
SUGGESTION_CONFIDENCE = 0.85
AVERAGE_DAYS_PER_TASK = 7


def normalize_event_type(event_type: Optional[str]) -> str:
    if not event_type:
        return "conference"
    key = re.sub(r"[\s\-]+", "_", event_type.strip().lower())
    if key == "tradeshow":
        return "trade_show"
    return key


def get_event(db: Session, event_id: str) -> Event:
    event = db.get(Event, event_id)
    if not event:
        raise EntityNotFoundError("Event")
    return event


def get_event_tasks(db: Session, event_id: str) -> list[Task]:
    return list(db.execute(
        select(Task).where(Task.event_id == event_id).order_by(Task.due_date)
    ).scalars().all())


def days_until(target: datetime, now: Optional[datetime] = None) -> int:
    now = now or datetime.now(timezone.utc)
    return math.ceil((as_utc(target) - now).total_seconds() / 86400)


def calculate_urgency(due_date: Optional[datetime], now: Optional[datetime] = None) -> str:
    if not due_date:
        return "low"
    remaining = days_until(due_date, now)
    if remaining <= 7:
        return "high"
    if remaining <= 14:
        return "medium"
    return "low"


def get_baseline_estimate(task_title: str, event_type: Optional[str] = None) -> int:
    title = (task_title or "").lower()
    baselines = EVENT_TYPE_BASELINES.get(
        normalize_event_type(event_type) if event_type else "default",
        EVENT_TYPE_BASELINES["default"],
    )
    for category, days in baselines.items():
        if category != "default" and category in title:
            return days
    return baselines.get("default", 21)


def _significant_words(title: str) -> list[str]:
    return [w for w in title.lower().split() if len(w) > 3]


def is_duplicate_title(title: str, existing_titles: list[str]) -> bool:
    """True when title matches an existing one exactly or shares >70% of its longer words."""
    title_lower = title.lower()
    words = _significant_words(title_lower)
    for existing in existing_titles:
        existing_lower = existing.lower()
        if title_lower == existing_lower:
            return True
        existing_words = _significant_words(existing_lower)
        if not words or not existing_words:
            continue
        matching = sum(1 for w in words if w in existing_words)
        if matching / min(len(words), len(existing_words)) > DUPLICATE_OVERLAP_THRESHOLD:
            return True
    return False


def _normalize_suggestion(item: dict) -> dict:
    priority = item.get("priority")
    return {
        "title": str(item.get("title", ""))[:100],
        "description": as_str(item.get("description"), "No description provided"),
        "priority": priority if priority in TASK_PRIORITIES else TaskPriority.MEDIUM.value,
        "estimatedDaysBeforeEvent": as_int(item.get("estimated_days_before_event"), 0) or -7,
        "category": as_str(item.get("category"), None),
        "estimatedCost": item.get("estimated_cost"),
    }


def _unwrap_list(data: Any, key: str, raw: str) -> list:
    if isinstance(data, dict):
        data = data.get(key)
    if not isinstance(data, list):
        raise AIResponseParseError("Failed to parse AI response", raw)
    return data


def generate_task_suggestions(
    db: Session,
    llm: LLMClient,
    event_id: str,
    user_id: Optional[str] = None,
) -> tuple[list[dict], float, TokenUsage]:
    event = get_event(db, event_id)
    existing_titles = [t.title for t in get_event_tasks(db, event_id)]

    event_type = normalize_event_type(event.event_type)
    context = EVENT_TYPE_CONTEXTS.get(event_type, EVENT_TYPE_CONTEXTS["conference"])

    result = llm.generate_chat_completion(
        db,
        prompt=prompts.render_prompt(
            prompts.GENERATE_TASKS_PROMPT,
            event=event,
            event_type=event_type,
            context=context,
            existing_titles=existing_titles,
        ),
        system=build_system_prompt(db, user_id, prompts.GENERATE_TASKS_SYSTEM),
        feature=AIFeature.TASK_SUGGESTIONS.value,
        max_tokens=1500,
        temperature=0.7,
        user_id=user_id,
        request_data={"eventId": event_id, "eventType": event_type},
    )
    items = _unwrap_list(extract_json(result.content, prefer="["), "tasks", result.content)

    suggestions = [
        _normalize_suggestion(item)
        for item in items
        if isinstance(item, dict) and item.get("title")
    ]
    unique = [s for s in suggestions if not is_duplicate_title(s["title"], existing_titles)]
    if len(unique) < len(suggestions):
        logger.info(f"Dropped {len(suggestions) - len(unique)} duplicate task suggestions for event_id={event_id}")
    return unique, SUGGESTION_CONFIDENCE, result.usage


def predict_task_completion(
    db: Session,
    llm: LLMClient,
    task_id: str,
    event_id: Optional[str] = None,
    user_id: Optional[str] = None,
) -> tuple[dict, Task, TokenUsage]:
    task = db.get(Task, task_id)
    if not task:
        raise EntityNotFoundError("Task")

    event = db.get(Event, event_id or task.event_id) if (event_id or task.event_id) else None
    event_type = event.event_type if event else None

    result = llm.generate_chat_completion(
        db,
        prompt=prompts.render_prompt(prompts.PREDICT_COMPLETION_PROMPT, task=task),
        system=build_system_prompt(db, user_id, prompts.PREDICT_COMPLETION_SYSTEM),
        feature=AIFeature.TASK_PREDICTION.value,
        max_tokens=500,
        temperature=0.3,
        user_id=user_id,
        request_data={"taskId": task_id},
        json_mode=True,
    )
    data = extract_json_object(result.content)

    ai_days = as_int(data.get("estimatedDays"), 7, 0)
    baseline = get_baseline_estimate(task.title, event_type)
    prediction = {
        "estimatedDays": round_half_up(ai_days * 0.6 + baseline * 0.4),
        "confidence": as_int(data.get("confidence"), 60, 0, 100),
        "reasoning": as_str(data.get("reasoning"), "AI analysis completed"),
        "factors": {
            "complexity": as_choice(data.get("complexity"), ("low", "medium", "high"), "medium"),
            "dependencies": len(task.dependencies or []),
            "urgency": calculate_urgency(task.due_date),
        },
    }

    store_insight(
        db, InsightEntityType.TASK, task_id, InsightType.PREDICTION,
        content=prediction,
        confidence=prediction["confidence"] / 100,
        metadata={
            "model": result.model,
            "tokens_used": result.usage.total_tokens,
            "baseline_days": baseline,
            "ai_days": ai_days,
        },
        expires_in_hours=PREDICTION_TTL,
    )
    return prediction, task, result.usage


def risk_level(severity: int) -> str:
    if severity >= 80:
        return "critical"
    if severity >= 60:
        return "high"
    if severity >= 40:
        return "medium"
    return "low"


def _risk_recommendations(risks: list[dict]) -> list[str]:
    recommendations: list[str] = []
    for risk in risks:
        if risk["type"] == "timeline":
            if risk["severity"] >= 80:
                recommendations.append("Immediate action required - task is overdue or critically close to deadline")
                recommendations.append("Consider reallocating resources or adjusting scope")
            else:
                recommendations.append("Start this task as soon as possible to avoid deadline issues")
        elif risk["type"] == "dependency":
            recommendations.append("Review dependencies and ensure prerequisite tasks are on track")
            recommendations.append("Consider parallel workstreams where possible")
        elif risk["type"] == "complexity":
            recommendations.append("Break down into smaller sub-tasks for better tracking")
            recommendations.append("Assign additional resources if available")
    unique = list(dict.fromkeys(recommendations))
    return unique or ["Monitor progress regularly"]


def analyze_task_risks(
    tasks: list[Task],
    event_date: Optional[datetime],
    now: Optional[datetime] = None,
) -> dict:
    now = now or datetime.now(timezone.utc)
    results = []
    total_risk = 0

    for task in tasks:
        risks: list[dict] = []

        if task.due_date and event_date:
            due_in = days_until(task.due_date, now)
            event_in = days_until(event_date, now)

            if due_in < 0:
                risks.append({
                    "type": "timeline",
                    "severity": 90,
                    "description": f"Task is {abs(due_in)} days overdue",
                })
            elif due_in < 7 and task.status != TaskStatus.DONE.value:
                risks.append({
                    "type": "timeline",
                    "severity": 70,
                    "description": f"Due in {due_in} days",
                })

            if event_in < 7 and task.status == TaskStatus.PENDING.value:
                risks.append({
                    "type": "timeline",
                    "severity": 80,
                    "description": f"Event is in {event_in} days, task not started",
                })

        dependencies = task.dependencies or []
        if len(dependencies) > 3:
            risks.append({
                "type": "dependency",
                "severity": 60,
                "description": f"Has {len(dependencies)} dependencies - high coordination needed",
            })

        if task.priority == TaskPriority.URGENT.value and task.status == TaskStatus.PENDING.value:
            risks.append({
                "type": "complexity",
                "severity": 75,
                "description": "Urgent task not yet started",
            })

        if not risks:
            continue

        max_severity = max(r["severity"] for r in risks)
        total_risk += max_severity
        results.append({
            "taskId": task.id,
            "taskTitle": task.title,
            "riskLevel": risk_level(max_severity),
            "risks": risks,
            "recommendations": _risk_recommendations(risks),
        })

    return {
        "risks": results,
        "overallRiskScore": round_half_up(total_risk / len(tasks)) if tasks else 0,
        "criticalCount": sum(1 for r in results if r["riskLevel"] == "critical"),
    }


def analyze_event_risks(db: Session, event_id: str) -> dict:
    event = get_event(db, event_id)
    tasks = get_event_tasks(db, event_id)
    analysis = analyze_task_risks(tasks, event.start_date)

    store_insight(
        db, InsightEntityType.EVENT, event_id, InsightType.RISK_ANALYSIS,
        content=analysis,
        metadata={"task_count": len(tasks)},
        expires_in_hours=RISK_ANALYSIS_TTL,
    )
    return {
        **analysis,
        "eventId": event_id,
        "totalTasks": len(tasks),
        "analyzedAt": datetime.now(timezone.utc).isoformat(),
    }


def detect_bottlenecks(tasks: list[Task]) -> list[dict]:
    bottlenecks: list[dict] = []
    by_id = {t.id: t for t in tasks}

    dependents: dict[str, list[str]] = defaultdict(list)
    for task in tasks:
        for dep_id in task.dependencies or []:
            dependents[dep_id].append(task.id)

    for dep_id, blocked in dependents.items():
        count = len(blocked)
        blocker = by_id.get(dep_id)
        if count < 3 or blocker is None or blocker.status == TaskStatus.DONE.value:
            continue
        bottlenecks.append({
            "type": "dependency",
            "affectedTasks": blocked,
            "impact": "high" if count >= 5 else "medium",
            "description": f'"{blocker.title}" blocks {count} other tasks',
            "suggestion": f'Prioritize completing "{blocker.title}" to unblock {count} dependent tasks',
        })

    by_date: dict[str, list[Task]] = defaultdict(list)
    for task in tasks:
        if task.due_date:
            by_date[as_utc(task.due_date).date().isoformat()].append(task)

    for date_key, same_day in by_date.items():
        if len(same_day) < 4:
            continue
        bottlenecks.append({
            "type": "time",
            "affectedTasks": [t.id for t in same_day],
            "impact": "high" if len(same_day) >= 6 else "medium",
            "description": f"{len(same_day)} tasks due on {date_key}",
            "suggestion": "Consider spreading these tasks across multiple days to avoid resource conflicts",
        })

    return bottlenecks


def progress_insights(db: Session, event_id: str) -> dict:
    event = get_event(db, event_id)
    tasks = get_event_tasks(db, event_id)
    now = datetime.now(timezone.utc)
    analyzed_at = now.isoformat()

    if not tasks:
        return {
            "completionRate": 0,
            "onTrackTasks": 0,
            "atRiskTasks": 0,
            "completedTasks": 0,
            "totalTasks": 0,
            "bottlenecks": [],
            "predictions": None,
            "analyzedAt": analyzed_at,
        }

    completed = sum(1 for t in tasks if t.status == TaskStatus.DONE.value)
    at_risk = sum(
        1 for t in tasks
        if t.status != TaskStatus.DONE.value and t.due_date and days_until(t.due_date, now) <= 7
    )
    remaining = len(tasks) - completed
    predicted_completion = now + timedelta(days=remaining * AVERAGE_DAYS_PER_TASK)

    return {
        "completionRate": round_half_up(completed / len(tasks) * 100),
        "onTrackTasks": len(tasks) - completed - at_risk,
        "atRiskTasks": at_risk,
        "completedTasks": completed,
        "totalTasks": len(tasks),
        "bottlenecks": detect_bottlenecks(tasks),
        "predictions": {
            "eventCompletion": predicted_completion.isoformat(),
            "daysUntilEvent": days_until(event.start_date, now) if event.start_date else None,
            "confidence": max(30, round_half_up(100 - at_risk / len(tasks) * 100)),
        },
        "analyzedAt": analyzed_at,
    }


def analyze_task_dependencies(
    db: Session,
    llm: LLMClient,
    event_id: str,
    task_ids: Optional[list[str]] = None,
    user_id: Optional[str] = None,
) -> tuple[list[dict], TokenUsage]:
    get_event(db, event_id)
    query = select(Task).where(Task.event_id == event_id)
    if task_ids:
        query = query.where(Task.id.in_(task_ids))
    tasks = list(db.execute(query).scalars().all())
    if not tasks:
        raise EntityNotFoundError("Tasks")

    result = llm.generate_chat_completion(
        db,
        prompt=prompts.render_prompt(prompts.ANALYZE_DEPENDENCIES_PROMPT, tasks=tasks),
        system=prompts.ANALYZE_DEPENDENCIES_SYSTEM,
        feature=AIFeature.TASK_SUGGESTIONS.value,
        max_tokens=1000,
        temperature=0.5,
        user_id=user_id,
        request_data={"eventId": event_id},
    )
    items = _unwrap_list(extract_json(result.content, prefer="["), "dependencies", result.content)

    known = {t.id for t in tasks}
    dependencies = []
    for item in items:
        task_id = item.get("taskId") if isinstance(item, dict) else None
        if not isinstance(task_id, str) or task_id not in known:
            continue
        depends_on = [
            d for d in as_list(item.get("dependsOn"))
            if isinstance(d, str) and d in known and d != task_id
        ]
        if not depends_on:
            continue
        dependencies.append({
            "taskId": task_id,
            "dependsOn": depends_on,
            "reasoning": as_str(item.get("reasoning")),
        })
    return dependencies, result.usage
