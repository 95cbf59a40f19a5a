"""AI task planning endpoints"""
from typing import Optional
from fastapi import APIRouter, Query

from src.eventra.api.deps import DbSession, AICallerId, LLM, to_http_exception, require_field
from src.eventra.schemas.ai import (
    EventInsightRequest, PredictCompletionRequest, AnalyzeDependenciesRequest,
    RiskAnalysisResponse, PredictCompletionResponse, TaskSummary,
    GenerateTasksResponse, AnalyzeDependenciesResponse, ProgressInsightsResponse
)
from src.eventra.schemas.common import UsageInfo
from src.eventra.services.errors import AIError
from src.eventra.services.task_intelligence import (
    analyze_event_risks, predict_task_completion, generate_task_suggestions,
    analyze_task_dependencies, progress_insights
)

router = APIRouter(prefix="/api/ai", tags=["AI Tasks"])


@router.post("/analyze-risks", response_model=RiskAnalysisResponse)
def analyze_risks_endpoint(db: DbSession, caller_id: AICallerId, data: EventInsightRequest):
    event_id = require_field(data.event_id, "Event ID is required")
    try:
        return analyze_event_risks(db, event_id)
    except AIError as e:
        raise to_http_exception(e)


@router.post("/predict-completion", response_model=PredictCompletionResponse)
def predict_completion_endpoint(db: DbSession, llm: LLM, caller_id: AICallerId, data: PredictCompletionRequest):
    task_id = require_field(data.task_id, "Task ID is required")
    try:
        prediction, task, usage = predict_task_completion(
            db, llm, task_id, event_id=data.event_id, user_id=caller_id or data.user_id
        )
    except AIError as e:
        raise to_http_exception(e)
    return PredictCompletionResponse(
        prediction=prediction,
        task=TaskSummary(id=task.id, title=task.title, status=task.status),
        usage=UsageInfo.from_usage(usage),
    )


@router.post("/generate-tasks", response_model=GenerateTasksResponse)
def generate_tasks_endpoint(db: DbSession, llm: LLM, caller_id: AICallerId, data: EventInsightRequest):
    event_id = require_field(data.event_id, "Event ID is required")
    try:
        tasks, confidence, usage = generate_task_suggestions(
            db, llm, event_id, user_id=caller_id or data.user_id
        )
    except AIError as e:
        raise to_http_exception(e)
    return GenerateTasksResponse(
        tasks=tasks,
        confidence=confidence,
        count=len(tasks),
        usage=UsageInfo.from_usage(usage),
    )


@router.post("/analyze-dependencies", response_model=AnalyzeDependenciesResponse)
def analyze_dependencies_endpoint(
    db: DbSession,
    llm: LLM,
    caller_id: AICallerId,
    data: AnalyzeDependenciesRequest
):
    event_id = require_field(data.event_id, "Event ID is required")
    try:
        dependencies, usage = analyze_task_dependencies(
            db, llm, event_id, task_ids=data.task_ids, user_id=caller_id or data.user_id
        )
    except AIError as e:
        raise to_http_exception(e)
    return AnalyzeDependenciesResponse(
        dependencies=dependencies,
        count=len(dependencies),
        usage=UsageInfo.from_usage(usage),
    )


@router.get("/progress-insights", response_model=ProgressInsightsResponse)
def progress_insights_endpoint(
    db: DbSession,
    caller_id: AICallerId,
    event_id: Optional[str] = Query(None, alias="eventId")
):
    require_field(event_id, "Event ID is required")
    try:
        return progress_insights(db, event_id)
    except AIError as e:
        raise to_http_exception(e)
