"""AI endpoint request and response schemas"""
from datetime import datetime
from typing import Optional, List, Dict, Any
from pydantic import Field

from src.eventra.schemas.common import CamelModel, UsageInfo


class LeadInsightRequest(CamelModel):
    lead_id: Optional[str] = None
    user_id: Optional[str] = None


class EventInsightRequest(CamelModel):
    event_id: Optional[str] = None
    user_id: Optional[str] = None


class PredictCompletionRequest(CamelModel):
    task_id: Optional[str] = None
    event_id: Optional[str] = None
    user_id: Optional[str] = None


class AnalyzeDependenciesRequest(CamelModel):
    event_id: Optional[str] = None
    task_ids: Optional[List[str]] = None
    user_id: Optional[str] = None


class EmailDraftRequest(CamelModel):
    lead_id: Optional[str] = None
    template_id: Optional[str] = None
    tone: Optional[str] = None
    language: Optional[str] = None
    personalization_points: Optional[List[str]] = None
    user_id: Optional[str] = None


class SubjectLinesRequest(CamelModel):
    lead_id: Optional[str] = None
    template_id: Optional[str] = None
    email_body: Optional[str] = None
    tone: Optional[str] = None
    count: int = Field(3, ge=1, le=10)
    user_id: Optional[str] = None


class GenerateContentRequest(CamelModel):
    type: Optional[str] = None
    context: Dict[str, Any] = Field(default_factory=dict)
    user_id: Optional[str] = None


class ScoreLeadResponse(CamelModel):
    success: bool = True
    score: int
    confidence: float
    reasoning: str
    strengths: List[Any]
    weaknesses: List[Any]
    recommendations: List[Any]
    usage: UsageInfo


class CachedScoreResponse(CamelModel):
    cached: bool = True
    score: int
    confidence: Optional[float] = None
    reasoning: str = ""
    strengths: List[Any] = []
    weaknesses: List[Any] = []
    recommendations: List[Any] = []
    created_at: datetime
    expires_at: Optional[datetime] = None


class SummaryResponse(CamelModel):
    success: bool = True
    summary: str
    key_insights: List[Any]
    next_steps: List[Any]
    sentiment: str
    urgency: str
    usage: UsageInfo


class CachedSummaryResponse(CamelModel):
    cached: bool = True
    summary: str = ""
    key_insights: List[Any] = []
    next_steps: List[Any] = []
    sentiment: str = "neutral"
    urgency: str = "medium"
    created_at: datetime
    expires_at: Optional[datetime] = None


class QualifyLeadResponse(CamelModel):
    qualification: Dict[str, Any]
    lead_id: str
    lead_name: str
    analyzed_at: datetime
    usage: UsageInfo


class RiskAnalysisResponse(CamelModel):
    risks: List[Dict[str, Any]]
    overall_risk_score: int
    critical_count: int
    event_id: str
    total_tasks: int
    analyzed_at: datetime


class TaskSummary(CamelModel):
    id: str
    title: str
    status: str


class PredictCompletionResponse(CamelModel):
    prediction: Dict[str, Any]
    task: TaskSummary
    usage: UsageInfo


class GenerateTasksResponse(CamelModel):
    success: bool = True
    tasks: List[Dict[str, Any]]
    confidence: float
    count: int
    usage: UsageInfo


class AnalyzeDependenciesResponse(CamelModel):
    success: bool = True
    dependencies: List[Dict[str, Any]]
    count: int
    usage: UsageInfo


class ProgressInsightsResponse(CamelModel):
    completion_rate: int
    on_track_tasks: int
    at_risk_tasks: int
    completed_tasks: int
    total_tasks: int
    bottlenecks: List[Dict[str, Any]]
    predictions: Optional[Dict[str, Any]] = None
    analyzed_at: datetime


class SubjectLine(CamelModel):
    text: str
    tone: str
    length: int
    approach: str = ""


class SubjectLinesResponse(CamelModel):
    subject_lines: List[SubjectLine]
    metadata: Dict[str, Any]


class GenerateContentResponse(CamelModel):
    success: bool = True
    content: str
    type: str
    usage: UsageInfo


class AnalyzeEventResponse(CamelModel):
    profile: Dict[str, Any]
    event_id: str
    event_name: str
    analyzed_at: datetime
    usage: UsageInfo


class FeatureUsage(CamelModel):
    requests: int
    cost: float


class UsageStatsResponse(CamelModel):
    total_requests: int
    total_cost: float
    total_tokens: int
    by_feature: Dict[str, FeatureUsage]
