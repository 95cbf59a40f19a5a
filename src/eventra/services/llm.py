"""Chat-completion client with cost tracking and per-user rate limiting"""
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from src.eventra.config import get_settings
from src.eventra.models.ai_usage import AIUsage, UsageStatus
from src.eventra.services.errors import AIServiceError, RateLimitExceededError

logger = logging.getLogger(__name__)

# USD per 1M tokens
PRICING: dict[str, dict[str, float]] = {
    "gpt-4o-mini": {"prompt": 0.150, "completion": 0.600},
    "gpt-4o": {"prompt": 2.50, "completion": 10.00},
}


@dataclass
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> dict:
        return {
            "tokens": self.total_tokens,
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
        }


@dataclass
class ProviderResponse:
    content: Optional[str]
    model: str
    usage: TokenUsage
    finish_reason: Optional[str] = None


@dataclass
class ChatCompletionResult:
    content: str
    model: str
    usage: TokenUsage
    estimated_cost: float


class ChatProvider(ABC):
    @abstractmethod
    def complete(
        self,
        model: str,
        messages: list[dict],
        max_tokens: int,
        temperature: float,
        json_mode: bool = False,
    ) -> ProviderResponse:
        pass


class OpenAIProvider(ChatProvider):
    def __init__(self, api_key: str, base_url: Optional[str] = None):
        from openai import OpenAI

        self._client = OpenAI(api_key=api_key, base_url=base_url or None)

    def complete(
        self,
        model: str,
        messages: list[dict],
        max_tokens: int,
        temperature: float,
        json_mode: bool = False,
    ) -> ProviderResponse:
        kwargs: dict[str, Any] = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        completion = self._client.chat.completions.create(
            model=model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
            **kwargs,
        )
        choice = completion.choices[0] if completion.choices else None
        usage = completion.usage
        return ProviderResponse(
            content=choice.message.content if choice and choice.message else None,
            model=completion.model or model,
            usage=TokenUsage(
                prompt_tokens=usage.prompt_tokens if usage else 0,
                completion_tokens=usage.completion_tokens if usage else 0,
                total_tokens=usage.total_tokens if usage else 0,
            ),
            finish_reason=choice.finish_reason if choice else None,
        )


def calculate_cost(model: str, prompt_tokens: int, completion_tokens: int) -> float:
    pricing = PRICING.get(model)
    if not pricing:
        return 0.0
    return (prompt_tokens * pricing["prompt"] + completion_tokens * pricing["completion"]) / 1_000_000


def track_usage(
    db: Session,
    feature: str,
    model: str,
    status: UsageStatus,
    user_id: Optional[str] = None,
    usage: Optional[TokenUsage] = None,
    estimated_cost: float = 0.0,
    request_data: Optional[dict] = None,
    response_time_ms: int = 0,
    error_message: Optional[str] = None,
) -> AIUsage:
    usage = usage or TokenUsage()
    record = AIUsage(
        user_id=user_id,
        feature=feature,
        model=model,
        prompt_tokens=usage.prompt_tokens,
        completion_tokens=usage.completion_tokens,
        total_tokens=usage.total_tokens,
        estimated_cost=estimated_cost,
        request_data=request_data,
        response_time_ms=response_time_ms,
        status=status.value,
        error_message=error_message,
        created_at=datetime.now(timezone.utc),
    )
    db.add(record)
    db.commit()
    return record


def count_recent_requests(db: Session, user_id: str, window: timedelta) -> int:
    since = datetime.now(timezone.utc) - window
    return db.execute(
        select(func.count(AIUsage.id)).where(
            AIUsage.user_id == user_id,
            AIUsage.created_at >= since,
        )
    ).scalar_one()


def check_rate_limits(db: Session, user_id: Optional[str]) -> Optional[str]:
    """Return the reason a request must be rejected, or None when it may proceed.

    Anonymous requests are not limited.
    """
    if not user_id:
        return None

    settings = get_settings()
    if count_recent_requests(db, user_id, timedelta(minutes=1)) >= settings.AI_MAX_REQUESTS_PER_MINUTE:
        return "Rate limit exceeded: too many requests per minute"
    if count_recent_requests(db, user_id, timedelta(days=1)) >= settings.AI_MAX_REQUESTS_PER_DAY:
        return "Rate limit exceeded: daily request limit reached"
    return None


class LLMClient:
    def __init__(self, provider: Optional[ChatProvider] = None):
        self._provider = provider

    @property
    def provider(self) -> ChatProvider:
        if self._provider is None:
            settings = get_settings()
            self._provider = OpenAIProvider(settings.OPENAI_API_KEY, settings.OPENAI_BASE_URL)
        return self._provider

    def generate_chat_completion(
        self,
        db: Session,
        prompt: str,
        system: str,
        feature: str,
        model: Optional[str] = None,
        max_tokens: int = 1000,
        temperature: float = 0.7,
        user_id: Optional[str] = None,
        request_data: Optional[dict] = None,
        json_mode: bool = False,
    ) -> ChatCompletionResult:
        settings = get_settings()
        model = model or settings.AI_DEFAULT_MODEL
        max_tokens = min(max_tokens, settings.AI_MAX_TOKENS_PER_REQUEST)
        start = time.perf_counter()

        reason = check_rate_limits(db, user_id)
        if reason:
            logger.warning(f"AI request rejected: user_id={user_id}, feature={feature}, reason={reason}")
            track_usage(
                db, feature, model, UsageStatus.RATE_LIMITED,
                user_id=user_id,
                request_data=request_data,
                response_time_ms=int((time.perf_counter() - start) * 1000),
                error_message=reason,
            )
            raise RateLimitExceededError(reason)

        messages = [
            {"role": "system", "content": system},
            {"role": "user", "content": prompt},
        ]
        try:
            response = self.provider.complete(
                model=model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
                json_mode=json_mode,
            )
        except Exception as e:
            logger.exception(f"Completion API error: feature={feature}, model={model}")
            track_usage(
                db, feature, model, UsageStatus.ERROR,
                user_id=user_id,
                request_data=request_data,
                response_time_ms=int((time.perf_counter() - start) * 1000),
                error_message=str(e) or type(e).__name__,
            )
            raise AIServiceError(str(e) or "Failed to generate completion") from e

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        cost = calculate_cost(model, response.usage.prompt_tokens, response.usage.completion_tokens)

        if not response.content:
            track_usage(
                db, feature, model, UsageStatus.ERROR,
                user_id=user_id,
                usage=response.usage,
                estimated_cost=cost,
                request_data=request_data,
                response_time_ms=elapsed_ms,
                error_message="No response from AI",
            )
            raise AIServiceError("No response from AI")

        track_usage(
            db, feature, model, UsageStatus.SUCCESS,
            user_id=user_id,
            usage=response.usage,
            estimated_cost=cost,
            request_data=request_data,
            response_time_ms=elapsed_ms,
        )
        logger.info(
            f"AI completion: feature={feature}, model={response.model}, "
            f"tokens={response.usage.total_tokens}, cost=${cost:.6f}, {elapsed_ms}ms"
        )
        return ChatCompletionResult(
            content=response.content,
            model=response.model,
            usage=response.usage,
            estimated_cost=cost,
        )


def get_usage_stats(db: Session, user_id: str, days: int = 7) -> dict:
    since = datetime.now(timezone.utc) - timedelta(days=days)
    records = db.execute(
        select(AIUsage).where(AIUsage.user_id == user_id, AIUsage.created_at >= since)
    ).scalars().all()

    by_feature: dict[str, dict] = {}
    for record in records:
        entry = by_feature.setdefault(record.feature, {"requests": 0, "cost": 0.0})
        entry["requests"] += 1
        entry["cost"] += record.estimated_cost or 0.0

    return {
        "total_requests": len(records),
        "total_cost": sum(r.estimated_cost or 0.0 for r in records),
        "total_tokens": sum(r.total_tokens or 0 for r in records),
        "by_feature": by_feature,
    }


_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    global _client
    if _client is None:
        _client = LLMClient()
    return _client
