"""Exceptions raised by the AI insight services"""


class AIError(Exception):
    """Base exception for AI insight operations"""
    pass


class EntityNotFoundError(AIError):
    def __init__(self, entity: str, message: str | None = None):
        self.entity = entity
        super().__init__(message or f"{entity} not found")


class AIServiceError(AIError):
    """Upstream completion API failed or returned nothing usable"""
    pass


class AIResponseParseError(AIError):
    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw_preview = (raw or "")[:200]


class RateLimitExceededError(AIError):
    pass
