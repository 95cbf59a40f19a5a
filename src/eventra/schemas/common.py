"""Shared schema base classes"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from src.eventra.services.llm import TokenUsage


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys; snake_case field names also accepted on input"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
        use_enum_values = True


class UsageInfo(CamelModel):
    tokens: int = 0
    prompt_tokens: int = 0
    completion_tokens: int = 0

    @classmethod
    def from_usage(cls, usage: TokenUsage) -> "UsageInfo":
        return cls(**usage.to_dict())
