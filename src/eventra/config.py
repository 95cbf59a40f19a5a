"""Application settings using Pydantic Settings"""
from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str

    APP_ENV: str = "dev"

    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = ""
    AI_DEFAULT_MODEL: str = "gpt-4o-mini"

    AI_MAX_REQUESTS_PER_DAY: int = 500
    AI_MAX_REQUESTS_PER_MINUTE: int = 20
    AI_MAX_TOKENS_PER_REQUEST: int = 2000
    AI_AUTH_MODE: str = "warn"

    SCHEDULER_ENABLED: bool = True
    INSIGHT_PURGE_INTERVAL_MINUTES: int = 60

    @field_validator("APP_ENV")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        allowed = ["dev", "staging", "prod"]
        if v not in allowed:
            raise ValueError(f"APP_ENV must be one of: {allowed}")
        return v

    @field_validator("AI_AUTH_MODE")
    @classmethod
    def validate_ai_auth_mode(cls, v: str) -> str:
        allowed = ["warn", "enforce"]
        if v not in allowed:
            raise ValueError(f"AI_AUTH_MODE must be one of: {allowed}")
        return v

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "prod"

    @property
    def ai_auth_enforced(self) -> bool:
        return self.AI_AUTH_MODE == "enforce"

    def validate_required_for_ai(self) -> None:
        if not self.OPENAI_API_KEY:
            raise ValueError("OPENAI_API_KEY is required for AI features")

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()


def get_settings() -> Settings:
    return settings
