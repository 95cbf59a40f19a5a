"""API dependencies - caller identity, database session and AI client"""
import logging
from typing import Annotated, Optional
from fastapi import Depends, HTTPException, Header, Request
from fastapi.responses import Response
from sqlalchemy.orm import Session
from sqlalchemy import select

from src.eventra.config import get_settings
from src.eventra.database import get_db
from src.eventra.models.user import User
from src.eventra.services.content_generation import InvalidContentTypeError
from src.eventra.services.errors import (
    AIError, EntityNotFoundError, AIServiceError, AIResponseParseError, RateLimitExceededError
)
from src.eventra.services.llm import LLMClient, get_llm_client

logger = logging.getLogger(__name__)


def get_optional_user(
    db: Session = Depends(get_db),
    x_user_id: Optional[str] = Header(default=None, description="Caller user ID")
) -> Optional[User]:
    if not x_user_id:
        return None
    return db.execute(
        select(User).where(User.id == x_user_id, User.is_active == True)
    ).scalar_one_or_none()


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if not user:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user


def get_ai_caller_id(
    request: Request,
    user: Optional[User] = Depends(get_optional_user)
) -> Optional[str]:
    if user:
        return user.id
    if get_settings().ai_auth_enforced:
        raise HTTPException(status_code=401, detail="Authentication required")
    logger.warning(f"Unauthenticated AI request: {request.method} {request.url.path}")
    return None


def to_http_exception(error: AIError) -> HTTPException:
    if isinstance(error, EntityNotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, RateLimitExceededError):
        return HTTPException(status_code=429, detail=str(error))
    if isinstance(error, InvalidContentTypeError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, AIResponseParseError):
        return HTTPException(status_code=500, detail={"error": str(error), "details": error.raw_preview})
    if isinstance(error, AIServiceError):
        return HTTPException(status_code=500, detail=str(error))
    return HTTPException(status_code=500, detail="Internal server error")


def require_field(value: Optional[str], message: str) -> str:
    if not value:
        raise HTTPException(status_code=400, detail=message)
    return value


DbSession = Annotated[Session, Depends(get_db)]
CurrentUser = Annotated[User, Depends(get_current_user)]
AICallerId = Annotated[Optional[str], Depends(get_ai_caller_id)]
LLM = Annotated[LLMClient, Depends(get_llm_client)]


def csv_download(csv_content: str, filename: str) -> Response:
    return Response(
        content=csv_content.encode("utf-8-sig"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
