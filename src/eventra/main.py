"""Main FastAPI application"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from apscheduler.schedulers.background import BackgroundScheduler

from src.eventra.api.endpoints import health, events, leads, tasks, email_templates, company_intelligence
from src.eventra.api.endpoints import ai_leads, ai_tasks, ai_email, ai_content, ai_usage
from src.eventra.config import settings

logger = logging.getLogger(__name__)

scheduler: BackgroundScheduler | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    global scheduler

    logger.info(f"Starting Eventra API in {settings.APP_ENV} environment")
    try:
        settings.validate_required_for_ai()
        logger.info(f"AI configuration validated - default model {settings.AI_DEFAULT_MODEL}")
    except ValueError as e:
        logger.warning(f"AI configuration incomplete: {e}")

    if settings.SCHEDULER_ENABLED:
        from src.eventra.services.insights import run_insight_purge
        scheduler = BackgroundScheduler()
        scheduler.add_job(
            run_insight_purge,
            'interval',
            minutes=settings.INSIGHT_PURGE_INTERVAL_MINUTES,
            id='insight_purge',
            replace_existing=True
        )
        scheduler.start()
        logger.info(f"Scheduler started - purging expired insights every {settings.INSIGHT_PURGE_INTERVAL_MINUTES} minutes")

    yield

    if scheduler:
        scheduler.shutdown()
        scheduler = None
        logger.info("Scheduler stopped")
    logger.info("Shutting down Eventra API")


app = FastAPI(
    title="Eventra - Event Marketing Intelligence",
    description="Event marketing and lead management API with AI insight generation",
    version="0.1.0",
    lifespan=lifespan
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path", "header"))
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


app.include_router(health.router, tags=["Health"])
app.include_router(events.router)
app.include_router(leads.router)
app.include_router(tasks.router)
app.include_router(email_templates.router)
app.include_router(company_intelligence.router)

app.include_router(ai_leads.router)
app.include_router(ai_tasks.router)
app.include_router(ai_email.router)
app.include_router(ai_content.router)
app.include_router(ai_usage.router)


@app.get("/")
def root():
    return {
        "message": "Eventra API",
        "environment": settings.APP_ENV,
        "docs": "/docs"
    }
