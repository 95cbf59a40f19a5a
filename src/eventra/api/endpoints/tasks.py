"""Task endpoints"""
from typing import Optional
from fastapi import APIRouter, HTTPException, Query

from src.eventra.api.deps import DbSession, csv_download
from src.eventra.schemas.task import TaskCreate, TaskResponse, TaskListResponse
from src.eventra.services.csv_io import export_tasks_csv
from src.eventra.services.events import get_event_by_id
from src.eventra.services.tasks import get_tasks, create_task

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


@router.get("", response_model=TaskListResponse)
def list_tasks(
    db: DbSession,
    event_id: Optional[str] = Query(None, alias="eventId"),
    limit: int = Query(200, ge=1, le=1000),
    offset: int = Query(0, ge=0)
):
    tasks = get_tasks(db, event_id=event_id, limit=limit, offset=offset)
    return TaskListResponse(
        tasks=[TaskResponse.model_validate(t) for t in tasks],
        total=len(tasks)
    )


@router.post("", response_model=TaskResponse, status_code=201)
def create_new_task(db: DbSession, data: TaskCreate):
    if not get_event_by_id(db, data.event_id):
        raise HTTPException(status_code=404, detail="Event not found")
    task = create_task(db, **data.model_dump())
    db.commit()
    db.refresh(task)
    return task


@router.get("/export")
def export_tasks(db: DbSession, event_id: Optional[str] = Query(None, alias="eventId")):
    return csv_download(export_tasks_csv(db, event_id=event_id), "tasks.csv")
