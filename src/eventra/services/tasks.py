"""Task listing and creation"""
from datetime import datetime, timezone
from typing import Optional, List
from sqlalchemy import select
from sqlalchemy.orm import Session

from src.eventra.models.task import Task, TaskStatus


def get_tasks(db: Session, event_id: Optional[str] = None, limit: int = 200, offset: int = 0) -> List[Task]:
    query = select(Task).order_by(Task.due_date)
    if event_id:
        query = query.where(Task.event_id == event_id)
    query = query.limit(limit).offset(offset)
    return list(db.execute(query).scalars().all())


def create_task(db: Session, **fields) -> Task:
    task = Task(**fields)
    if task.status == TaskStatus.DONE.value:
        task.completed_at = datetime.now(timezone.utc)
    db.add(task)
    db.flush()
    return task
