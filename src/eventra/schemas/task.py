"""Task schemas"""
from datetime import datetime
from typing import Optional, List
from pydantic import Field

from src.eventra.models.task import TaskStatus, TaskPriority
from src.eventra.schemas.common import CamelModel


class TaskBase(CamelModel):
    event_id: str
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING.value
    priority: TaskPriority = TaskPriority.MEDIUM.value
    assigned_to: Optional[str] = None
    due_date: Optional[datetime] = None
    estimated_cost: Optional[float] = None
    dependencies: List[str] = Field(default_factory=list)


class TaskCreate(TaskBase):
    pass


class TaskResponse(TaskBase):
    id: str
    status: str
    priority: str
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None


class TaskListResponse(CamelModel):
    tasks: List[TaskResponse]
    total: int
