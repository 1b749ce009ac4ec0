from typing import Annotated

from fastapi import APIRouter, Depends

from studybudget.api.dependencies import get_tasks
from studybudget.domain.tasks import (
    TaskForm,
    TaskStats,
    TaskStatusFilter,
    build_task,
    filter_tasks,
    task_stats,
    toggle_task,
)
from studybudget.models import Task
from studybudget.services.store import RecordStore

router = APIRouter()


@router.get("/api/tasks")
async def list_tasks(
    store: Annotated[RecordStore[Task], Depends(get_tasks)],
    category: str = "all",
    priority: str = "all",
    status: TaskStatusFilter = "all",
) -> list[Task]:
    return filter_tasks(store.snapshot(), category=category, priority=priority, status=status)


@router.get("/api/tasks/stats")
async def get_task_stats(
    store: Annotated[RecordStore[Task], Depends(get_tasks)],
) -> TaskStats:
    return task_stats(store.snapshot())


@router.post("/api/tasks", status_code=201)
async def create_task(
    form: TaskForm,
    store: Annotated[RecordStore[Task], Depends(get_tasks)],
) -> Task:
    return store.add(build_task(form))


@router.put("/api/tasks/{task_id}")
async def update_task(
    task_id: str,
    form: TaskForm,
    store: Annotated[RecordStore[Task], Depends(get_tasks)],
) -> Task:
    existing = store.get(task_id)
    return store.update(task_id, build_task(form, existing=existing))


@router.post("/api/tasks/{task_id}/toggle")
async def toggle_task_completion(
    task_id: str,
    store: Annotated[RecordStore[Task], Depends(get_tasks)],
) -> Task:
    return store.modify(task_id, toggle_task)


@router.delete("/api/tasks/{task_id}")
async def delete_task(
    task_id: str,
    store: Annotated[RecordStore[Task], Depends(get_tasks)],
) -> dict[str, str]:
    store.remove(task_id)
    return {"status": "deleted", "id": task_id}
