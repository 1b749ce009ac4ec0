from collections.abc import Iterable
from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, field_validator

from studybudget.domain.numbers import percent
from studybudget.models import Priority, Task, TaskCategory

TaskStatusFilter = Literal["all", "completed", "pending"]


class TaskForm(BaseModel):
    title: str
    description: str = ""
    category: TaskCategory = "academic"
    priority: Priority = "medium"
    due_date: date

    @field_validator("title")
    @classmethod
    def _require_title(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title is required.")
        return value


class TaskStats(BaseModel):
    total: int
    completed: int
    pending: int
    overdue: int
    completion_rate: int


def build_task(form: TaskForm, *, existing: Task | None = None) -> Task:
    values: dict[str, Any] = form.model_dump()
    if existing is not None:
        values.update(id=existing.id, completed=existing.completed, created_at=existing.created_at)
    return Task(**values)


def toggle_task(task: Task) -> Task:
    return task.model_copy(update={"completed": not task.completed})


def is_overdue(task: Task, today: date | None = None) -> bool:
    return not task.completed and task.due_date < (today or date.today())


def filter_tasks(
    tasks: Iterable[Task],
    category: str = "all",
    priority: str = "all",
    status: TaskStatusFilter = "all",
) -> list[Task]:
    result = []
    for task in tasks:
        if category != "all" and task.category != category:
            continue
        if priority != "all" and task.priority != priority:
            continue
        if status == "completed" and not task.completed:
            continue
        if status == "pending" and task.completed:
            continue
        result.append(task)
    return result


def task_stats(tasks: Iterable[Task], today: date | None = None) -> TaskStats:
    records = list(tasks)
    completed = sum(1 for t in records if t.completed)
    return TaskStats(
        total=len(records),
        completed=completed,
        pending=len(records) - completed,
        overdue=sum(1 for t in records if is_overdue(t, today)),
        completion_rate=percent(completed, len(records)),
    )
