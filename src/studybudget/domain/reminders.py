import math
from collections.abc import Iterable
from datetime import date, datetime, time
from typing import Any, Literal

from pydantic import BaseModel, field_validator

from studybudget.models import Priority, Recurrence, Reminder, ReminderType

ReminderTab = Literal["all", "bills", "tasks"]

UPCOMING_LIMIT = 5
DEFAULT_DUE_TIME = time(9, 0)

_TAB_TYPES: dict[str, str] = {"bills": "bill", "tasks": "task"}


class ReminderForm(BaseModel):
    type: ReminderType = "task"
    title: str
    description: str = ""
    due_date: date
    due_time: time | None = DEFAULT_DUE_TIME
    amount: float | None = None
    category: str | None = None
    priority: Priority = "medium"
    recurrence: Recurrence = "none"

    @field_validator("title")
    @classmethod
    def _require_title(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title is required.")
        return value


class ReminderSummary(BaseModel):
    completed: int
    total_bills: int
    total_tasks: int
    pending_tasks: int
    outstanding_bill_amount: float


def build_reminder(form: ReminderForm, *, existing: Reminder | None = None) -> Reminder:
    values: dict[str, Any] = form.model_dump()
    if form.type != "bill":
        values.update(amount=None, category=None)
    if existing is not None:
        values.update(
            id=existing.id,
            is_completed=existing.is_completed,
            notification_sent=existing.notification_sent,
            created_at=existing.created_at,
        )
    return Reminder(**values)


def toggle_reminder(reminder: Reminder) -> Reminder:
    return reminder.model_copy(update={"is_completed": not reminder.is_completed})


def due_datetime(reminder: Reminder) -> datetime:
    return datetime.combine(reminder.due_date, reminder.due_time or time())


def days_until_due(reminder: Reminder, now: datetime | None = None) -> int:
    """Whole days until the due date; 0 means due today, negative means overdue."""
    delta = datetime.combine(reminder.due_date, time()) - (now or datetime.now())
    return math.ceil(delta.total_seconds() / 86400)


def hours_until_due(reminder: Reminder, now: datetime | None = None) -> float:
    return (due_datetime(reminder) - (now or datetime.now())).total_seconds() / 3600


def filter_reminders(reminders: Iterable[Reminder], tab: ReminderTab = "all") -> list[Reminder]:
    wanted = _TAB_TYPES.get(tab)
    pending = [
        r for r in reminders
        if not r.is_completed and (wanted is None or r.type == wanted)
    ]
    return sorted(pending, key=lambda r: r.due_date)


def upcoming_reminders(
    reminders: Iterable[Reminder],
    now: datetime | None = None,
    limit: int = UPCOMING_LIMIT,
) -> list[Reminder]:
    current = now or datetime.now()
    upcoming = [
        r for r in reminders
        if not r.is_completed and datetime.combine(r.due_date, time()) > current
    ]
    return upcoming[:limit]


def due_for_notification(
    reminders: Iterable[Reminder],
    now: datetime | None = None,
    window_hours: float = 24.0,
) -> list[tuple[Reminder, float]]:
    current = now or datetime.now()
    due = []
    for reminder in reminders:
        if reminder.is_completed or reminder.notification_sent:
            continue
        hours = hours_until_due(reminder, current)
        if 0 < hours <= window_hours:
            due.append((reminder, hours))
    return due


def reminder_summary(reminders: Iterable[Reminder]) -> ReminderSummary:
    items = list(reminders)
    tasks = [r for r in items if r.type == "task"]
    return ReminderSummary(
        completed=sum(1 for r in items if r.is_completed),
        total_bills=sum(1 for r in items if r.type == "bill"),
        total_tasks=len(tasks),
        pending_tasks=sum(1 for r in tasks if not r.is_completed),
        outstanding_bill_amount=sum(
            r.amount or 0 for r in items if r.type == "bill" and not r.is_completed
        ),
    )
