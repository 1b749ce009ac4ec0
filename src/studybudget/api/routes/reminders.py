import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends

from studybudget.api.dependencies import get_reminder_notifier, get_reminders
from studybudget.domain.reminders import (
    ReminderForm,
    ReminderSummary,
    ReminderTab,
    build_reminder,
    filter_reminders,
    reminder_summary,
    toggle_reminder,
    upcoming_reminders,
)
from studybudget.models import Reminder
from studybudget.services.reminders import ReminderNotifier
from studybudget.services.store import RecordStore

router = APIRouter()


@router.get("/api/reminders")
async def list_reminders(
    store: Annotated[RecordStore[Reminder], Depends(get_reminders)],
    tab: ReminderTab = "all",
) -> list[Reminder]:
    return filter_reminders(store.snapshot(), tab)


@router.get("/api/reminders/upcoming")
async def list_upcoming_reminders(
    store: Annotated[RecordStore[Reminder], Depends(get_reminders)],
) -> list[Reminder]:
    return upcoming_reminders(store.snapshot())


@router.get("/api/reminders/summary")
async def get_reminder_summary(
    store: Annotated[RecordStore[Reminder], Depends(get_reminders)],
) -> ReminderSummary:
    return reminder_summary(store.snapshot())


@router.post("/api/reminders/check")
async def check_reminders(
    notifier: Annotated[ReminderNotifier, Depends(get_reminder_notifier)],
) -> dict[str, object]:
    sent = await asyncio.to_thread(notifier.check_and_notify)
    return {"status": "checked", "notified": [r.id for r in sent]}


@router.post("/api/reminders", status_code=201)
async def create_reminder(
    form: ReminderForm,
    store: Annotated[RecordStore[Reminder], Depends(get_reminders)],
) -> Reminder:
    return store.add(build_reminder(form))


@router.put("/api/reminders/{reminder_id}")
async def update_reminder(
    reminder_id: str,
    form: ReminderForm,
    store: Annotated[RecordStore[Reminder], Depends(get_reminders)],
) -> Reminder:
    existing = store.get(reminder_id)
    return store.update(reminder_id, build_reminder(form, existing=existing))


@router.post("/api/reminders/{reminder_id}/toggle")
async def toggle_reminder_completion(
    reminder_id: str,
    store: Annotated[RecordStore[Reminder], Depends(get_reminders)],
) -> Reminder:
    return store.modify(reminder_id, toggle_reminder)


@router.delete("/api/reminders/{reminder_id}")
async def delete_reminder(
    reminder_id: str,
    store: Annotated[RecordStore[Reminder], Depends(get_reminders)],
) -> dict[str, str]:
    store.remove(reminder_id)
    return {"status": "deleted", "id": reminder_id}
