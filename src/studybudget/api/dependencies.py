from fastapi import HTTPException, Request

from studybudget.integration.wellness import WellnessAssessmentService
from studybudget.manager import SuggestionService
from studybudget.models import AttendanceRecord, Reminder, Task, Transaction
from studybudget.services.profile import ProfileStore
from studybudget.services.reminders import ReminderNotifier
from studybudget.services.store import RecordStore


def get_suggestions(request: Request) -> SuggestionService:
    service = getattr(request.app.state, "suggestions", None)
    if not service:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return service


def get_transactions(request: Request) -> RecordStore[Transaction]:
    store = getattr(request.app.state, "transactions", None)
    if store is None:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return store


def get_tasks(request: Request) -> RecordStore[Task]:
    store = getattr(request.app.state, "tasks", None)
    if store is None:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return store


def get_attendance(request: Request) -> RecordStore[AttendanceRecord]:
    store = getattr(request.app.state, "attendance", None)
    if store is None:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return store


def get_reminders(request: Request) -> RecordStore[Reminder]:
    store = getattr(request.app.state, "reminders", None)
    if store is None:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return store


def get_reminder_notifier(request: Request) -> ReminderNotifier:
    notifier = getattr(request.app.state, "reminder_notifier", None)
    if not notifier:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return notifier


def get_profile_store(request: Request) -> ProfileStore:
    profile = getattr(request.app.state, "profile", None)
    if not profile:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return profile


def get_assessment(request: Request) -> WellnessAssessmentService:
    service = getattr(request.app.state, "assessment", None)
    if not service:
        raise HTTPException(status_code=503, detail="Lifestyle assessment not configured")
    return service
