import asyncio
import contextlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from studybudget.api.routes import (
    assessment,
    attendance,
    config,
    dashboard,
    profile,
    reminders,
    tasks,
    transactions,
)
from studybudget.core import configuration, settings
from studybudget.logger import get_logger, setup_logging
from studybudget.manager import SuggestionService
from studybudget.models import AttendanceRecord, Reminder, Task, Transaction
from studybudget.services.profile import ProfileError, ProfileStore
from studybudget.services.reminders import ReminderNotifier
from studybudget.services.store import DuplicateRecordError, RecordNotFoundError, RecordStore

logger = get_logger(__name__)


def create_app() -> FastAPI:
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Initializing services...")
        settings.log_environment()

        reminder_store = RecordStore[Reminder]("reminder")
        notifier = ReminderNotifier(
            reminder_store,
            window_hours=settings.reminder_window_hours(),
            currency=settings.currency_symbol(),
            interval=settings.reminder_check_interval(),
        )

        app.state.suggestions = SuggestionService(
            memory_threshold=settings.memory_threshold(),
            min_length=settings.suggestion_min_length(),
            data_dir=settings.DATA_DIR,
        )
        app.state.transactions = RecordStore[Transaction]("transaction")
        app.state.tasks = RecordStore[Task]("task")
        app.state.attendance = RecordStore[AttendanceRecord]("attendance")
        app.state.reminders = reminder_store
        app.state.reminder_notifier = notifier
        app.state.profile = ProfileStore(data_path=settings.get_data_path("profile.json"))
        app.state.assessment = configuration.create_assessment_service()

        reminder_task = None
        if notifier.interval > 0:
            reminder_task = asyncio.create_task(notifier.run())
        else:
            logger.info("[REMINDER] Background reminder checks disabled.")

        logger.info("Services initialized.")
        yield

        if reminder_task is not None:
            reminder_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await reminder_task
        logger.info("Service shutting down.")

    app = FastAPI(title="Student Budget", lifespan=lifespan)

    @app.exception_handler(RecordNotFoundError)
    async def record_not_found(request: Request, exc: RecordNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": f"Record {exc.record_id} not found"})

    @app.exception_handler(DuplicateRecordError)
    async def duplicate_record(request: Request, exc: DuplicateRecordError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(ProfileError)
    async def profile_error(request: Request, exc: ProfileError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    app.include_router(transactions.router)
    app.include_router(tasks.router)
    app.include_router(attendance.router)
    app.include_router(reminders.router)
    app.include_router(profile.router)
    app.include_router(assessment.router)
    app.include_router(dashboard.router)
    app.include_router(config.router)

    return app


app = create_app()
