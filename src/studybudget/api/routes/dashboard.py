from typing import Annotated

from fastapi import APIRouter, Depends

from studybudget.api.dependencies import (
    get_attendance,
    get_profile_store,
    get_tasks,
    get_transactions,
)
from studybudget.domain.dashboard import DashboardOverview, build_overview
from studybudget.models import AttendanceRecord, Task, Transaction
from studybudget.services.profile import ProfileStore
from studybudget.services.store import RecordStore

router = APIRouter()


@router.get("/api/dashboard")
async def dashboard(
    transactions: Annotated[RecordStore[Transaction], Depends(get_transactions)],
    tasks: Annotated[RecordStore[Task], Depends(get_tasks)],
    attendance: Annotated[RecordStore[AttendanceRecord], Depends(get_attendance)],
    profile: Annotated[ProfileStore, Depends(get_profile_store)],
) -> DashboardOverview:
    user = profile.get()
    return build_overview(
        transactions.snapshot(),
        tasks.snapshot(),
        attendance.snapshot(),
        user_name=user.first_name if user and user.first_name else "Student",
    )
