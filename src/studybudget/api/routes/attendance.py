from typing import Annotated

from fastapi import APIRouter, Depends

from studybudget.api.dependencies import get_attendance
from studybudget.domain.attendance import (
    AttendanceForm,
    PunctualityStats,
    build_record,
    punctuality_stats,
)
from studybudget.models import AttendanceRecord
from studybudget.services.store import RecordStore

router = APIRouter()


@router.get("/api/attendance")
async def list_attendance(
    store: Annotated[RecordStore[AttendanceRecord], Depends(get_attendance)],
) -> list[AttendanceRecord]:
    return store.snapshot()


@router.get("/api/attendance/stats")
async def get_punctuality_stats(
    store: Annotated[RecordStore[AttendanceRecord], Depends(get_attendance)],
) -> PunctualityStats:
    return punctuality_stats(store.snapshot())


@router.post("/api/attendance", status_code=201)
async def create_attendance(
    form: AttendanceForm,
    store: Annotated[RecordStore[AttendanceRecord], Depends(get_attendance)],
) -> AttendanceRecord:
    return store.add(build_record(form))


@router.put("/api/attendance/{record_id}")
async def update_attendance(
    record_id: str,
    form: AttendanceForm,
    store: Annotated[RecordStore[AttendanceRecord], Depends(get_attendance)],
) -> AttendanceRecord:
    existing = store.get(record_id)
    return store.update(record_id, build_record(form, existing=existing))


@router.delete("/api/attendance/{record_id}")
async def delete_attendance(
    record_id: str,
    store: Annotated[RecordStore[AttendanceRecord], Depends(get_attendance)],
) -> dict[str, str]:
    store.remove(record_id)
    return {"status": "deleted", "id": record_id}
