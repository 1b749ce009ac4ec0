import datetime as dt
import math
from collections.abc import Iterable
from datetime import date, datetime, time
from typing import Any

from pydantic import BaseModel, model_validator

from studybudget.domain.numbers import percent, round_half_up
from studybudget.models import AttendanceRecord, AttendanceStatus

SUBJECTS = (
    "Networking 2 (LAB)",
    "Networking 2 (LEC)",
    "Integrative Programming and Technologies (LAB)",
    "Integrative Programming and Technologies (LEC)",
    "IT Elective 1 - Project Management & Agile Methodologies (LAB)",
    "IT Elective 1 - Project Management & Agile Methodologies (LEC)",
    "IT Research Methods (LAB)",
    "IT Research Methods (LEC)",
    "Event Driven Programming (LAB)",
    "Event Driven Programming (LEC)",
    "Business Analytics (LAB)",
    "Business Analytics (LEC)",
    "IT Elective 2 - Web/Mobile Frontend Development (LAB)",
    "IT Elective 2 - Web/Mobile Frontend Development (LEC)",
)


class AttendanceForm(BaseModel):
    date: dt.date
    subject: str
    scheduled_time: time
    actual_time: time | None = None
    status: AttendanceStatus = "on-time"
    notes: str = ""

    @model_validator(mode="after")
    def _check_fields(self) -> "AttendanceForm":
        if not self.subject.strip():
            raise ValueError("Subject is required.")
        if self.status != "absent" and self.actual_time is None:
            raise ValueError("Actual arrival time is required unless absent.")
        return self


class WeeklyPunctuality(BaseModel):
    week: str
    on_time: int
    late: int
    absent: int
    total: int
    punctuality_rate: int


class SubjectPunctuality(BaseModel):
    subject: str
    total: int
    punctuality_rate: int


class PunctualityStats(BaseModel):
    total: int
    on_time: int
    late: int
    absent: int
    punctuality_rate: int
    weekly: list[WeeklyPunctuality]
    subjects: list[SubjectPunctuality]


def build_record(form: AttendanceForm, *, existing: AttendanceRecord | None = None) -> AttendanceRecord:
    values: dict[str, Any] = form.model_dump()
    if form.status == "absent":
        values["actual_time"] = None
    if existing is not None:
        values["id"] = existing.id
    return AttendanceRecord(**values)


def lateness_minutes(record: AttendanceRecord) -> int | None:
    if record.actual_time is None:
        return None
    scheduled = datetime.combine(record.date, record.scheduled_time)
    actual = datetime.combine(record.date, record.actual_time)
    return round_half_up((actual - scheduled).total_seconds() / 60)


def week_label(day: date) -> str:
    return f"W{math.ceil(day.day / 7)}"


def weekly_trend(records: Iterable[AttendanceRecord]) -> list[WeeklyPunctuality]:
    weeks: dict[str, dict[str, int]] = {}
    for record in records:
        counts = weeks.setdefault(week_label(record.date), {"on-time": 0, "late": 0, "absent": 0})
        counts[record.status] += 1

    trend = []
    for week, counts in weeks.items():
        total = sum(counts.values())
        trend.append(WeeklyPunctuality(
            week=week,
            on_time=counts["on-time"],
            late=counts["late"],
            absent=counts["absent"],
            total=total,
            punctuality_rate=percent(counts["on-time"], total),
        ))
    return trend


def subject_performance(records: Iterable[AttendanceRecord]) -> list[SubjectPunctuality]:
    by_subject: dict[str, list[AttendanceRecord]] = {}
    for record in records:
        by_subject.setdefault(record.subject, []).append(record)

    ordered = [s for s in SUBJECTS if s in by_subject]
    ordered += [s for s in by_subject if s not in SUBJECTS]

    return [
        SubjectPunctuality(
            subject=subject,
            total=len(by_subject[subject]),
            punctuality_rate=percent(
                sum(1 for r in by_subject[subject] if r.status == "on-time"),
                len(by_subject[subject]),
            ),
        )
        for subject in ordered
    ]


def punctuality_stats(records: Iterable[AttendanceRecord]) -> PunctualityStats:
    items = list(records)
    on_time = sum(1 for r in items if r.status == "on-time")
    return PunctualityStats(
        total=len(items),
        on_time=on_time,
        late=sum(1 for r in items if r.status == "late"),
        absent=sum(1 for r in items if r.status == "absent"),
        punctuality_rate=percent(on_time, len(items)),
        weekly=weekly_trend(items),
        subjects=subject_performance(items),
    )
