from collections.abc import Iterable
from datetime import date

from pydantic import BaseModel

from studybudget.domain.attendance import punctuality_stats
from studybudget.domain.numbers import percent
from studybudget.domain.spending import expenses_by_category, total_for_type
from studybudget.domain.tasks import task_stats
from studybudget.models import AttendanceRecord, Task, Transaction


class CategoryShare(BaseModel):
    name: str
    amount: float
    value: int  # rounded share of total expenses


class DashboardOverview(BaseModel):
    user_name: str
    total_income: float
    total_expenses: float
    balance: float
    budget_breakdown: list[CategoryShare]
    completed_tasks: int
    total_tasks: int
    task_completion_rate: int
    overdue_tasks: int
    punctuality_rate: int
    late_count: int
    absent_count: int


def build_overview(
    transactions: Iterable[Transaction],
    tasks: Iterable[Task],
    attendance: Iterable[AttendanceRecord],
    *,
    user_name: str = "Student",
    today: date | None = None,
) -> DashboardOverview:
    records = list(transactions)
    income = total_for_type(records, "income")
    expenses = total_for_type(records, "expense")
    by_category = expenses_by_category(records)
    expense_total = sum(by_category.values())

    tasks_summary = task_stats(tasks, today)
    attendance_summary = punctuality_stats(attendance)

    return DashboardOverview(
        user_name=user_name,
        total_income=income,
        total_expenses=expenses,
        balance=income - expenses,
        budget_breakdown=[
            CategoryShare(name=name, amount=amount, value=percent(amount, expense_total))
            for name, amount in by_category.items()
        ],
        completed_tasks=tasks_summary.completed,
        total_tasks=tasks_summary.total,
        task_completion_rate=tasks_summary.completion_rate,
        overdue_tasks=tasks_summary.overdue,
        punctuality_rate=attendance_summary.punctuality_rate,
        late_count=attendance_summary.late,
        absent_count=attendance_summary.absent,
    )
