from datetime import date, time

from studybudget.domain.dashboard import build_overview
from studybudget.models import AttendanceRecord, Task, Transaction

TODAY = date(2026, 10, 19)


def test_overview_combines_modules():
    transactions = [
        Transaction(type="income", amount=1000, category="Scholarship", description="grant"),
        Transaction(type="expense", amount=200, category="Food", description="groceries"),
        Transaction(type="expense", amount=100, category="Transport", description="bus"),
    ]
    tasks = [
        Task(title="Essay", due_date=date(2026, 10, 18)),
        Task(title="Quiz", due_date=date(2026, 10, 25), completed=True),
    ]
    attendance = [
        AttendanceRecord(date=TODAY, subject="Networking 2 (LAB)", scheduled_time=time(8), actual_time=time(8)),
        AttendanceRecord(date=TODAY, subject="Networking 2 (LEC)", scheduled_time=time(10), status="absent"),
        AttendanceRecord(
            date=TODAY,
            subject="Business Analytics (LAB)",
            scheduled_time=time(13),
            actual_time=time(13, 20),
            status="late",
        ),
    ]

    overview = build_overview(transactions, tasks, attendance, user_name="Maria", today=TODAY)

    assert overview.user_name == "Maria"
    assert overview.balance == 700
    assert [(s.name, s.value) for s in overview.budget_breakdown] == [("Food", 67), ("Transport", 33)]
    assert overview.task_completion_rate == 50
    assert overview.overdue_tasks == 1
    assert overview.punctuality_rate == 33
    assert (overview.late_count, overview.absent_count) == (1, 1)


def test_empty_overview():
    overview = build_overview([], [], [], today=TODAY)
    assert overview.user_name == "Student"
    assert overview.budget_breakdown == []
    assert overview.task_completion_rate == 0
    assert overview.punctuality_rate == 0
