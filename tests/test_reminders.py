from datetime import date, datetime, time
from unittest.mock import MagicMock, patch

import pytest

from studybudget.domain.reminders import (
    ReminderForm,
    build_reminder,
    days_until_due,
    due_for_notification,
    filter_reminders,
    reminder_summary,
    toggle_reminder,
    upcoming_reminders,
)
from studybudget.models import Reminder
from studybudget.services.reminders import Notifier, ReminderNotifier, notification_text
from studybudget.services.store import RecordStore

NOW = datetime(2026, 10, 19, 12, 0)


def _bill(title, due, amount=500.0, **kwargs):
    return Reminder(type="bill", title=title, due_date=due, amount=amount, category="Utilities", **kwargs)


def _task(title, due, **kwargs):
    return Reminder(type="task", title=title, due_date=due, **kwargs)


class RecordingNotifier(Notifier):
    def __init__(self):
        self.sent = []

    def notify(self, title, body):
        self.sent.append((title, body))


def test_task_reminders_drop_bill_fields():
    form = ReminderForm(type="task", title="Submit essay", due_date=date(2026, 10, 20), amount=100, category="x")
    reminder = build_reminder(form)
    assert reminder.amount is None
    assert reminder.category is None
    assert reminder.due_time == time(9, 0)


def test_edit_keeps_flags():
    existing = _bill("Rent", date(2026, 10, 30), is_completed=True, notification_sent=True)
    form = ReminderForm(type="bill", title="Rent", due_date=date(2026, 11, 1), amount=4500)

    reminder = build_reminder(form, existing=existing)

    assert reminder.id == existing.id
    assert reminder.amount == 4500
    assert reminder.is_completed is True
    assert reminder.notification_sent is True
    assert reminder.created_at == existing.created_at


def test_toggle_reminder():
    assert toggle_reminder(_task("x", date(2026, 10, 20))).is_completed is True


def test_days_until_due():
    assert days_until_due(_task("tomorrow", date(2026, 10, 20)), NOW) == 1
    assert days_until_due(_task("today", date(2026, 10, 19)), NOW) == 0
    assert days_until_due(_task("yesterday", date(2026, 10, 18)), NOW) == -1


def test_filter_by_tab_sorted_and_pending_only():
    reminders = [
        _task("later", date(2026, 10, 28)),
        _bill("internet", date(2026, 10, 21)),
        _task("sooner", date(2026, 10, 20)),
        _task("done", date(2026, 10, 19), is_completed=True),
    ]
    assert [r.title for r in filter_reminders(reminders)] == ["sooner", "internet", "later"]
    assert [r.title for r in filter_reminders(reminders, "bills")] == ["internet"]
    assert [r.title for r in filter_reminders(reminders, "tasks")] == ["sooner", "later"]


def test_upcoming_limited_to_future():
    reminders = [_task(f"t{i}", date(2026, 10, 20 + i)) for i in range(7)]
    reminders.insert(0, _task("past", date(2026, 10, 19)))

    upcoming = upcoming_reminders(reminders, NOW)

    assert len(upcoming) == 5
    assert upcoming[0].title == "t0"


def test_due_for_notification_window():
    reminders = [
        _task("in 9 hours", date(2026, 10, 19), due_time=time(21, 0)),
        _task("in 21 hours", date(2026, 10, 20)),
        _task("in 2 days", date(2026, 10, 21), due_time=time(13, 0)),
        _task("already passed", date(2026, 10, 19), due_time=time(8, 0)),
        _task("sent", date(2026, 10, 20), notification_sent=True),
        _task("completed", date(2026, 10, 20), is_completed=True),
    ]
    due = due_for_notification(reminders, NOW, window_hours=24)

    assert [(r.title, hours) for r, hours in due] == [("in 9 hours", 9.0), ("in 21 hours", 21.0)]


def test_reminder_summary():
    summary = reminder_summary([
        _bill("rent", date(2026, 10, 30), amount=4500),
        _bill("water", date(2026, 10, 25), amount=300.5, is_completed=True),
        _task("essay", date(2026, 10, 21)),
        _task("quiz", date(2026, 10, 22), is_completed=True),
    ])
    assert summary.completed == 2
    assert summary.total_bills == 2
    assert summary.total_tasks == 2
    assert summary.pending_tasks == 1
    assert summary.outstanding_bill_amount == 4500


def test_notification_text():
    title, body = notification_text(_bill("Electricity", date(2026, 10, 20), amount=1250), 20.6, "₱")
    assert title == "Reminder: Electricity"
    assert body == "Due in 21 hours - ₱1250"

    _, body = notification_text(_task("Essay", date(2026, 10, 20)), 3)
    assert body == "Due in 3 hours"


def test_notifier_marks_reminders_once():
    store = RecordStore[Reminder]("reminder")
    due = store.add(_bill("Internet", date(2026, 10, 20), amount=999.5))
    store.add(_task("Far away", date(2026, 12, 1)))
    recorder = RecordingNotifier()
    notifier = ReminderNotifier(store, [recorder], window_hours=24, currency="$")

    sent = notifier.check_and_notify(NOW)

    assert [r.id for r in sent] == [due.id]
    assert store.get(due.id).notification_sent is True
    assert recorder.sent == [("Reminder: Internet", "Due in 21 hours - $999.5")]

    assert notifier.check_and_notify(NOW) == []
    assert len(recorder.sent) == 1


class CompletingNotifier(Notifier):
    """Completes the reminder in the store while the notification is being delivered."""

    def __init__(self, store):
        self.store = store

    def notify(self, title, body):
        for reminder in self.store.snapshot():
            self.store.update(reminder.id, reminder.model_copy(update={"is_completed": True}))


def test_marking_notified_keeps_concurrent_changes():
    store = RecordStore[Reminder]("reminder")
    due = store.add(_task("Essay", date(2026, 10, 19), due_time=time(17, 0)))
    notifier = ReminderNotifier(store, [CompletingNotifier(store)])

    notifier.check_and_notify(NOW)

    current = store.get(due.id)
    assert current.notification_sent is True
    assert current.is_completed is True


def test_notifier_failure_still_marks_reminder():
    store = RecordStore[Reminder]("reminder")
    due = store.add(_task("Essay", date(2026, 10, 20)))
    broken = MagicMock(spec=Notifier)
    broken.notify.side_effect = RuntimeError("no display")
    recorder = RecordingNotifier()

    notifier = ReminderNotifier(store, [broken, recorder])
    notifier.check_and_notify(NOW)

    assert len(recorder.sent) == 1
    assert store.get(due.id).notification_sent is True


@pytest.mark.anyio
async def test_run_checks_then_sleeps():
    notifier = ReminderNotifier(RecordStore[Reminder]("reminder"), interval=30)

    with patch.object(notifier, "check_and_notify") as mock_check, \
         patch("studybudget.services.reminders.asyncio.sleep", side_effect=RuntimeError("stop")) as mock_sleep:
        with pytest.raises(RuntimeError, match="stop"):
            await notifier.run()

    mock_check.assert_called_once()
    mock_sleep.assert_awaited_once_with(30)
