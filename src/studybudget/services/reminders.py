import asyncio
from abc import ABC, abstractmethod
from datetime import datetime

from studybudget.domain.numbers import format_amount, round_half_up
from studybudget.domain.reminders import due_for_notification
from studybudget.logger import get_logger
from studybudget.models import Reminder
from studybudget.services.store import RecordNotFoundError, RecordStore

logger = get_logger(__name__)


class Notifier(ABC):
    @abstractmethod
    def notify(self, title: str, body: str) -> None:
        """Deliver one reminder notification."""
        pass


class LoggingNotifier(Notifier):
    def notify(self, title: str, body: str) -> None:
        logger.info("[REMINDER] %s: %s", title, body)


def notification_text(reminder: Reminder, hours_until_due: float, currency: str = "₱") -> tuple[str, str]:
    body = f"Due in {round_half_up(hours_until_due)} hours"
    if reminder.type == "bill" and reminder.amount:
        body += f" - {currency}{format_amount(reminder.amount)}"
    return f"Reminder: {reminder.title}", body


def _mark_notified(reminder: Reminder) -> Reminder:
    return reminder.model_copy(update={"notification_sent": True})


class ReminderNotifier:
    def __init__(
        self,
        store: RecordStore[Reminder],
        notifiers: list[Notifier] | None = None,
        *,
        window_hours: float = 24.0,
        currency: str = "₱",
        interval: int = 60,
    ) -> None:
        self.store = store
        self.notifiers: list[Notifier] = notifiers if notifiers is not None else [LoggingNotifier()]
        self.window_hours = window_hours
        self.currency = currency
        self.interval = interval

    def check_and_notify(self, now: datetime | None = None) -> list[Reminder]:
        """Notify every reminder due within the window once, and mark it as notified."""
        sent: list[Reminder] = []
        for reminder, hours in due_for_notification(self.store.snapshot(), now, self.window_hours):
            title, body = notification_text(reminder, hours, self.currency)
            for notifier in self.notifiers:
                try:
                    notifier.notify(title, body)
                except Exception as e:
                    logger.error(
                        "[REMINDER] %s failed for reminder %s: %s",
                        notifier.__class__.__name__,
                        reminder.id,
                        e,
                    )

            try:
                updated = self.store.modify(reminder.id, _mark_notified)
            except RecordNotFoundError:
                logger.debug("[REMINDER] Reminder %s removed before it was marked.", reminder.id)
                continue
            sent.append(updated)

        if sent:
            logger.info("[REMINDER] Sent %d reminder notification(s).", len(sent))
        return sent

    async def run(self) -> None:
        logger.info("[REMINDER] Checking reminders every %s s.", self.interval)
        while True:
            await asyncio.to_thread(self.check_and_notify)
            await asyncio.sleep(self.interval)
