from __future__ import annotations

import logging
from datetime import date

from billwise.clock import TimezoneClock, resolve_timezone
from billwise.dates import format_date, parse_date
from billwise.due_status import DueStatusClassifier
from billwise.errors import InvalidDueDate
from billwise.models.bill import (
    Bill,
    BillAlerts,
    BillStats,
    BillStatus,
    Classification,
    DismissalRecord,
    ReminderWindow,
)
from billwise.models.user import User
from billwise.recurrence import next_bill_due_date
from billwise.repositories.base import BillRepository

logger = logging.getLogger(__name__)


class BillService:
    def __init__(
        self,
        bill_repo: BillRepository,
        clock: TimezoneClock | None = None,
        classifier: DueStatusClassifier | None = None,
    ) -> None:
        self.bill_repo = bill_repo
        self.clock = clock or TimezoneClock()
        self.classifier = classifier or DueStatusClassifier()

    def owner_today(self, user: User, browser_tz: str | None = None) -> tuple[str, date]:
        """Resolve the owner's zone and the calendar date it is there right now."""
        tz = resolve_timezone(user.timezone, browser_tz)
        return tz, self.clock.today(tz)

    @staticmethod
    def _validate(bill: Bill) -> None:
        parse_date(bill.due_date, InvalidDueDate)
        if bill.bill_status == BillStatus.PAID and not bill.last_paid_date:
            raise ValueError("A paid bill needs a last paid date")

    def create_bill(self, bill: Bill) -> Bill:
        self._validate(bill)
        created = self.bill_repo.create(bill)
        logger.info(
            "Bill created: id=%s, user=%s, title=%s, due=%s",
            created.id,
            created.user_id,
            created.title,
            created.due_date,
        )
        return created

    def update_bill(self, bill: Bill) -> Bill:
        if bill.id is None:
            raise ValueError("Cannot update bill without an id")
        self._validate(bill)
        updated = self.bill_repo.update(bill)
        logger.info("Bill updated: id=%s, status=%s, due=%s", updated.id, updated.bill_status.value, updated.due_date)
        return updated

    def get_bill(self, bill_id: int) -> Bill | None:
        result = self.bill_repo.get_by_id(bill_id)
        logger.debug("get_bill id=%s found=%s", bill_id, result is not None)
        return result

    def get_bill_by_uuid(self, uuid: str) -> Bill | None:
        result = self.bill_repo.get_by_uuid(uuid)
        logger.debug("get_bill_by_uuid uuid=%s found=%s", uuid, result is not None)
        return result

    def list_bills(self, user_id: int) -> list[Bill]:
        result = self.bill_repo.list_by_user(user_id)
        logger.debug("Listed %d bills for user=%s", len(result), user_id)
        return result

    def delete_bill(self, bill_id: int) -> None:
        self.bill_repo.delete(bill_id)
        logger.info("Bill %s soft-deleted", bill_id)

    def mark_paid(self, bill: Bill, user: User, browser_tz: str | None = None) -> Bill:
        """Mark paid as of the owner's today and record when the next payment falls due."""
        if bill.id is None:
            raise ValueError("Cannot mark bill paid without an id")
        _, today = self.owner_today(user, browser_tz)
        next_due = next_bill_due_date(bill)
        bill.bill_status = BillStatus.PAID
        bill.last_paid_date = format_date(today)
        bill.next_due_date = format_date(next_due) if next_due else None
        self.bill_repo.update_status(bill.id, bill.bill_status.value, bill.last_paid_date, bill.next_due_date)
        logger.info("Bill %s marked as paid on %s (next due %s)", bill.id, bill.last_paid_date, bill.next_due_date)
        return bill

    def mark_unpaid(self, bill: Bill) -> Bill:
        if bill.id is None:
            raise ValueError("Cannot mark bill unpaid without an id")
        bill.bill_status = BillStatus.UNPAID
        bill.last_paid_date = None
        bill.next_due_date = None
        self.bill_repo.update_status(bill.id, bill.bill_status.value, None, None)
        logger.info("Bill %s marked as unpaid", bill.id)
        return bill

    def classify(self, bill: Bill, user: User, browser_tz: str | None = None) -> Classification:
        _, today = self.owner_today(user, browser_tz)
        return self.classifier.classify(bill, today)

    def reminder_window(self, bill: Bill) -> ReminderWindow:
        return self.classifier.reminder_window(bill)

    def alerts(
        self,
        user: User,
        browser_tz: str | None = None,
        dismissal: DismissalRecord | None = None,
    ) -> BillAlerts:
        if user.id is None:
            raise ValueError("Cannot compute alerts for user without an id")
        tz, today = self.owner_today(user, browser_tz)
        if not user.bills_alert_enabled:
            logger.debug("Bill alerts disabled for user=%s", user.id)
            return BillAlerts(today=today, timezone=tz)
        alerts = self.classifier.group(
            self.bill_repo.list_by_user(user.id),
            today,
            dismissal=dismissal,
            reminder_time=user.expense_reminder_time,
            timezone=tz,
        )
        logger.debug(
            "Alerts for user=%s on %s (%s): overdue=%d reminders=%d upcoming=%d errors=%d",
            user.id,
            today,
            tz,
            len(alerts.overdue),
            len(alerts.reminders),
            len(alerts.upcoming),
            len(alerts.errors),
        )
        return alerts

    def stats(self, user: User, browser_tz: str | None = None) -> BillStats:
        if user.id is None:
            raise ValueError("Cannot compute stats for user without an id")
        _, today = self.owner_today(user, browser_tz)
        return self.classifier.stats(self.bill_repo.list_by_user(user.id), today)
