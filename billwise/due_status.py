from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, timedelta

from billwise.constants import UPCOMING_HORIZON_DAYS
from billwise.dates import calendar_day_difference, parse_date
from billwise.errors import InvalidDueDate
from billwise.models.bill import (
    Bill,
    BillAlert,
    BillAlerts,
    BillRecordError,
    BillStats,
    Bucket,
    Classification,
    DismissalRecord,
    ReminderWindow,
)

logger = logging.getLogger(__name__)


class DueStatusClassifier:
    """Assigns each bill exactly one bucket relative to the owner's today.

    Priority: PAID > OVERDUE > REMINDER_DUE > UPCOMING > SCHEDULED. The
    reminder window includes the due day itself and wins over the upcoming
    horizon when both apply.
    """

    horizon_days = UPCOMING_HORIZON_DAYS

    def due_date(self, bill: Bill) -> date:
        return parse_date(bill.due_date, InvalidDueDate)

    def classify(self, bill: Bill, today: date) -> Classification:
        days = calendar_day_difference(self.due_date(bill), today)
        if bill.is_paid:
            bucket = Bucket.PAID
        elif days < 0:
            bucket = Bucket.OVERDUE
        elif days == 0 or days <= bill.reminder_days:
            bucket = Bucket.REMINDER_DUE
        elif days <= self.horizon_days:
            bucket = Bucket.UPCOMING
        else:
            bucket = Bucket.SCHEDULED
        return Classification(bucket=bucket, days_until_due=days)

    def reminder_window(self, bill: Bill) -> ReminderWindow:
        due = self.due_date(bill)
        return ReminderWindow(start=due - timedelta(days=bill.reminder_days), end=due)

    def group(
        self,
        bills: Iterable[Bill],
        today: date,
        dismissal: DismissalRecord | None = None,
        reminder_time: str | None = None,
        timezone: str | None = None,
    ) -> BillAlerts:
        """Split bills into the displayed alert groups.

        A bill lands in at most one group. Bills with an unparsable due date
        are reported in ``errors`` and left out of every group. A dismissal
        matching ``(reminder_time, today, timezone)`` hides the reminder group
        only; overdue and upcoming bills stay visible.
        """
        alerts = BillAlerts(today=today, timezone=timezone or "")
        for bill in bills:
            try:
                result = self.classify(bill, today)
            except InvalidDueDate as exc:
                logger.warning("Skipping bill %s in alerts: %s", bill.uuid or bill.id, exc)
                alerts.errors.append(BillRecordError(bill_id=bill.id, bill_uuid=bill.uuid, error=str(exc)))
                continue

            alert = BillAlert(bill=bill, bucket=result.bucket, days_until_due=result.days_until_due)
            if result.bucket == Bucket.OVERDUE:
                alerts.overdue.append(alert)
            elif result.bucket == Bucket.REMINDER_DUE:
                alerts.reminders.append(alert)
            elif result.bucket == Bucket.UPCOMING:
                alerts.upcoming.append(alert)

        if (
            dismissal is not None
            and reminder_time is not None
            and timezone is not None
            and dismissal.matches(reminder_time, today, timezone)
        ):
            logger.debug("Reminders dismissed for %s in %s", today, timezone)
            alerts.reminders = []
            alerts.reminders_dismissed = True

        for group in (alerts.overdue, alerts.reminders, alerts.upcoming):
            group.sort(key=lambda a: (a.days_until_due, a.bill.title))
        return alerts

    def stats(self, bills: Iterable[Bill], today: date) -> BillStats:
        stats = BillStats()
        for bill in bills:
            stats.total_bills += 1
            if not bill.is_paid:
                stats.unpaid_bills += 1
            try:
                bucket = self.classify(bill, today).bucket
            except InvalidDueDate:
                continue
            if bucket == Bucket.OVERDUE:
                stats.overdue_bills += 1
            elif bucket == Bucket.REMINDER_DUE:
                stats.reminder_bills += 1
            elif bucket == Bucket.UPCOMING:
                stats.upcoming_bills += 1
        return stats
