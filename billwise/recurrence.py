from __future__ import annotations

import logging
from datetime import date, timedelta

from billwise.constants import MAX_OCCURRENCES
from billwise.dates import add_months, add_years, months_between, parse_date
from billwise.errors import InvalidDueDate, InvalidEndDate, InvalidStartDate, RangeTooLarge
from billwise.models.bill import Bill, BillFrequency
from billwise.models.recurring import Frequency, Occurrence, RecurringTemplate

logger = logging.getLogger(__name__)

_BILL_FREQUENCY_MONTHS = {
    BillFrequency.MONTHLY: 1,
    BillFrequency.QUARTERLY: 3,
    BillFrequency.YEARLY: 12,
}

_STEPS = {
    Frequency.DAILY: lambda start, n: start + timedelta(days=n),
    Frequency.WEEKLY: lambda start, n: start + timedelta(weeks=n),
    Frequency.MONTHLY: add_months,
    Frequency.YEARLY: add_years,
}


def nth_occurrence(start: date, frequency: Frequency, n: int) -> date:
    """The n-th occurrence counted from the anchor ``start`` (n=0 is ``start``).

    Month and year steps are always taken from the anchor, so a Jan 31 start
    yields Feb 28/29 and then Mar 31 rather than drifting to the 28th.
    Raises ``OverflowError`` when the occurrence would fall after ``date.max``.
    """
    if frequency not in _STEPS:
        raise ValueError(f"Unsupported frequency: {frequency}")
    try:
        return _STEPS[frequency](start, n)
    except (OverflowError, ValueError) as exc:
        raise OverflowError(f"Occurrence {n} from {start} falls after {date.max}") from exc


def _occurrence_or_none(start: date, frequency: Frequency, n: int) -> date | None:
    try:
        return nth_occurrence(start, frequency, n)
    except OverflowError:
        return None


def first_index_on_or_after(start: date, frequency: Frequency, target: date) -> int:
    """Smallest n >= 0 with nth_occurrence(start, frequency, n) >= target.

    Near ``date.max`` this may be the first index with no representable date.
    """
    if target <= start:
        return 0
    days = (target - start).days
    if frequency == Frequency.DAILY:
        return days
    if frequency == Frequency.WEEKLY:
        return -(-days // 7)
    if frequency == Frequency.MONTHLY:
        n = months_between(start, target)
    else:
        n = target.year - start.year
    while True:
        candidate = _occurrence_or_none(start, frequency, n)
        # None: the step ran off the calendar, so every later index is out too.
        if candidate is None or candidate >= target:
            return n
        n += 1


class RecurrenceExpander:
    """Expands recurring templates into dated occurrences.

    Stateless: every call is a pure function of its arguments, so the same
    inputs always give the same ascending list.
    """

    def __init__(self, max_occurrences: int = MAX_OCCURRENCES) -> None:
        self.max_occurrences = max_occurrences

    @staticmethod
    def bounds(template: RecurringTemplate) -> tuple[date, date | None]:
        start = parse_date(template.start_date, InvalidStartDate)
        if not template.end_date:
            return start, None
        end = parse_date(template.end_date, InvalidEndDate)
        if end < start:
            raise InvalidEndDate(template.end_date, "before start date")
        return start, end

    def count_between(self, template: RecurringTemplate, range_start: date, range_end: date) -> int:
        start, end = self.bounds(template)
        return len(self._index_range(template.frequency, start, end, range_start, range_end))

    def _index_range(
        self,
        frequency: Frequency,
        start: date,
        end: date | None,
        range_start: date,
        range_end: date,
    ) -> range:
        limit = range_end if end is None else min(range_end, end)
        if range_start > limit or start > limit:
            return range(0)
        first = first_index_on_or_after(start, frequency, range_start)
        stop = first_index_on_or_after(start, frequency, limit)
        if _occurrence_or_none(start, frequency, stop) == limit:
            stop += 1
        return range(first, max(first, stop))

    def occurrences_between(
        self,
        template: RecurringTemplate,
        range_start: date,
        range_end: date,
    ) -> list[Occurrence]:
        start, end = self.bounds(template)
        indexes = self._index_range(template.frequency, start, end, range_start, range_end)
        if len(indexes) > self.max_occurrences:
            logger.warning(
                "Rejecting expansion of template %s: %d occurrences in %s..%s",
                template.uuid or template.id,
                len(indexes),
                range_start,
                range_end,
            )
            raise RangeTooLarge(len(indexes), self.max_occurrences)

        occurrences = [
            Occurrence(
                template_id=template.id,
                template_uuid=template.uuid,
                date=nth_occurrence(start, template.frequency, n),
                amount=template.amount,
                currency=template.currency,
                title=template.title,
                type=template.type,
            )
            for n in indexes
        ]
        logger.debug(
            "Expanded template %s into %d occurrences for %s..%s",
            template.uuid or template.id,
            len(occurrences),
            range_start,
            range_end,
        )
        return occurrences

    def next_occurrence(self, template: RecurringTemplate, after: date) -> date | None:
        """First occurrence strictly after ``after``, or None once the template has ended."""
        start, end = self.bounds(template)
        if after >= date.max:
            return None
        n = first_index_on_or_after(start, template.frequency, after + timedelta(days=1))
        candidate = _occurrence_or_none(start, template.frequency, n)
        if candidate is None or (end is not None and candidate > end):
            return None
        return candidate


def next_bill_due_date(bill: Bill) -> date | None:
    """The due date following the bill's current one, or None for one-time bills."""
    due = parse_date(bill.due_date, InvalidDueDate)
    months = _BILL_FREQUENCY_MONTHS.get(bill.bill_frequency)
    if months is None:
        return None
    return add_months(due, months)
