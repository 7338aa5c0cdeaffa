from __future__ import annotations

import logging
from datetime import date

from billwise.clock import TimezoneClock, resolve_timezone
from billwise.dates import format_date
from billwise.models.recurring import (
    Occurrence,
    ProcessResult,
    RecurringStatus,
    RecurringTemplate,
)
from billwise.models.transaction import Transaction
from billwise.models.user import User
from billwise.recurrence import RecurrenceExpander
from billwise.repositories.base import (
    RecurringTemplateRepository,
    TransactionRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)


class RecurringService:
    def __init__(
        self,
        template_repo: RecurringTemplateRepository,
        transaction_repo: TransactionRepository | None = None,
        user_repo: UserRepository | None = None,
        clock: TimezoneClock | None = None,
        expander: RecurrenceExpander | None = None,
    ) -> None:
        self.template_repo = template_repo
        self.transaction_repo = transaction_repo
        self.user_repo = user_repo
        self.clock = clock or TimezoneClock()
        self.expander = expander or RecurrenceExpander()

    def create_template(self, template: RecurringTemplate) -> RecurringTemplate:
        self.expander.bounds(template)
        created = self.template_repo.create(template)
        logger.info(
            "Recurring template created: id=%s, user=%s, title=%s, frequency=%s, start=%s",
            created.id,
            created.user_id,
            created.title,
            created.frequency.value,
            created.start_date,
        )
        return created

    def update_template(self, template: RecurringTemplate) -> RecurringTemplate:
        if template.id is None:
            raise ValueError("Cannot update recurring template without an id")
        self.expander.bounds(template)
        updated = self.template_repo.update(template)
        logger.info("Recurring template updated: id=%s, amount=%d", updated.id, updated.amount)
        return updated

    def get_template(self, template_id: int) -> RecurringTemplate | None:
        result = self.template_repo.get_by_id(template_id)
        logger.debug("get_template id=%s found=%s", template_id, result is not None)
        return result

    def get_template_by_uuid(self, uuid: str) -> RecurringTemplate | None:
        result = self.template_repo.get_by_uuid(uuid)
        logger.debug("get_template_by_uuid uuid=%s found=%s", uuid, result is not None)
        return result

    def list_templates(self, user_id: int) -> list[RecurringTemplate]:
        result = self.template_repo.list_by_user(user_id)
        logger.debug("Listed %d recurring templates for user=%s", len(result), user_id)
        return result

    def pause(self, template: RecurringTemplate) -> RecurringTemplate:
        if template.id is None:
            raise ValueError("Cannot pause recurring template without an id")
        self.template_repo.set_active(template.id, False)
        template.active = False
        logger.info("Recurring template %s paused", template.id)
        return template

    def resume(self, template: RecurringTemplate) -> RecurringTemplate:
        if template.id is None:
            raise ValueError("Cannot resume recurring template without an id")
        self.template_repo.set_active(template.id, True)
        template.active = True
        logger.info("Recurring template %s resumed", template.id)
        return template

    def delete_template(self, template_id: int) -> None:
        self.template_repo.delete(template_id)
        logger.info("Recurring template %s soft-deleted", template_id)

    def occurrences(self, template: RecurringTemplate, range_start: date, range_end: date) -> list[Occurrence]:
        return self.expander.occurrences_between(template, range_start, range_end)

    def next_occurrence(self, template: RecurringTemplate, after: date) -> date | None:
        return self.expander.next_occurrence(template, after)

    # ---- Materialisation ----

    def _require_transactions(self) -> TransactionRepository:
        if self.transaction_repo is None:
            raise RuntimeError("Transaction repository not configured")
        return self.transaction_repo

    def process_template(self, template: RecurringTemplate, today: date) -> int:
        """Create a transaction for every due occurrence up to ``today`` that has none yet.

        Catches up on missed runs; returns how many transactions were created.
        A template whose end date has passed is deactivated afterwards.
        """
        transaction_repo = self._require_transactions()
        if template.id is None:
            raise ValueError("Cannot process recurring template without an id")
        if not template.active or not template.auto_create:
            return 0

        start, end = self.expander.bounds(template)
        existing = transaction_repo.list_dates_for_template(template.id)
        created = 0
        for occurrence in self.expander.occurrences_between(template, start, today):
            day = format_date(occurrence.date)
            if day in existing:
                continue
            transaction_repo.create(
                Transaction(
                    user_id=template.user_id,
                    title=template.title,
                    amount=occurrence.amount,
                    currency=template.currency,
                    category=template.category,
                    type=template.type,
                    date=day,
                    description=template.description,
                    parent_recurring_id=template.id,
                )
            )
            created += 1
            logger.info("Created instance of template %s on %s", template.id, day)

        if end is not None and today > end:
            self.template_repo.set_active(template.id, False)
            template.active = False
            logger.info("Deactivated template %s: end date %s passed", template.id, end)
        return created

    def process_user(self, user: User, browser_tz: str | None = None) -> ProcessResult:
        if user.id is None:
            raise ValueError("Cannot process recurring templates for user without an id")
        tz = resolve_timezone(user.timezone, browser_tz)
        today = self.clock.today(tz)
        result = ProcessResult(user_id=user.id)
        for template in self.template_repo.list_auto_create(user.id):
            try:
                created = self.process_template(template, today)
            except ValueError as exc:
                message = f"Error processing template {template.uuid or template.id}: {exc}"
                logger.warning(message)
                result.errors.append(message)
                continue
            result.processed += 1
            if created:
                result.created += created
            else:
                result.skipped += 1
        logger.info(
            "Recurring processing for user=%s on %s (%s): processed=%d created=%d skipped=%d errors=%d",
            user.id,
            today,
            tz,
            result.processed,
            result.created,
            result.skipped,
            len(result.errors),
        )
        return result

    def process_all(self) -> tuple[ProcessResult, list[ProcessResult]]:
        """Run ``process_user`` for every user owning an active auto-create template."""
        if self.user_repo is None:
            raise RuntimeError("User repository not configured")
        total = ProcessResult()
        per_user: list[ProcessResult] = []
        for user_id in self.template_repo.list_user_ids_with_auto_create():
            user = self.user_repo.get_by_id(user_id)
            if user is None:
                message = f"User {user_id} not found"
                logger.warning(message)
                total.errors.append(message)
                continue
            result = self.process_user(user)
            per_user.append(result)
            total.merge(result)
        logger.info(
            "Recurring processing complete: users=%d processed=%d created=%d skipped=%d errors=%d",
            len(per_user),
            total.processed,
            total.created,
            total.skipped,
            len(total.errors),
        )
        return total, per_user

    def status(self, user: User, browser_tz: str | None = None) -> RecurringStatus:
        if user.id is None:
            raise ValueError("Cannot compute recurring status for user without an id")
        today = self.clock.today(resolve_timezone(user.timezone, browser_tz))
        status = RecurringStatus()
        for template in self.template_repo.list_by_user(user.id):
            try:
                _, end = self.expander.bounds(template)
            except ValueError as exc:
                logger.warning("Recurring template %s has unreadable dates: %s", template.id, exc)
                end = None
            if end is not None and end < today:
                status.expired += 1
            elif template.active:
                status.active += 1
            else:
                status.paused += 1
        if self.transaction_repo is not None:
            status.total_instances = self.transaction_repo.count_instances_for_user(user.id)
        return status
