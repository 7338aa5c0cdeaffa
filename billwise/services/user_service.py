from __future__ import annotations

import logging

from billwise.clock import TimezoneClock, is_valid_timezone, normalize_timezone_id, parse_hhmm, resolve_timezone
from billwise.models.bill import DismissalRecord
from billwise.models.user import User
from billwise.repositories.base import UserRepository
from billwise.settings import settings

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, user_repo: UserRepository) -> None:
        self.user_repo = user_repo

    @staticmethod
    def _validate(user: User) -> None:
        if user.timezone and not is_valid_timezone(user.timezone):
            raise ValueError(f"Unknown timezone: {user.timezone}")
        parse_hhmm(user.expense_reminder_time)

    def create_user(
        self,
        username: str,
        email: str = "",
        timezone: str = "",
        expense_reminder_time: str = "",
    ) -> User:
        username = username.strip()
        if not username:
            raise ValueError("Username is required")
        if self.user_repo.get_by_username(username) is not None:
            raise ValueError(f"Username already taken: {username}")
        user = User(
            username=username,
            email=email,
            timezone=normalize_timezone_id(timezone) if timezone else "",
            expense_reminder_time=expense_reminder_time or settings.default_reminder_time,
        )
        self._validate(user)
        created = self.user_repo.create(user)
        logger.info("User created: id=%s, username=%s, timezone=%s", created.id, created.username, created.timezone)
        return created

    def get_user(self, user_id: int) -> User | None:
        result = self.user_repo.get_by_id(user_id)
        logger.debug("get_user id=%s found=%s", user_id, result is not None)
        return result

    def get_by_username(self, username: str) -> User | None:
        return self.user_repo.get_by_username(username)

    def list_users(self) -> list[User]:
        return self.user_repo.list_all()

    def update_user(self, user: User) -> User:
        if user.timezone:
            user.timezone = normalize_timezone_id(user.timezone)
        self._validate(user)
        updated = self.user_repo.update(user)
        logger.info("User %s updated: timezone=%s", updated.id, updated.timezone)
        return updated

    @staticmethod
    def expense_reminder_due(
        user: User,
        clock: TimezoneClock,
        browser_tz: str | None = None,
        dismissal: DismissalRecord | None = None,
    ) -> bool:
        """Whether the daily "log your expenses" reminder should show right now."""
        if not user.expense_reminders or not user.expense_reminder_time:
            return False
        tz = resolve_timezone(user.timezone, browser_tz)
        if dismissal is not None and dismissal.matches(user.expense_reminder_time, clock.today(tz), tz):
            return False
        return clock.has_time_passed(user.expense_reminder_time, tz)
