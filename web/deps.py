from __future__ import annotations

import logging

from fastapi import HTTPException, Request
from starlette.types import ASGIApp, Receive, Scope, Send

from billwise.clock import TimezoneClock
from billwise.db import get_engine
from billwise.models.user import User
from billwise.repositories.sqlalchemy import (
    SQLAlchemyBillRepository,
    SQLAlchemyRecurringTemplateRepository,
    SQLAlchemyTransactionRepository,
    SQLAlchemyUserRepository,
)
from billwise.services.bill_service import BillService
from billwise.services.recurring_service import RecurringService
from billwise.services.user_service import UserService

logger = logging.getLogger(__name__)

# Set by the upstream auth gateway after it has verified the bearer token.
USER_ID_HEADER = "x-user-id"
# The browser's own zone, used when the profile has none.
TIMEZONE_HEADER = "x-timezone"


class DBConnectionMiddleware:
    """Pure ASGI middleware that closes the per-request DB connection, if one was opened."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        request.state.db_conn = None
        try:
            await self.app(scope, receive, send)
        finally:
            conn = getattr(request.state, "db_conn", None)
            if conn is not None:
                conn.close()
                logger.debug("DB connection closed for %s %s", request.method, request.url.path)


def _get_conn(request: Request):
    """Open the request's connection on first use; DBConnectionMiddleware closes it."""
    if request.state.db_conn is None:
        logger.debug("Creating DB connection for %s %s", request.method, request.url.path)
        request.state.db_conn = get_engine().connect()
    return request.state.db_conn


def get_clock() -> TimezoneClock:
    return TimezoneClock()


def get_user_service(request: Request) -> UserService:
    return UserService(SQLAlchemyUserRepository(_get_conn(request)))


def get_bill_service(request: Request) -> BillService:
    return BillService(SQLAlchemyBillRepository(_get_conn(request)), clock=get_clock())


def get_recurring_service(request: Request) -> RecurringService:
    conn = _get_conn(request)
    return RecurringService(
        SQLAlchemyRecurringTemplateRepository(conn),
        SQLAlchemyTransactionRepository(conn),
        SQLAlchemyUserRepository(conn),
        clock=get_clock(),
    )


def get_browser_timezone(request: Request) -> str | None:
    value = request.headers.get(TIMEZONE_HEADER, "").strip()
    return value or None


def get_current_user(request: Request) -> User:
    raw = request.headers.get(USER_ID_HEADER, "").strip()
    if not raw.isdigit():
        logger.info("Unauthenticated request: %s %s", request.method, request.url.path)
        raise HTTPException(status_code=401, detail="Not authenticated")
    user = get_user_service(request).get_user(int(raw))
    if user is None:
        logger.warning("Unknown user id %s on %s %s", raw, request.method, request.url.path)
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user
