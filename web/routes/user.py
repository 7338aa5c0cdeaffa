from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request

from billwise.clock import resolve_timezone
from billwise.models.bill import DismissalRecord
from billwise.models.user import User
from web.deps import get_browser_timezone, get_clock, get_current_user, get_user_service
from web.schemas import ExpenseReminderOut, UserIn, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users")


@router.post("", response_model=User, status_code=201)
async def user_create(request: Request, payload: UserIn):
    logger.info("POST /users — username=%s", payload.username)
    user_service = get_user_service(request)
    if user_service.get_by_username(payload.username.strip()) is not None:
        raise HTTPException(status_code=409, detail="Username already taken")
    return user_service.create_user(
        payload.username,
        email=payload.email,
        timezone=payload.timezone,
        expense_reminder_time=payload.expense_reminder_time,
    )


@router.get("/me", response_model=User)
async def user_me(request: Request):
    return get_current_user(request)


@router.patch("/me", response_model=User)
async def user_update(request: Request, payload: UserUpdate):
    user = get_current_user(request)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    logger.info("PATCH /users/me — user=%s fields=%s", user.id, sorted(changes))
    updated = user.model_copy(update=changes)
    return get_user_service(request).update_user(updated)


@router.get("/me/expense-reminder", response_model=ExpenseReminderOut)
async def user_expense_reminder(
    request: Request,
    dismissed_date: str | None = None,
    dismissed_time: str | None = None,
    dismissed_timezone: str | None = None,
):
    user = get_current_user(request)
    browser_tz = get_browser_timezone(request)
    dismissal = None
    if dismissed_date and dismissed_time and dismissed_timezone:
        dismissal = DismissalRecord(time=dismissed_time, date=dismissed_date, timezone=dismissed_timezone)
    show = get_user_service(request).expense_reminder_due(user, get_clock(), browser_tz, dismissal)
    return ExpenseReminderOut(
        show=show,
        timezone=resolve_timezone(user.timezone, browser_tz),
        reminder_time=user.expense_reminder_time,
    )
