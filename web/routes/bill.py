from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request

from billwise.models.bill import Bill, BillAlerts, BillStats, DismissalRecord
from billwise.models.user import User
from billwise.services.bill_service import BillService
from web.deps import get_bill_service, get_browser_timezone, get_current_user
from web.schemas import BillIn, BillStatusOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bills")


def _get_owned_bill(bill_service: BillService, user: User, bill_uuid: str) -> Bill:
    bill = bill_service.get_bill_by_uuid(bill_uuid)
    if bill is None or bill.user_id != user.id:
        logger.warning("Bill not found: uuid=%s user=%s", bill_uuid, user.id)
        raise HTTPException(status_code=404, detail="Bill not found")
    return bill


@router.get("", response_model=list[Bill])
async def bill_list(request: Request):
    user = get_current_user(request)
    return get_bill_service(request).list_bills(user.id)


@router.post("", response_model=Bill, status_code=201)
async def bill_create(request: Request, payload: BillIn):
    user = get_current_user(request)
    logger.info("POST /bills — user=%s title=%s due=%s", user.id, payload.title, payload.due_date)
    bill = Bill(user_id=user.id, **payload.model_dump())
    return get_bill_service(request).create_bill(bill)


@router.get("/alerts", response_model=BillAlerts)
async def bill_alerts(
    request: Request,
    dismissed_date: str | None = None,
    dismissed_time: str | None = None,
    dismissed_timezone: str | None = None,
):
    user = get_current_user(request)
    dismissal = None
    if dismissed_date and dismissed_time and dismissed_timezone:
        dismissal = DismissalRecord(time=dismissed_time, date=dismissed_date, timezone=dismissed_timezone)
    return get_bill_service(request).alerts(user, get_browser_timezone(request), dismissal)


@router.get("/stats", response_model=BillStats)
async def bill_stats(request: Request):
    user = get_current_user(request)
    return get_bill_service(request).stats(user, get_browser_timezone(request))


@router.get("/{bill_uuid}", response_model=Bill)
async def bill_detail(request: Request, bill_uuid: str):
    user = get_current_user(request)
    return _get_owned_bill(get_bill_service(request), user, bill_uuid)


@router.put("/{bill_uuid}", response_model=Bill)
async def bill_update(request: Request, bill_uuid: str, payload: BillIn):
    user = get_current_user(request)
    bill_service = get_bill_service(request)
    bill = _get_owned_bill(bill_service, user, bill_uuid)
    logger.info("PUT /bills/%s — user=%s", bill_uuid, user.id)
    updated = bill.model_copy(update=payload.model_dump())
    return bill_service.update_bill(updated)


@router.delete("/{bill_uuid}", status_code=204)
async def bill_delete(request: Request, bill_uuid: str):
    user = get_current_user(request)
    bill_service = get_bill_service(request)
    bill = _get_owned_bill(bill_service, user, bill_uuid)
    logger.info("DELETE /bills/%s — user=%s", bill_uuid, user.id)
    bill_service.delete_bill(bill.id)


@router.post("/{bill_uuid}/pay", response_model=Bill)
async def bill_pay(request: Request, bill_uuid: str):
    user = get_current_user(request)
    bill_service = get_bill_service(request)
    bill = _get_owned_bill(bill_service, user, bill_uuid)
    return bill_service.mark_paid(bill, user, get_browser_timezone(request))


@router.post("/{bill_uuid}/unpay", response_model=Bill)
async def bill_unpay(request: Request, bill_uuid: str):
    user = get_current_user(request)
    bill_service = get_bill_service(request)
    bill = _get_owned_bill(bill_service, user, bill_uuid)
    return bill_service.mark_unpaid(bill)


@router.get("/{bill_uuid}/status", response_model=BillStatusOut)
async def bill_status(request: Request, bill_uuid: str):
    user = get_current_user(request)
    bill_service = get_bill_service(request)
    bill = _get_owned_bill(bill_service, user, bill_uuid)
    tz, today = bill_service.owner_today(user, get_browser_timezone(request))
    return BillStatusOut(
        bill=bill,
        classification=bill_service.classifier.classify(bill, today),
        reminder_window=bill_service.reminder_window(bill),
        timezone=tz,
        today=today,
    )
