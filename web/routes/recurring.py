from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, HTTPException, Request

from billwise.clock import resolve_timezone
from billwise.dates import add_days
from billwise.models.recurring import ProcessResult, RecurringStatus, RecurringTemplate
from billwise.models.user import User
from billwise.services.recurring_service import RecurringService
from web.deps import get_browser_timezone, get_current_user, get_recurring_service
from web.schemas import OccurrencesOut, RecurringIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recurring")

DEFAULT_PROJECTION_DAYS = 90


def _get_owned_template(recurring_service: RecurringService, user: User, template_uuid: str) -> RecurringTemplate:
    template = recurring_service.get_template_by_uuid(template_uuid)
    if template is None or template.user_id != user.id:
        logger.warning("Recurring template not found: uuid=%s user=%s", template_uuid, user.id)
        raise HTTPException(status_code=404, detail="Recurring template not found")
    return template


@router.get("", response_model=list[RecurringTemplate])
async def recurring_list(request: Request):
    user = get_current_user(request)
    return get_recurring_service(request).list_templates(user.id)


@router.post("", response_model=RecurringTemplate, status_code=201)
async def recurring_create(request: Request, payload: RecurringIn):
    user = get_current_user(request)
    logger.info(
        "POST /recurring — user=%s title=%s frequency=%s start=%s",
        user.id,
        payload.title,
        payload.frequency.value,
        payload.start_date,
    )
    template = RecurringTemplate(user_id=user.id, **payload.model_dump())
    return get_recurring_service(request).create_template(template)


@router.post("/process", response_model=ProcessResult)
async def recurring_process(request: Request):
    user = get_current_user(request)
    logger.info("POST /recurring/process — user=%s", user.id)
    return get_recurring_service(request).process_user(user, get_browser_timezone(request))


@router.get("/status", response_model=RecurringStatus)
async def recurring_status(request: Request):
    user = get_current_user(request)
    return get_recurring_service(request).status(user, get_browser_timezone(request))


@router.get("/{template_uuid}", response_model=RecurringTemplate)
async def recurring_detail(request: Request, template_uuid: str):
    user = get_current_user(request)
    return _get_owned_template(get_recurring_service(request), user, template_uuid)


@router.put("/{template_uuid}", response_model=RecurringTemplate)
async def recurring_update(request: Request, template_uuid: str, payload: RecurringIn):
    user = get_current_user(request)
    recurring_service = get_recurring_service(request)
    template = _get_owned_template(recurring_service, user, template_uuid)
    logger.info("PUT /recurring/%s — user=%s", template_uuid, user.id)
    updated = template.model_copy(update=payload.model_dump())
    return recurring_service.update_template(updated)


@router.delete("/{template_uuid}", status_code=204)
async def recurring_delete(request: Request, template_uuid: str):
    user = get_current_user(request)
    recurring_service = get_recurring_service(request)
    template = _get_owned_template(recurring_service, user, template_uuid)
    logger.info("DELETE /recurring/%s — user=%s", template_uuid, user.id)
    recurring_service.delete_template(template.id)


@router.post("/{template_uuid}/pause", response_model=RecurringTemplate)
async def recurring_pause(request: Request, template_uuid: str):
    user = get_current_user(request)
    recurring_service = get_recurring_service(request)
    template = _get_owned_template(recurring_service, user, template_uuid)
    return recurring_service.pause(template)


@router.post("/{template_uuid}/resume", response_model=RecurringTemplate)
async def recurring_resume(request: Request, template_uuid: str):
    user = get_current_user(request)
    recurring_service = get_recurring_service(request)
    template = _get_owned_template(recurring_service, user, template_uuid)
    return recurring_service.resume(template)


@router.get("/{template_uuid}/occurrences", response_model=OccurrencesOut)
async def recurring_occurrences(
    request: Request,
    template_uuid: str,
    start: date | None = None,
    end: date | None = None,
):
    """Project occurrences in ``[start, end]``; defaults to the next 90 days in the owner's zone."""
    user = get_current_user(request)
    recurring_service = get_recurring_service(request)
    template = _get_owned_template(recurring_service, user, template_uuid)
    if start is None:
        tz = resolve_timezone(user.timezone, get_browser_timezone(request))
        start = recurring_service.clock.today(tz)
    if end is None:
        end = add_days(start, DEFAULT_PROJECTION_DAYS)
    occurrences = recurring_service.occurrences(template, start, end)
    return OccurrencesOut(
        template_uuid=template_uuid,
        start=start,
        end=end,
        count=len(occurrences),
        occurrences=occurrences,
        next_occurrence=recurring_service.next_occurrence(template, end),
    )

