from __future__ import annotations

import logging
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from billwise.db import initialize_db
from billwise.errors import ScheduleError
from billwise.logging import configure_logging
from web.deps import DBConnectionMiddleware
from web.routes.bill import router as bill_router
from web.routes.recurring import router as recurring_router
from web.routes.user import router as user_router

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    initialize_db()
    logger.info("Application started")
    yield


app = FastAPI(title="billwise", lifespan=lifespan)

app.add_middleware(DBConnectionMiddleware)

app.include_router(user_router)
app.include_router(bill_router)
app.include_router(recurring_router)


@app.exception_handler(ScheduleError)
@app.exception_handler(ValueError)
async def schedule_error_handler(request: Request, exc: ValueError):
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse({"detail": str(exc)}, status_code=422)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled exception on %s %s:\n%s",
        request.method,
        request.url.path,
        traceback.format_exc(),
    )
    return JSONResponse({"detail": "Internal Server Error"}, status_code=500)


@app.get("/health")
async def health():
    return {"status": "ok"}
