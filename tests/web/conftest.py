"""Web test fixtures — TestClient with shared in-memory SQLite and a pinned clock."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.pool import StaticPool

from billwise.clock import TimezoneClock
from billwise.db import create_schema
from billwise.models.bill import Bill
from billwise.models.recurring import Frequency, RecurringTemplate
from billwise.models.user import User
from billwise.repositories.sqlalchemy import (
    SQLAlchemyBillRepository,
    SQLAlchemyRecurringTemplateRepository,
    SQLAlchemyUserRepository,
)

# 20:00 UTC on 2024-06-09 is 01:30 on 2024-06-10 in Kolkata
NOW = datetime(2024, 6, 9, 20, 0, tzinfo=timezone.utc)


def _make_test_engine():
    """Create a fresh in-memory SQLite engine with shared connection pool."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    with engine.connect() as conn:
        create_schema(conn)

    return engine


def create_user_in_db(engine, username="asha", **overrides) -> User:
    overrides.setdefault("timezone", "Asia/Kolkata")
    with engine.connect() as conn:
        return SQLAlchemyUserRepository(conn).create(User(username=username, **overrides))


def create_bill_in_db(engine, user_id, **overrides) -> Bill:
    defaults = dict(user_id=user_id, title="Electricity", amount=245000, due_date="2024-06-12")
    defaults.update(overrides)
    with engine.connect() as conn:
        return SQLAlchemyBillRepository(conn).create(Bill(**defaults))


def create_template_in_db(engine, user_id, **overrides) -> RecurringTemplate:
    defaults = dict(user_id=user_id, title="Rent", amount=2500000, frequency=Frequency.MONTHLY, start_date="2024-04-05")
    defaults.update(overrides)
    with engine.connect() as conn:
        return SQLAlchemyRecurringTemplateRepository(conn).create(RecurringTemplate(**defaults))


@pytest.fixture(autouse=True)
def web_test_db(monkeypatch):
    """Set up in-memory DB and patch the web app to use it."""
    engine = _make_test_engine()

    import web.deps as deps_module

    monkeypatch.setattr(deps_module, "get_engine", lambda: engine)

    import web.app as app_module

    monkeypatch.setattr(app_module, "initialize_db", lambda: None)

    yield engine

    engine.dispose()


@pytest.fixture(autouse=True)
def fixed_clock(monkeypatch):
    clock = TimezoneClock.at(NOW)

    import web.deps as deps_module
    import web.routes.user as user_routes

    monkeypatch.setattr(deps_module, "get_clock", lambda: clock)
    monkeypatch.setattr(user_routes, "get_clock", lambda: clock)
    return clock


@pytest.fixture()
def test_engine(web_test_db):
    return web_test_db


@pytest.fixture()
def client():
    from starlette.testclient import TestClient

    from web.app import app

    return TestClient(app)


@pytest.fixture()
def owner(test_engine) -> User:
    return create_user_in_db(test_engine)


@pytest.fixture()
def auth_client(client, owner):
    """Client whose requests carry the owner's id, as the upstream gateway would."""
    client.headers["X-User-Id"] = str(owner.id)
    return client
