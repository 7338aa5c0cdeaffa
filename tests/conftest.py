"""Root conftest — in-memory SQLite engine and sample-record factories."""

from __future__ import annotations

import pytest
from sqlalchemy import Connection, create_engine, event
from sqlalchemy.engine import Engine

from billwise.db import create_schema
from billwise.models.bill import Bill
from billwise.models.recurring import Frequency, RecurringTemplate
from billwise.models.user import User


@pytest.fixture()
def db_engine() -> Engine:
    engine = create_engine("sqlite:///:memory:")

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    return engine


@pytest.fixture()
def db_connection(db_engine: Engine) -> Connection:
    conn = db_engine.connect()
    create_schema(conn)
    yield conn
    conn.close()


def _sample_user(**overrides) -> User:
    defaults = dict(
        id=1,
        username="asha",
        email="asha@example.com",
        timezone="Asia/Kolkata",
    )
    defaults.update(overrides)
    return User(**defaults)


def _sample_bill(user_id: int = 1, **overrides) -> Bill:
    defaults = dict(
        user_id=user_id,
        title="Electricity",
        amount=245000,
        due_date="2024-06-12",
        reminder_days=3,
    )
    defaults.update(overrides)
    return Bill(**defaults)


def _sample_template(user_id: int = 1, **overrides) -> RecurringTemplate:
    defaults = dict(
        user_id=user_id,
        title="Rent",
        amount=2500000,
        category="Housing",
        frequency=Frequency.MONTHLY,
        start_date="2024-01-05",
    )
    defaults.update(overrides)
    return RecurringTemplate(**defaults)


@pytest.fixture()
def sample_user():
    return _sample_user


@pytest.fixture()
def sample_bill():
    return _sample_bill


@pytest.fixture()
def sample_template():
    return _sample_template
