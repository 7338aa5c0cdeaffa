from __future__ import annotations

import datetime as dt
from enum import Enum

from pydantic import BaseModel


class Frequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class RecurringTemplate(BaseModel):
    id: int | None = None
    uuid: str = ""
    user_id: int
    title: str
    amount: int = 0  # cents
    currency: str = "INR"
    category: str = ""
    type: TransactionType = TransactionType.EXPENSE
    frequency: Frequency
    start_date: str  # as stored, see billwise.dates.parse_date
    end_date: str | None = None
    description: str = ""
    active: bool = True
    auto_create: bool = True
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None
    deleted_at: dt.datetime | None = None


class Occurrence(BaseModel):
    """One dated instance of a template. Computed on demand, never stored."""

    template_id: int | None = None
    template_uuid: str = ""
    date: dt.date
    amount: int
    currency: str = ""
    title: str = ""
    type: TransactionType = TransactionType.EXPENSE


class ProcessResult(BaseModel):
    user_id: int | None = None
    processed: int = 0
    created: int = 0
    skipped: int = 0
    errors: list[str] = []

    def merge(self, other: ProcessResult) -> None:
        self.processed += other.processed
        self.created += other.created
        self.skipped += other.skipped
        self.errors.extend(other.errors)


class RecurringStatus(BaseModel):
    active: int = 0
    paused: int = 0
    expired: int = 0
    total_instances: int = 0
