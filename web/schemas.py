"""Request and response bodies for the JSON API."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from billwise.models.bill import (
    Bill,
    BillFrequency,
    BillStatus,
    Classification,
    PaymentMethod,
    ReminderWindow,
)
from billwise.models.recurring import Frequency, Occurrence, TransactionType


class UserIn(BaseModel):
    username: str
    email: str = ""
    timezone: str = ""
    expense_reminder_time: str = ""


class UserUpdate(BaseModel):
    email: str | None = None
    timezone: str | None = None
    bills_alert_enabled: bool | None = None
    expense_reminders: bool | None = None
    expense_reminder_time: str | None = None


class ExpenseReminderOut(BaseModel):
    show: bool
    timezone: str
    reminder_time: str


class BillIn(BaseModel):
    title: str
    amount: int = Field(default=0, ge=0)
    currency: str = "INR"
    category: str = "Bill"
    due_date: str
    bill_status: BillStatus = BillStatus.UNPAID
    bill_frequency: BillFrequency = BillFrequency.MONTHLY
    reminder_days: int = Field(default=3, ge=0)
    last_paid_date: str | None = None
    payment_method: PaymentMethod = PaymentMethod.MANUAL
    notes: str = ""


class BillStatusOut(BaseModel):
    bill: Bill
    classification: Classification
    reminder_window: ReminderWindow
    timezone: str
    today: date


class RecurringIn(BaseModel):
    title: str
    amount: int = Field(default=0, ge=0)
    currency: str = "INR"
    category: str = ""
    type: TransactionType = TransactionType.EXPENSE
    frequency: Frequency
    start_date: str
    end_date: str | None = None
    description: str = ""
    auto_create: bool = True


class OccurrencesOut(BaseModel):
    template_uuid: str
    start: date
    end: date
    count: int
    occurrences: list[Occurrence]
    next_occurrence: date | None = None
