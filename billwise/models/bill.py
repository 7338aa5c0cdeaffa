from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class BillStatus(str, Enum):
    UNPAID = "unpaid"
    PAID = "paid"
    OVERDUE = "overdue"
    PENDING = "pending"


class BillFrequency(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    ONE_TIME = "one-time"


class PaymentMethod(str, Enum):
    MANUAL = "manual"
    AUTO_PAY = "auto-pay"
    BANK_TRANSFER = "bank-transfer"
    CREDIT_CARD = "credit-card"
    DEBIT_CARD = "debit-card"
    CASH = "cash"


class Bucket(str, Enum):
    """Mutually exclusive due-status classification of a bill. Closed set."""

    PAID = "PAID"
    OVERDUE = "OVERDUE"
    REMINDER_DUE = "REMINDER_DUE"
    UPCOMING = "UPCOMING"
    SCHEDULED = "SCHEDULED"


class Bill(BaseModel):
    id: int | None = None
    uuid: str = ""
    user_id: int
    title: str
    amount: int = 0  # cents
    currency: str = "INR"
    category: str = "Bill"
    due_date: str  # as stored: 'YYYY-MM-DD', ISO datetime or 'DD/MM/YYYY'
    bill_status: BillStatus = BillStatus.UNPAID
    bill_frequency: BillFrequency = BillFrequency.MONTHLY
    reminder_days: int = Field(default=3, ge=0)
    last_paid_date: str | None = None
    next_due_date: str | None = None
    payment_method: PaymentMethod = PaymentMethod.MANUAL
    notes: str = ""
    created_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def is_paid(self) -> bool:
        return self.bill_status == BillStatus.PAID


class Classification(BaseModel):
    bucket: Bucket
    days_until_due: int


class ReminderWindow(BaseModel):
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


class BillAlert(BaseModel):
    bill: Bill
    bucket: Bucket
    days_until_due: int


class BillRecordError(BaseModel):
    bill_id: int | None = None
    bill_uuid: str = ""
    error: str


class BillAlerts(BaseModel):
    """Displayed alert groups, with the owner-local date and zone they were computed for."""

    today: date | None = None
    timezone: str = ""
    overdue: list[BillAlert] = []
    reminders: list[BillAlert] = []
    upcoming: list[BillAlert] = []
    errors: list[BillRecordError] = []
    reminders_dismissed: bool = False

    @property
    def total(self) -> int:
        return len(self.overdue) + len(self.reminders) + len(self.upcoming)


class BillStats(BaseModel):
    total_bills: int = 0
    unpaid_bills: int = 0
    overdue_bills: int = 0
    upcoming_bills: int = 0
    reminder_bills: int = 0


class DismissalRecord(BaseModel):
    """A reminder dismissal: which reminder time, on which local date, in which zone."""

    time: str  # HH:MM
    date: str  # YYYY-MM-DD, zone-local
    timezone: str

    def matches(self, reminder_time: str, today: date, timezone: str) -> bool:
        """Legacy offset spellings compare equal to their zone ('UTC+05:30' == 'Asia/Kolkata')."""
        from billwise.clock import normalize_timezone_id

        return (self.time, self.date, normalize_timezone_id(self.timezone)) == (
            reminder_time,
            today.isoformat(),
            normalize_timezone_id(timezone),
        )
