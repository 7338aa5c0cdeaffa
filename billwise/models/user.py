from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class User(BaseModel):
    id: int | None = None
    username: str
    email: str = ""
    timezone: str = ""  # IANA name; empty means "not set on the profile"
    bills_alert_enabled: bool = True
    expense_reminders: bool = False
    expense_reminder_time: str = "18:00"
    created_at: datetime | None = None
