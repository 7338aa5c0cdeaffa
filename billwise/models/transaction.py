from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from billwise.models.recurring import TransactionType


class Transaction(BaseModel):
    id: int | None = None
    uuid: str = ""
    user_id: int
    title: str
    amount: int = 0  # cents
    currency: str = "INR"
    category: str = ""
    type: TransactionType = TransactionType.EXPENSE
    date: str  # 'YYYY-MM-DD'
    description: str = ""
    parent_recurring_id: int | None = None
    created_at: datetime | None = None
