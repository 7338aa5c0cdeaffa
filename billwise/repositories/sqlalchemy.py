from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Connection, text
from sqlalchemy.engine import RowMapping
from ulid import ULID

from billwise.models.bill import Bill, BillFrequency, BillStatus, PaymentMethod
from billwise.models.recurring import Frequency, RecurringTemplate, TransactionType
from billwise.models.transaction import Transaction
from billwise.models.user import User
from billwise.repositories.base import (
    BillRepository,
    RecurringTemplateRepository,
    TransactionRepository,
    UserRepository,
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SQLAlchemyUserRepository(UserRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_user(row: RowMapping) -> User:
        return User(
            id=row["id"],
            username=row["username"],
            email=row.get("email", ""),
            timezone=row.get("timezone", ""),
            bills_alert_enabled=bool(row.get("bills_alert_enabled", True)),
            expense_reminders=bool(row.get("expense_reminders", False)),
            expense_reminder_time=row.get("expense_reminder_time", "18:00"),
            created_at=row["created_at"],
        )

    def create(self, user: User) -> User:
        self.conn.execute(
            text(
                "INSERT INTO users (username, email, timezone, bills_alert_enabled, "
                "expense_reminders, expense_reminder_time, created_at) "
                "VALUES (:username, :email, :timezone, :bills_alert_enabled, "
                ":expense_reminders, :expense_reminder_time, :created_at)"
            ),
            {
                "username": user.username,
                "email": user.email,
                "timezone": user.timezone,
                "bills_alert_enabled": user.bills_alert_enabled,
                "expense_reminders": user.expense_reminders,
                "expense_reminder_time": user.expense_reminder_time,
                "created_at": _now(),
            },
        )
        self.conn.commit()
        result = self.get_by_username(user.username)
        if result is None:
            raise RuntimeError(f"Failed to retrieve user after create (username={user.username})")
        return result

    def get_by_id(self, user_id: int) -> User | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM users WHERE id = :id"),
                {"id": user_id},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_user(row)

    def get_by_username(self, username: str) -> User | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM users WHERE username = :username"),
                {"username": username},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_user(row)

    def list_all(self) -> list[User]:
        rows = self.conn.execute(text("SELECT * FROM users ORDER BY username")).mappings().fetchall()
        return [self._row_to_user(row) for row in rows]

    def update(self, user: User) -> User:
        if user.id is None:
            raise ValueError("Cannot update user without an id")
        self.conn.execute(
            text(
                "UPDATE users SET email = :email, timezone = :timezone, "
                "bills_alert_enabled = :bills_alert_enabled, expense_reminders = :expense_reminders, "
                "expense_reminder_time = :expense_reminder_time WHERE id = :id"
            ),
            {
                "email": user.email,
                "timezone": user.timezone,
                "bills_alert_enabled": user.bills_alert_enabled,
                "expense_reminders": user.expense_reminders,
                "expense_reminder_time": user.expense_reminder_time,
                "id": user.id,
            },
        )
        self.conn.commit()
        result = self.get_by_id(user.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve user after update (id={user.id})")
        return result


class SQLAlchemyBillRepository(BillRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_bill(row: RowMapping) -> Bill:
        return Bill(
            id=row["id"],
            uuid=row["uuid"],
            user_id=row["user_id"],
            title=row["title"],
            amount=row["amount"],
            currency=row["currency"],
            category=row["category"],
            due_date=row["due_date"],
            bill_status=BillStatus(row["bill_status"]),
            bill_frequency=BillFrequency(row["bill_frequency"]),
            reminder_days=row["reminder_days"],
            last_paid_date=row["last_paid_date"],
            next_due_date=row["next_due_date"],
            payment_method=PaymentMethod(row["payment_method"]),
            notes=row["notes"],
            created_at=row["created_at"],
            deleted_at=row["deleted_at"],
        )

    def create(self, bill: Bill) -> Bill:
        bill_uuid = str(ULID())
        result = self.conn.execute(
            text(
                "INSERT INTO bills (uuid, user_id, title, amount, currency, category, due_date, "
                "bill_status, bill_frequency, reminder_days, last_paid_date, next_due_date, "
                "payment_method, notes, created_at) "
                "VALUES (:uuid, :user_id, :title, :amount, :currency, :category, :due_date, "
                ":bill_status, :bill_frequency, :reminder_days, :last_paid_date, :next_due_date, "
                ":payment_method, :notes, :created_at)"
            ),
            {
                "uuid": bill_uuid,
                "user_id": bill.user_id,
                "title": bill.title,
                "amount": bill.amount,
                "currency": bill.currency,
                "category": bill.category,
                "due_date": bill.due_date,
                "bill_status": bill.bill_status.value,
                "bill_frequency": bill.bill_frequency.value,
                "reminder_days": bill.reminder_days,
                "last_paid_date": bill.last_paid_date,
                "next_due_date": bill.next_due_date,
                "payment_method": bill.payment_method.value,
                "notes": bill.notes,
                "created_at": _now(),
            },
        )
        bill_id = result.lastrowid
        self.conn.commit()
        created = self.get_by_id(bill_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve bill after create (id={bill_id})")
        return created

    def get_by_id(self, bill_id: int) -> Bill | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM bills WHERE id = :id AND deleted_at IS NULL"),
                {"id": bill_id},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_bill(row)

    def get_by_uuid(self, uuid: str) -> Bill | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM bills WHERE uuid = :uuid AND deleted_at IS NULL"),
                {"uuid": uuid},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_bill(row)

    def list_by_user(self, user_id: int) -> list[Bill]:
        rows = (
            self.conn.execute(
                text("SELECT * FROM bills WHERE user_id = :user_id AND deleted_at IS NULL ORDER BY id"),
                {"user_id": user_id},
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_bill(row) for row in rows]

    def update(self, bill: Bill) -> Bill:
        if bill.id is None:
            raise ValueError("Cannot update bill without an id")
        self.conn.execute(
            text(
                "UPDATE bills SET title = :title, amount = :amount, currency = :currency, "
                "category = :category, due_date = :due_date, bill_status = :bill_status, "
                "bill_frequency = :bill_frequency, reminder_days = :reminder_days, "
                "last_paid_date = :last_paid_date, next_due_date = :next_due_date, "
                "payment_method = :payment_method, notes = :notes WHERE id = :id"
            ),
            {
                "title": bill.title,
                "amount": bill.amount,
                "currency": bill.currency,
                "category": bill.category,
                "due_date": bill.due_date,
                "bill_status": bill.bill_status.value,
                "bill_frequency": bill.bill_frequency.value,
                "reminder_days": bill.reminder_days,
                "last_paid_date": bill.last_paid_date,
                "next_due_date": bill.next_due_date,
                "payment_method": bill.payment_method.value,
                "notes": bill.notes,
                "id": bill.id,
            },
        )
        self.conn.commit()
        result = self.get_by_id(bill.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve bill after update (id={bill.id})")
        return result

    def update_status(
        self,
        bill_id: int,
        bill_status: str,
        last_paid_date: str | None,
        next_due_date: str | None,
    ) -> None:
        self.conn.execute(
            text(
                "UPDATE bills SET bill_status = :bill_status, last_paid_date = :last_paid_date, "
                "next_due_date = :next_due_date WHERE id = :id"
            ),
            {
                "bill_status": bill_status,
                "last_paid_date": last_paid_date,
                "next_due_date": next_due_date,
                "id": bill_id,
            },
        )
        self.conn.commit()

    def delete(self, bill_id: int) -> None:
        self.conn.execute(
            text("UPDATE bills SET deleted_at = :deleted_at WHERE id = :id"),
            {"deleted_at": _now(), "id": bill_id},
        )
        self.conn.commit()


class SQLAlchemyRecurringTemplateRepository(RecurringTemplateRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_template(row: RowMapping) -> RecurringTemplate:
        return RecurringTemplate(
            id=row["id"],
            uuid=row["uuid"],
            user_id=row["user_id"],
            title=row["title"],
            amount=row["amount"],
            currency=row["currency"],
            category=row["category"],
            type=TransactionType(row["type"]),
            frequency=Frequency(row["frequency"]),
            start_date=row["start_date"],
            end_date=row["end_date"],
            description=row["description"],
            active=bool(row["active"]),
            auto_create=bool(row["auto_create"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            deleted_at=row["deleted_at"],
        )

    def create(self, template: RecurringTemplate) -> RecurringTemplate:
        template_uuid = str(ULID())
        now = _now()
        result = self.conn.execute(
            text(
                "INSERT INTO recurring_templates (uuid, user_id, title, amount, currency, category, "
                "type, frequency, start_date, end_date, description, active, auto_create, "
                "created_at, updated_at) "
                "VALUES (:uuid, :user_id, :title, :amount, :currency, :category, "
                ":type, :frequency, :start_date, :end_date, :description, :active, :auto_create, "
                ":created_at, :updated_at)"
            ),
            {
                "uuid": template_uuid,
                "user_id": template.user_id,
                "title": template.title,
                "amount": template.amount,
                "currency": template.currency,
                "category": template.category,
                "type": template.type.value,
                "frequency": template.frequency.value,
                "start_date": template.start_date,
                "end_date": template.end_date,
                "description": template.description,
                "active": template.active,
                "auto_create": template.auto_create,
                "created_at": now,
                "updated_at": now,
            },
        )
        template_id = result.lastrowid
        self.conn.commit()
        created = self.get_by_id(template_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve recurring template after create (id={template_id})")
        return created

    def get_by_id(self, template_id: int) -> RecurringTemplate | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM recurring_templates WHERE id = :id AND deleted_at IS NULL"),
                {"id": template_id},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_template(row)

    def get_by_uuid(self, uuid: str) -> RecurringTemplate | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM recurring_templates WHERE uuid = :uuid AND deleted_at IS NULL"),
                {"uuid": uuid},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_template(row)

    def list_by_user(self, user_id: int) -> list[RecurringTemplate]:
        rows = (
            self.conn.execute(
                text(
                    "SELECT * FROM recurring_templates WHERE user_id = :user_id "
                    "AND deleted_at IS NULL ORDER BY id"
                ),
                {"user_id": user_id},
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_template(row) for row in rows]

    def list_auto_create(self, user_id: int) -> list[RecurringTemplate]:
        rows = (
            self.conn.execute(
                text(
                    "SELECT * FROM recurring_templates WHERE user_id = :user_id AND active = 1 "
                    "AND auto_create = 1 AND deleted_at IS NULL ORDER BY id"
                ),
                {"user_id": user_id},
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_template(row) for row in rows]

    def list_user_ids_with_auto_create(self) -> list[int]:
        rows = self.conn.execute(
            text(
                "SELECT DISTINCT user_id FROM recurring_templates WHERE active = 1 "
                "AND auto_create = 1 AND deleted_at IS NULL ORDER BY user_id"
            )
        ).fetchall()
        return [row[0] for row in rows]

    def update(self, template: RecurringTemplate) -> RecurringTemplate:
        if template.id is None:
            raise ValueError("Cannot update recurring template without an id")
        self.conn.execute(
            text(
                "UPDATE recurring_templates SET title = :title, amount = :amount, currency = :currency, "
                "category = :category, type = :type, frequency = :frequency, start_date = :start_date, "
                "end_date = :end_date, description = :description, active = :active, "
                "auto_create = :auto_create, updated_at = :updated_at WHERE id = :id"
            ),
            {
                "title": template.title,
                "amount": template.amount,
                "currency": template.currency,
                "category": template.category,
                "type": template.type.value,
                "frequency": template.frequency.value,
                "start_date": template.start_date,
                "end_date": template.end_date,
                "description": template.description,
                "active": template.active,
                "auto_create": template.auto_create,
                "updated_at": _now(),
                "id": template.id,
            },
        )
        self.conn.commit()
        result = self.get_by_id(template.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve recurring template after update (id={template.id})")
        return result

    def set_active(self, template_id: int, active: bool) -> None:
        self.conn.execute(
            text("UPDATE recurring_templates SET active = :active, updated_at = :updated_at WHERE id = :id"),
            {"active": active, "updated_at": _now(), "id": template_id},
        )
        self.conn.commit()

    def delete(self, template_id: int) -> None:
        self.conn.execute(
            text("UPDATE recurring_templates SET deleted_at = :deleted_at, active = 0 WHERE id = :id"),
            {"deleted_at": _now(), "id": template_id},
        )
        self.conn.commit()


class SQLAlchemyTransactionRepository(TransactionRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_transaction(row: RowMapping) -> Transaction:
        return Transaction(
            id=row["id"],
            uuid=row["uuid"],
            user_id=row["user_id"],
            title=row["title"],
            amount=row["amount"],
            currency=row["currency"],
            category=row["category"],
            type=TransactionType(row["type"]),
            date=row["date"],
            description=row["description"],
            parent_recurring_id=row["parent_recurring_id"],
            created_at=row["created_at"],
        )

    def create(self, transaction: Transaction) -> Transaction:
        transaction_uuid = str(ULID())
        result = self.conn.execute(
            text(
                "INSERT INTO transactions (uuid, user_id, title, amount, currency, category, type, "
                "date, description, parent_recurring_id, created_at) "
                "VALUES (:uuid, :user_id, :title, :amount, :currency, :category, :type, "
                ":date, :description, :parent_recurring_id, :created_at)"
            ),
            {
                "uuid": transaction_uuid,
                "user_id": transaction.user_id,
                "title": transaction.title,
                "amount": transaction.amount,
                "currency": transaction.currency,
                "category": transaction.category,
                "type": transaction.type.value,
                "date": transaction.date,
                "description": transaction.description,
                "parent_recurring_id": transaction.parent_recurring_id,
                "created_at": _now(),
            },
        )
        transaction_id = result.lastrowid
        self.conn.commit()
        row = (
            self.conn.execute(text("SELECT * FROM transactions WHERE id = :id"), {"id": transaction_id})
            .mappings()
            .fetchone()
        )
        if row is None:
            raise RuntimeError(f"Failed to retrieve transaction after create (id={transaction_id})")
        return self._row_to_transaction(row)

    def list_by_user(self, user_id: int) -> list[Transaction]:
        rows = (
            self.conn.execute(
                text("SELECT * FROM transactions WHERE user_id = :user_id ORDER BY date, id"),
                {"user_id": user_id},
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_transaction(row) for row in rows]

    def list_dates_for_template(self, template_id: int) -> set[str]:
        rows = self.conn.execute(
            text("SELECT date FROM transactions WHERE parent_recurring_id = :template_id"),
            {"template_id": template_id},
        ).fetchall()
        return {row[0] for row in rows}

    def count_instances_for_user(self, user_id: int) -> int:
        count = self.conn.execute(
            text(
                "SELECT COUNT(*) FROM transactions WHERE user_id = :user_id "
                "AND parent_recurring_id IS NOT NULL"
            ),
            {"user_id": user_id},
        ).scalar()
        return int(count or 0)
