"""Table definitions, applied idempotently by ``billwise.db.initialize_db``."""

SCHEMA_DDL = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username VARCHAR(255) NOT NULL UNIQUE,
    email VARCHAR(255) NOT NULL DEFAULT '',
    timezone VARCHAR(64) NOT NULL DEFAULT '',
    bills_alert_enabled TINYINT NOT NULL DEFAULT 1,
    expense_reminders TINYINT NOT NULL DEFAULT 0,
    expense_reminder_time VARCHAR(5) NOT NULL DEFAULT '18:00',
    created_at DATETIME NOT NULL
);

CREATE TABLE IF NOT EXISTS bills (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    user_id INTEGER NOT NULL REFERENCES users(id),
    title VARCHAR(255) NOT NULL,
    amount INTEGER NOT NULL DEFAULT 0,
    currency VARCHAR(8) NOT NULL DEFAULT 'INR',
    category VARCHAR(64) NOT NULL DEFAULT 'Bill',
    due_date VARCHAR(32) NOT NULL,
    bill_status VARCHAR(16) NOT NULL DEFAULT 'unpaid',
    bill_frequency VARCHAR(16) NOT NULL DEFAULT 'monthly',
    reminder_days INTEGER NOT NULL DEFAULT 3,
    last_paid_date VARCHAR(32),
    next_due_date VARCHAR(32),
    payment_method VARCHAR(32) NOT NULL DEFAULT 'manual',
    notes TEXT NOT NULL DEFAULT '',
    created_at DATETIME NOT NULL,
    deleted_at DATETIME
);

CREATE TABLE IF NOT EXISTS recurring_templates (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    user_id INTEGER NOT NULL REFERENCES users(id),
    title VARCHAR(255) NOT NULL,
    amount INTEGER NOT NULL DEFAULT 0,
    currency VARCHAR(8) NOT NULL DEFAULT 'INR',
    category VARCHAR(64) NOT NULL DEFAULT '',
    type VARCHAR(16) NOT NULL DEFAULT 'expense',
    frequency VARCHAR(16) NOT NULL,
    start_date VARCHAR(32) NOT NULL,
    end_date VARCHAR(32),
    description TEXT NOT NULL DEFAULT '',
    active TINYINT NOT NULL DEFAULT 1,
    auto_create TINYINT NOT NULL DEFAULT 1,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    deleted_at DATETIME
);

CREATE TABLE IF NOT EXISTS transactions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    user_id INTEGER NOT NULL REFERENCES users(id),
    title VARCHAR(255) NOT NULL,
    amount INTEGER NOT NULL DEFAULT 0,
    currency VARCHAR(8) NOT NULL DEFAULT 'INR',
    category VARCHAR(64) NOT NULL DEFAULT '',
    type VARCHAR(16) NOT NULL DEFAULT 'expense',
    date VARCHAR(10) NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    parent_recurring_id INTEGER REFERENCES recurring_templates(id),
    created_at DATETIME NOT NULL
);

CREATE INDEX IF NOT EXISTS ix_transactions_parent_date ON transactions (parent_recurring_id, date)
"""


def statements() -> list[str]:
    return [stmt.strip() for stmt in SCHEMA_DDL.strip().split(";") if stmt.strip()]
