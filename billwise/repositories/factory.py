from billwise.repositories.base import (
    BillRepository,
    RecurringTemplateRepository,
    TransactionRepository,
    UserRepository,
)


def get_user_repository() -> UserRepository:
    from billwise.db import get_connection
    from billwise.repositories.sqlalchemy import SQLAlchemyUserRepository

    return SQLAlchemyUserRepository(get_connection())


def get_bill_repository() -> BillRepository:
    from billwise.db import get_connection
    from billwise.repositories.sqlalchemy import SQLAlchemyBillRepository

    return SQLAlchemyBillRepository(get_connection())


def get_recurring_template_repository() -> RecurringTemplateRepository:
    from billwise.db import get_connection
    from billwise.repositories.sqlalchemy import SQLAlchemyRecurringTemplateRepository

    return SQLAlchemyRecurringTemplateRepository(get_connection())


def get_transaction_repository() -> TransactionRepository:
    from billwise.db import get_connection
    from billwise.repositories.sqlalchemy import SQLAlchemyTransactionRepository

    return SQLAlchemyTransactionRepository(get_connection())
