import pytest
from sqlalchemy import Connection

from billwise.models.user import User
from billwise.repositories.sqlalchemy import (
    SQLAlchemyBillRepository,
    SQLAlchemyRecurringTemplateRepository,
    SQLAlchemyTransactionRepository,
    SQLAlchemyUserRepository,
)


@pytest.fixture()
def user_repo(db_connection: Connection) -> SQLAlchemyUserRepository:
    return SQLAlchemyUserRepository(db_connection)


@pytest.fixture()
def bill_repo(db_connection: Connection) -> SQLAlchemyBillRepository:
    return SQLAlchemyBillRepository(db_connection)


@pytest.fixture()
def template_repo(db_connection: Connection) -> SQLAlchemyRecurringTemplateRepository:
    return SQLAlchemyRecurringTemplateRepository(db_connection)


@pytest.fixture()
def transaction_repo(db_connection: Connection) -> SQLAlchemyTransactionRepository:
    return SQLAlchemyTransactionRepository(db_connection)


@pytest.fixture()
def owner(user_repo) -> User:
    return user_repo.create(User(username="asha", timezone="Asia/Kolkata"))
