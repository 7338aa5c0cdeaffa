from unittest.mock import MagicMock, patch

from billwise.repositories.factory import (
    get_bill_repository,
    get_recurring_template_repository,
    get_transaction_repository,
    get_user_repository,
)
from billwise.repositories.sqlalchemy import (
    SQLAlchemyBillRepository,
    SQLAlchemyRecurringTemplateRepository,
    SQLAlchemyTransactionRepository,
    SQLAlchemyUserRepository,
)


class TestFactory:
    @patch("billwise.db.get_connection")
    def test_returns_sqlalchemy_repositories(self, mock_conn):
        mock_conn.return_value = MagicMock()
        assert isinstance(get_user_repository(), SQLAlchemyUserRepository)
        assert isinstance(get_bill_repository(), SQLAlchemyBillRepository)
        assert isinstance(get_recurring_template_repository(), SQLAlchemyRecurringTemplateRepository)
        assert isinstance(get_transaction_repository(), SQLAlchemyTransactionRepository)

    @patch("billwise.db.get_connection")
    def test_shares_singleton_connection(self, mock_conn):
        conn = MagicMock()
        mock_conn.return_value = conn
        assert get_bill_repository().conn is conn
        assert get_transaction_repository().conn is conn
