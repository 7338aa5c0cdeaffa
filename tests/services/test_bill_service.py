from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import pytest

from billwise.clock import TimezoneClock
from billwise.errors import InvalidDueDate
from billwise.models.bill import Bill, BillFrequency, BillStatus, Bucket, DismissalRecord
from billwise.models.user import User
from billwise.services.bill_service import BillService

# 20:00 UTC on 2024-06-09 is 01:30 on 2024-06-10 in Kolkata
NOW = datetime(2024, 6, 9, 20, 0, tzinfo=timezone.utc)


def _user(**overrides) -> User:
    defaults = dict(id=1, username="asha", timezone="Asia/Kolkata")
    defaults.update(overrides)
    return User(**defaults)


def _bill(**overrides) -> Bill:
    defaults = dict(id=10, uuid="bill-uuid", user_id=1, title="Electricity", amount=245000, due_date="2024-06-12")
    defaults.update(overrides)
    return Bill(**defaults)


class TestBillService:
    def setup_method(self):
        self.mock_repo = MagicMock()
        self.service = BillService(self.mock_repo, clock=TimezoneClock.at(NOW))

    def test_owner_today_uses_profile_zone(self):
        assert self.service.owner_today(_user()) == ("Asia/Kolkata", date(2024, 6, 10))

    def test_owner_today_falls_back_to_browser_zone(self):
        assert self.service.owner_today(_user(timezone=""), "UTC") == ("UTC", date(2024, 6, 9))

    def test_create_bill(self):
        bill = _bill(id=None, uuid="")
        self.mock_repo.create.return_value = _bill()
        result = self.service.create_bill(bill)
        assert result.id == 10
        self.mock_repo.create.assert_called_once_with(bill)

    def test_create_bill_rejects_bad_due_date(self):
        with pytest.raises(InvalidDueDate):
            self.service.create_bill(_bill(due_date="whenever"))
        self.mock_repo.create.assert_not_called()

    def test_create_paid_bill_needs_last_paid_date(self):
        with pytest.raises(ValueError, match="last paid date"):
            self.service.create_bill(_bill(bill_status=BillStatus.PAID))

    def test_update_bill_requires_id(self):
        with pytest.raises(ValueError, match="without an id"):
            self.service.update_bill(_bill(id=None))

    def test_update_bill(self):
        bill = _bill(title="Power")
        self.mock_repo.update.return_value = bill
        assert self.service.update_bill(bill).title == "Power"

    def test_get_and_list(self):
        self.mock_repo.get_by_id.return_value = _bill()
        self.mock_repo.get_by_uuid.return_value = None
        self.mock_repo.list_by_user.return_value = [_bill(), _bill(id=11)]
        assert self.service.get_bill(10).id == 10
        assert self.service.get_bill_by_uuid("missing") is None
        assert len(self.service.list_bills(1)) == 2

    def test_delete_bill(self):
        self.service.delete_bill(10)
        self.mock_repo.delete.assert_called_once_with(10)

    def test_mark_paid_monthly(self):
        bill = _bill(due_date="2024-01-31", bill_frequency=BillFrequency.MONTHLY)
        result = self.service.mark_paid(bill, _user())
        assert result.bill_status == BillStatus.PAID
        assert result.last_paid_date == "2024-06-10"
        assert result.next_due_date == "2024-02-29"
        self.mock_repo.update_status.assert_called_once_with(10, "paid", "2024-06-10", "2024-02-29")

    def test_mark_paid_one_time(self):
        bill = _bill(bill_frequency=BillFrequency.ONE_TIME)
        result = self.service.mark_paid(bill, _user())
        assert result.next_due_date is None

    def test_mark_paid_requires_id(self):
        with pytest.raises(ValueError):
            self.service.mark_paid(_bill(id=None), _user())

    def test_mark_unpaid(self):
        bill = _bill(bill_status=BillStatus.PAID, last_paid_date="2024-06-01", next_due_date="2024-07-12")
        result = self.service.mark_unpaid(bill)
        assert result.bill_status == BillStatus.UNPAID
        assert result.last_paid_date is None
        assert result.next_due_date is None
        self.mock_repo.update_status.assert_called_once_with(10, "unpaid", None, None)

    def test_classify_in_owner_zone(self):
        result = self.service.classify(_bill(due_date="2024-06-12"), _user())
        assert result.bucket == Bucket.REMINDER_DUE
        assert result.days_until_due == 2

    def test_reminder_window(self):
        window = self.service.reminder_window(_bill(due_date="2024-06-12", reminder_days=3))
        assert window.start == date(2024, 6, 9)

    def test_alerts(self):
        self.mock_repo.list_by_user.return_value = [
            _bill(id=1, due_date="2024-06-09"),
            _bill(id=2, due_date="2024-06-12"),
            _bill(id=3, due_date="2024-06-16"),
        ]
        alerts = self.service.alerts(_user())
        assert [a.bill.id for a in alerts.overdue] == [1]
        assert [a.bill.id for a in alerts.reminders] == [2]
        assert [a.bill.id for a in alerts.upcoming] == [3]
        self.mock_repo.list_by_user.assert_called_once_with(1)

    def test_alerts_carry_owner_date_and_zone(self):
        self.mock_repo.list_by_user.return_value = []
        alerts = self.service.alerts(_user())
        assert (alerts.today, alerts.timezone) == (date(2024, 6, 10), "Asia/Kolkata")

    def test_alerts_dismissed_in_owner_zone(self):
        self.mock_repo.list_by_user.return_value = [_bill(due_date="2024-06-12")]
        dismissal = DismissalRecord(time="18:00", date="2024-06-10", timezone="Asia/Kolkata")
        alerts = self.service.alerts(_user(expense_reminder_time="18:00"), dismissal=dismissal)
        assert alerts.reminders == []
        assert alerts.reminders_dismissed is True

    def test_alerts_disabled(self):
        alerts = self.service.alerts(_user(bills_alert_enabled=False))
        assert alerts.total == 0
        assert alerts.today == date(2024, 6, 10)
        self.mock_repo.list_by_user.assert_not_called()

    def test_alerts_requires_user_id(self):
        with pytest.raises(ValueError):
            self.service.alerts(_user(id=None))

    def test_stats(self):
        self.mock_repo.list_by_user.return_value = [_bill(due_date="2024-06-01"), _bill(due_date="2024-06-11")]
        stats = self.service.stats(_user())
        assert stats.total_bills == 2
        assert stats.overdue_bills == 1
        assert stats.reminder_bills == 1
