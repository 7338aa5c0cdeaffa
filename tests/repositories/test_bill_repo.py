import pytest

from billwise.models.bill import BillFrequency, BillStatus, PaymentMethod


class TestBillRepo:
    def test_create_and_get(self, bill_repo, owner, sample_bill):
        created = bill_repo.create(
            sample_bill(
                user_id=owner.id,
                bill_frequency=BillFrequency.QUARTERLY,
                payment_method=PaymentMethod.AUTO_PAY,
            )
        )
        assert created.id is not None
        assert len(created.uuid) == 26
        assert created.bill_frequency == BillFrequency.QUARTERLY
        assert created.payment_method == PaymentMethod.AUTO_PAY
        assert bill_repo.get_by_uuid(created.uuid).id == created.id

    def test_keeps_legacy_date_string(self, bill_repo, owner, sample_bill):
        created = bill_repo.create(sample_bill(user_id=owner.id, due_date="12/06/2024"))
        assert bill_repo.get_by_id(created.id).due_date == "12/06/2024"

    def test_list_by_user(self, bill_repo, user_repo, owner, sample_bill):
        from billwise.models.user import User

        other = user_repo.create(User(username="ravi"))
        bill_repo.create(sample_bill(user_id=owner.id, title="A"))
        bill_repo.create(sample_bill(user_id=owner.id, title="B"))
        bill_repo.create(sample_bill(user_id=other.id, title="C"))
        assert [b.title for b in bill_repo.list_by_user(owner.id)] == ["A", "B"]

    def test_update(self, bill_repo, owner, sample_bill):
        bill = bill_repo.create(sample_bill(user_id=owner.id))
        bill.title = "Power"
        bill.reminder_days = 5
        updated = bill_repo.update(bill)
        assert updated.title == "Power"
        assert updated.reminder_days == 5

    def test_update_requires_id(self, bill_repo, sample_bill):
        with pytest.raises(ValueError):
            bill_repo.update(sample_bill())

    def test_update_status(self, bill_repo, owner, sample_bill):
        bill = bill_repo.create(sample_bill(user_id=owner.id))
        bill_repo.update_status(bill.id, "paid", "2024-06-10", "2024-07-12")
        fetched = bill_repo.get_by_id(bill.id)
        assert fetched.bill_status == BillStatus.PAID
        assert fetched.last_paid_date == "2024-06-10"
        assert fetched.next_due_date == "2024-07-12"

    def test_soft_delete(self, bill_repo, owner, sample_bill):
        bill = bill_repo.create(sample_bill(user_id=owner.id))
        bill_repo.delete(bill.id)
        assert bill_repo.get_by_id(bill.id) is None
        assert bill_repo.get_by_uuid(bill.uuid) is None
        assert bill_repo.list_by_user(owner.id) == []
