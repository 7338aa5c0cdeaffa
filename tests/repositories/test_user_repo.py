from billwise.models.user import User


class TestUserRepo:
    def test_create_and_get(self, user_repo):
        created = user_repo.create(User(username="asha", email="a@example.com", timezone="Asia/Kolkata"))
        assert created.id is not None
        assert created.created_at is not None
        assert created.bills_alert_enabled is True
        assert created.expense_reminders is False

        fetched = user_repo.get_by_id(created.id)
        assert fetched.username == "asha"
        assert fetched.timezone == "Asia/Kolkata"

    def test_get_missing(self, user_repo):
        assert user_repo.get_by_id(999) is None
        assert user_repo.get_by_username("ghost") is None

    def test_list_all_sorted(self, user_repo):
        user_repo.create(User(username="zoe"))
        user_repo.create(User(username="asha"))
        assert [u.username for u in user_repo.list_all()] == ["asha", "zoe"]

    def test_update(self, user_repo):
        user = user_repo.create(User(username="asha"))
        user.timezone = "Europe/Berlin"
        user.expense_reminders = True
        user.expense_reminder_time = "20:15"
        user.bills_alert_enabled = False
        updated = user_repo.update(user)
        assert updated.timezone == "Europe/Berlin"
        assert updated.expense_reminders is True
        assert updated.expense_reminder_time == "20:15"
        assert updated.bills_alert_enabled is False
