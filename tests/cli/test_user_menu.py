from unittest.mock import MagicMock, patch

from billwise.models.user import User


class TestUserManagementMenu:
    @patch("billwise.cli.user_menu.questionary")
    def test_back_exits(self, mock_q):
        from billwise.cli.user_menu import user_management_menu

        mock_q.select.return_value.ask.return_value = "Back"
        user_management_menu(MagicMock())

    @patch("billwise.cli.user_menu._create_user")
    @patch("billwise.cli.user_menu.questionary")
    def test_route_create(self, mock_q, mock_create):
        from billwise.cli.user_menu import user_management_menu

        mock_q.select.return_value.ask.side_effect = ["Create User", "Back"]
        mock_service = MagicMock()
        user_management_menu(mock_service)
        mock_create.assert_called_once_with(mock_service)

    @patch("billwise.cli.user_menu._change_timezone")
    @patch("billwise.cli.user_menu.questionary")
    def test_route_change_timezone(self, mock_q, mock_change):
        from billwise.cli.user_menu import user_management_menu

        mock_q.select.return_value.ask.side_effect = ["Change Timezone", "Back"]
        mock_service = MagicMock()
        user_management_menu(mock_service)
        mock_change.assert_called_once_with(mock_service)

    @patch("billwise.cli.user_menu._list_users")
    @patch("billwise.cli.user_menu.questionary")
    def test_route_list(self, mock_q, mock_list):
        from billwise.cli.user_menu import user_management_menu

        mock_q.select.return_value.ask.side_effect = ["List Users", "Back"]
        mock_service = MagicMock()
        user_management_menu(mock_service)
        mock_list.assert_called_once_with(mock_service)


class TestCreateUser:
    @patch("billwise.cli.user_menu.questionary")
    def test_cancel_empty_username(self, mock_q):
        from billwise.cli.user_menu import _create_user

        mock_q.text.return_value.ask.return_value = ""
        mock_service = MagicMock()
        _create_user(mock_service)
        mock_service.create_user.assert_not_called()

    @patch("billwise.cli.user_menu.questionary")
    def test_success(self, mock_q):
        from billwise.cli.user_menu import _create_user

        mock_q.text.return_value.ask.side_effect = ["asha", "", "Asia/Kolkata"]
        mock_service = MagicMock()
        mock_service.create_user.return_value = User(id=1, username="asha")
        _create_user(mock_service)
        mock_service.create_user.assert_called_once_with("asha", email="", timezone="Asia/Kolkata")

    @patch("billwise.cli.user_menu.questionary")
    def test_validation_error_reported(self, mock_q):
        from billwise.cli.user_menu import _create_user

        mock_q.text.return_value.ask.side_effect = ["asha", "", "Mars/Olympus"]
        mock_service = MagicMock()
        mock_service.create_user.side_effect = ValueError("Unknown timezone: Mars/Olympus")
        _create_user(mock_service)


class TestChangeTimezone:
    @patch("billwise.cli.user_menu.questionary")
    def test_updates_selected_user(self, mock_q):
        from billwise.cli.user_menu import _change_timezone

        mock_service = MagicMock()
        mock_service.list_users.return_value = [User(id=1, username="asha")]
        mock_q.select.return_value.ask.return_value = "asha"
        mock_q.text.return_value.ask.return_value = " Europe/Berlin "
        _change_timezone(mock_service)
        updated = mock_service.update_user.call_args.args[0]
        assert updated.timezone == "Europe/Berlin"

    @patch("billwise.cli.user_menu.questionary")
    def test_no_users(self, mock_q):
        from billwise.cli.user_menu import _change_timezone

        mock_service = MagicMock()
        mock_service.list_users.return_value = []
        _change_timezone(mock_service)
        mock_q.select.assert_not_called()


class TestListUsers:
    def test_list(self):
        from billwise.cli.user_menu import _list_users

        mock_service = MagicMock()
        mock_service.list_users.return_value = [
            User(id=1, username="asha", timezone="Asia/Kolkata", expense_reminders=True),
            User(id=2, username="ravi"),
        ]
        _list_users(mock_service)

    def test_empty(self):
        from billwise.cli.user_menu import _list_users

        mock_service = MagicMock()
        mock_service.list_users.return_value = []
        _list_users(mock_service)
