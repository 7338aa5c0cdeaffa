class TestUserRoutes:
    def test_create_user(self, client):
        response = client.post("/users", json={"username": "ravi", "timezone": "UTC+05:30"})
        assert response.status_code == 201
        body = response.json()
        assert body["username"] == "ravi"
        assert body["timezone"] == "Asia/Kolkata"
        assert body["expense_reminder_time"] == "18:00"

    def test_create_duplicate(self, client, owner):
        response = client.post("/users", json={"username": "asha"})
        assert response.status_code == 409

    def test_create_invalid_timezone(self, client):
        response = client.post("/users", json={"username": "ravi", "timezone": "Mars/Olympus"})
        assert response.status_code == 422

    def test_me_requires_user_header(self, client):
        assert client.get("/users/me").status_code == 401
        assert client.get("/users/me", headers={"X-User-Id": "42"}).status_code == 401

    def test_me(self, auth_client, owner):
        response = auth_client.get("/users/me")
        assert response.status_code == 200
        assert response.json()["id"] == owner.id

    def test_update_me(self, auth_client):
        response = auth_client.patch(
            "/users/me",
            json={"timezone": "Europe/Berlin", "expense_reminders": True, "expense_reminder_time": "01:00"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["timezone"] == "Europe/Berlin"
        assert body["expense_reminders"] is True
        assert body["email"] == ""

    def test_update_me_bad_time(self, auth_client):
        response = auth_client.patch("/users/me", json={"expense_reminder_time": "25:00"})
        assert response.status_code == 422


class TestExpenseReminderRoute:
    def _enable(self, auth_client, time):
        auth_client.patch("/users/me", json={"expense_reminders": True, "expense_reminder_time": time})

    def test_due_in_owner_zone(self, auth_client):
        # 01:30 in Kolkata
        self._enable(auth_client, "01:00")
        response = auth_client.get("/users/me/expense-reminder")
        assert response.status_code == 200
        assert response.json() == {"show": True, "timezone": "Asia/Kolkata", "reminder_time": "01:00"}

    def test_not_yet_due(self, auth_client):
        self._enable(auth_client, "18:00")
        assert auth_client.get("/users/me/expense-reminder").json()["show"] is False

    def test_dismissed(self, auth_client):
        self._enable(auth_client, "01:00")
        response = auth_client.get(
            "/users/me/expense-reminder",
            params={"dismissed_time": "01:00", "dismissed_date": "2024-06-10", "dismissed_timezone": "Asia/Kolkata"},
        )
        assert response.json()["show"] is False

    def test_browser_zone_used_without_profile_zone(self, auth_client):
        auth_client.patch("/users/me", json={"timezone": ""})
        self._enable(auth_client, "19:00")
        response = auth_client.get("/users/me/expense-reminder", headers={"X-Timezone": "UTC"})
        assert response.json()["timezone"] == "UTC"
        assert response.json()["show"] is True
