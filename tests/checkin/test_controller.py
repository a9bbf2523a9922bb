from __future__ import annotations

from flask import Flask

from src.checkin_engine.checkin_engine.checkin.controller import register
from src.checkin_engine.checkin_engine.checkin.model import DailyState
from src.checkin_engine.checkin_engine.checkin.session import CheckInSession
from src.checkin_engine.checkin_engine.core.enums import CheckInAction
from src.checkin_engine.checkin_engine.core.exceptions import StorageError


class FakeOrchestrator:
    async def get_daily_state(self, user_id):
        return DailyState()


class FakePolicy:
    def __init__(self, action=None):
        self.action = action

    def expected_action(self, *, user_id, state, now, fallback_shift_id=None):
        return self.action


class FakeContainer:
    def __init__(self, *, staff_down: bool = False, action=None):
        self.staff_down = staff_down
        self.orchestrator = FakeOrchestrator()
        self.reminder_policy = FakePolicy(action)

    def open_session(self, user_id):
        if self.staff_down:
            raise StorageError("staff table unavailable")
        return CheckInSession(user_id=user_id)


def _client(container):
    app = Flask(__name__)
    app.secret_key = "test"
    register(app, container)
    client = app.test_client()
    with client.session_transaction() as s:
        s["user_id"] = "u-1"
    return client


def test_reminder_check_emits_overdue_reminder():
    resp = _client(FakeContainer(action=CheckInAction.CHECK_IN)).post("/api/reminders/check")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["emitted"] is True
    assert body["action"] == "check-in"
    assert body["reminder_count"] == 1


def test_reminder_check_reports_storage_failure_opening_session():
    resp = _client(FakeContainer(staff_down=True)).post("/api/reminders/check")

    assert resp.status_code == 500
    assert resp.get_json()["success"] is False


def test_reminder_check_requires_sign_in():
    app = Flask(__name__)
    app.secret_key = "test"
    register(app, FakeContainer())

    assert app.test_client().post("/api/reminders/check").status_code == 401
