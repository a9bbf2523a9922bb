from __future__ import annotations

from datetime import datetime

from src.checkin_engine.checkin_engine.checkin.daily_state import DailyStateTracker, derive_daily_state
from src.checkin_engine.checkin_engine.checkin.model import CheckInRecord, DailyState
from src.checkin_engine.checkin_engine.core.enums import CheckInAction, RecordStatus, SourceType
from src.checkin_engine.checkin_engine.core.exceptions import StorageError

NOW = datetime(2026, 3, 2, 13, 30)


def _rec(record_id: str, action: CheckInAction, ts: datetime, status=RecordStatus.SUCCESS) -> CheckInRecord:
    return CheckInRecord(
        record_id=record_id,
        user_id="u-1",
        timestamp=ts,
        source_type=SourceType.LOCATION,
        status=status,
        action=action,
    )


class RecordingRepo:
    def __init__(self, rows=(), *, fail: bool = False):
        self.rows = list(rows)
        self.fail = fail
        self.calls = []

    def list_for_user_between(self, user_id, start, end, *, status=RecordStatus.SUCCESS):
        self.calls.append((user_id, start, end, status))
        if self.fail:
            raise StorageError("timeout")
        return [r for r in self.rows if start <= r.timestamp < end]


def test_no_records_means_check_in():
    state = derive_daily_state([])
    assert state == DailyState()
    assert state.next_action == CheckInAction.CHECK_IN
    assert state.completed is False


def test_check_in_only_means_check_out():
    state = derive_daily_state([_rec("a", CheckInAction.CHECK_IN, datetime(2026, 3, 2, 8, 55))])
    assert state.next_action == CheckInAction.CHECK_OUT
    assert state.check_in.record_id == "a"
    assert state.check_out is None


def test_both_records_complete_the_day():
    state = derive_daily_state(
        [
            _rec("a", CheckInAction.CHECK_IN, datetime(2026, 3, 2, 8, 55)),
            _rec("b", CheckInAction.CHECK_OUT, datetime(2026, 3, 2, 18, 5)),
        ]
    )
    assert state.completed is True
    assert state.check_out.record_id == "b"


def test_action_field_is_authoritative_not_ordering():
    # A lone check-out is never mistaken for a check-in.
    state = derive_daily_state([_rec("b", CheckInAction.CHECK_OUT, datetime(2026, 3, 2, 7, 0))])
    assert state.check_in is None
    assert state.check_out.record_id == "b"
    assert state.next_action == CheckInAction.CHECK_IN


def test_failed_records_are_ignored_and_earliest_wins():
    state = derive_daily_state(
        [
            _rec("late", CheckInAction.CHECK_IN, datetime(2026, 3, 2, 10, 0)),
            _rec("failed", CheckInAction.CHECK_IN, datetime(2026, 3, 2, 8, 0), status=RecordStatus.FAILED),
            _rec("early", CheckInAction.CHECK_IN, datetime(2026, 3, 2, 9, 0)),
        ]
    )
    assert state.check_in.record_id == "early"


def test_tracker_queries_the_local_day_window():
    repo = RecordingRepo(
        [
            _rec("yesterday", CheckInAction.CHECK_IN, datetime(2026, 3, 1, 23, 59)),
            _rec("today", CheckInAction.CHECK_IN, datetime(2026, 3, 2, 0, 0)),
        ]
    )
    lookup = DailyStateTracker(repo, clock=lambda: NOW).load("u-1")

    assert lookup.error is None
    assert lookup.state.check_in.record_id == "today"
    assert repo.calls == [("u-1", datetime(2026, 3, 2), datetime(2026, 3, 3), RecordStatus.SUCCESS)]


def test_tracker_read_failure_returns_empty_state_and_error():
    lookup = DailyStateTracker(RecordingRepo(fail=True), clock=lambda: NOW).load("u-1")

    assert lookup.state == DailyState()
    assert lookup.state.next_action == CheckInAction.CHECK_IN
    assert isinstance(lookup.error, StorageError)
