from __future__ import annotations

import asyncio
import logging
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import CheckInErrorKind, CheckInMode
from ..core.exceptions import StorageError, ValidationError
from ..container import Container
from ..reminders.model import Reminder
from ..reminders.scheduler import ReminderScheduler
from .model import CheckInRecord, DailyState
from .position import SubmittedPositionSource
from .session import CheckInSession

logger = logging.getLogger(__name__)


def record_to_dict(r: Optional[CheckInRecord]) -> Optional[dict[str, Any]]:
    if r is None:
        return None
    d = r.details
    return {
        "id": r.record_id,
        "user_id": r.user_id,
        "timestamp": r.timestamp.isoformat(),
        "source_type": r.source_type.value,
        "status": r.status.value,
        "action": r.action.value,
        "details": {
            "latitude": d.latitude,
            "longitude": d.longitude,
            "distance_meters": d.distance_meters,
            "location_name": d.location_name,
            "target_latitude": d.target_latitude,
            "target_longitude": d.target_longitude,
            "target_name": d.target_name,
            "ip_address": d.ip_address,
        },
    }


def daily_state_to_dict(state: DailyState) -> dict[str, Any]:
    return {
        "check_in": record_to_dict(state.check_in),
        "check_out": record_to_dict(state.check_out),
        "next_action": None if state.completed else state.next_action.value,
        "completed": state.completed,
    }


def register(app: Flask, container: Container) -> None:
    # One CheckInSession per signed-in user for the lifetime of this process.
    sessions: dict[str, CheckInSession] = {}

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Please sign in to continue"}), 401
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Please sign in to continue"}), 401
            if session.get("role") != "admin":
                return jsonify({"success": False, "message": "Administrator access required"}), 403
            return view(*args, **kwargs)

        return wrapper

    def _current_session() -> CheckInSession:
        user_id = str(session["user_id"])
        cs = sessions.get(user_id)
        if cs is None or cs.closed:
            cs = container.open_session(user_id)
            sessions[user_id] = cs
        return cs

    @app.route("/api/checkin", methods=["POST"], endpoint="api_checkin")
    @login_required
    def api_checkin():
        data = request.get_json(silent=True) or {}
        mode = str(data.get("mode") or CheckInMode.LOCATION.value)
        if mode not in {m.value for m in CheckInMode}:
            return jsonify({"success": False, "message": f"Unknown check-in mode: {mode}"}), 400

        try:
            cs = _current_session()
        except StorageError:
            logger.exception("Could not open check-in session")
            return jsonify({"success": False, "message": "System error while checking in"}), 500

        user_id = str(data.get("user_id") or cs.user_id)
        try:
            result = asyncio.run(
                container.orchestrator.attempt_check_in(
                    cs,
                    user_id,
                    mode,
                    positions=SubmittedPositionSource(data.get("position")),
                )
            )
        except Exception:
            logger.exception("Unexpected error during check-in for %s", user_id)
            return jsonify({"success": False, "message": "System error while checking in"}), 500

        status = 200
        if not result.success:
            status = 409 if result.error_kind == CheckInErrorKind.ATTEMPT_IN_PROGRESS else 400
        return jsonify(result.to_dict()), status

    @app.route("/api/checkin/today", methods=["GET"], endpoint="api_checkin_today")
    @login_required
    def api_checkin_today():
        state = asyncio.run(container.orchestrator.get_daily_state(str(session["user_id"])))
        return jsonify(daily_state_to_dict(state)), 200

    @app.route("/api/checkin/history", methods=["GET"], endpoint="api_checkin_history")
    @login_required
    def api_checkin_history():
        limit = request.args.get("limit", type=int) or DEFAULT_HISTORY_LIMIT
        try:
            rows = container.records_repo.list_recent_for_user(str(session["user_id"]), limit)
        except StorageError:
            logger.exception("Could not load check-in history")
            return jsonify({"success": False, "message": "Could not load check-in history"}), 500
        return jsonify([record_to_dict(r) for r in rows]), 200

    @app.route("/api/reminders/check", methods=["POST"], endpoint="api_reminders_check")
    @login_required
    def api_reminders_check():
        try:
            cs = _current_session()
        except StorageError:
            logger.exception("Could not open check-in session")
            return jsonify({"success": False, "message": "Could not check reminders"}), 500

        sent: list[Reminder] = []
        scheduler = ReminderScheduler(cs.reminders, notifier=sent.append)
        scheduler.reset_if_new_day()

        state = asyncio.run(container.orchestrator.get_daily_state(cs.user_id))
        try:
            action = container.reminder_policy.expected_action(
                user_id=cs.user_id,
                state=state,
                now=now_local(),
                fallback_shift_id=cs.shift_id,
            )
        except StorageError:
            logger.exception("Could not load shift for reminder check")
            action = None

        emitted = action is not None and scheduler.check_and_send_reminder(action)
        return jsonify(
            {
                "emitted": emitted,
                "action": action.value if action else None,
                "message": sent[0].message if sent else None,
                "reminder_count": cs.reminders.reminder_count,
            }
        ), 200

    @app.route("/api/session/close", methods=["POST"], endpoint="api_session_close")
    @login_required
    def api_session_close():
        cs = sessions.pop(str(session["user_id"]), None)
        if cs is not None:
            cs.close()
        return jsonify({"success": True}), 200

    @app.route("/api/settings/check-in-distance", methods=["GET"], endpoint="api_distance_get")
    @login_required
    def api_distance_get():
        return jsonify({"meters": container.settings_service.get_check_in_distance_limit()}), 200

    @app.route("/api/settings/check-in-distance", methods=["PUT"], endpoint="api_distance_put")
    @admin_required
    def api_distance_put():
        data = request.get_json(silent=True) or {}
        try:
            meters = container.settings_service.set_check_in_distance_limit(data.get("meters"))
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except StorageError:
            logger.exception("Could not save check-in distance limit")
            return jsonify({"success": False, "message": "Could not save the setting"}), 500
        return jsonify({"success": True, "meters": meters}), 200
