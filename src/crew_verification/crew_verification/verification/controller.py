from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_iso_datetime
from ..container import Container
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .model import ShiftWindow
from .notifier import CollectingNotifier

logger = logging.getLogger(__name__)

PREFIX = "/api/crew-verification"


def register(app: Flask, container: Container) -> None:
    service = container.crew_verification_service

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Please sign in to continue"}), 401
            return view(*args, **kwargs)

        return wrapper

    def handle_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except AuthenticationError as e:
                return jsonify({"success": False, "message": str(e)}), 401
            except AuthorizationError as e:
                return jsonify({"success": False, "message": str(e)}), 403
            except ValidationError as e:
                return jsonify({"success": False, "message": str(e)}), 400
            except Exception:
                logger.exception("Unhandled error in %s", view.__name__)
                return jsonify({"success": False, "message": "System error during crew verification"}), 500

        return wrapper

    def _leader_id() -> str:
        return str(session["user_id"])

    def _body() -> dict:
        return request.get_json(silent=True) or {}

    def _roster_response(roster, **extra):
        payload = {"success": True, "roster": roster.to_dict()}
        payload.update(extra)
        return jsonify(payload), 200

    @app.route(f"{PREFIX}/open", methods=["POST"], endpoint="crew_verification_open")
    @login_required
    @handle_errors
    def open_verification():
        data = _body()
        window = ShiftWindow(
            job_id=str(data.get("job_id") or ""),
            job_name=str(data.get("job_name") or ""),
            leader_id=_leader_id(),
            clock_in=parse_iso_datetime(str(data.get("clock_in") or "")),
            clock_out=parse_iso_datetime(str(data.get("clock_out") or "")),
        )
        roster = service.open(window)
        return _roster_response(roster)

    @app.route(PREFIX, methods=["GET"], endpoint="crew_verification_current")
    @login_required
    @handle_errors
    def current_verification():
        return _roster_response(service.get(_leader_id()))

    @app.route(f"{PREFIX}/candidates", methods=["GET"], endpoint="crew_verification_candidates")
    @login_required
    @handle_errors
    def candidates():
        people = service.candidates(_leader_id())
        return jsonify(
            {
                "success": True,
                "candidates": [
                    {"user_id": p.user_id, "name": p.display_name, "avatar_url": p.avatar_url} for p in people
                ],
            }
        ), 200

    @app.route(f"{PREFIX}/members", methods=["POST"], endpoint="crew_verification_add_members")
    @login_required
    @handle_errors
    def add_members():
        user_ids = _body().get("user_ids") or []
        if not isinstance(user_ids, list):
            raise ValidationError("user_ids must be a list")

        notifier = CollectingNotifier()
        added = service.add_members(_leader_id(), [str(u) for u in user_ids], notifier=notifier)
        return _roster_response(service.get(_leader_id()), added=added, messages=notifier.messages)

    @app.route(f"{PREFIX}/members/<user_id>/time", methods=["POST"], endpoint="crew_verification_edit_time")
    @login_required
    @handle_errors
    def edit_time(user_id: str):
        data = _body()
        service.edit_time(_leader_id(), user_id, data.get("field", ""), data.get("value", ""))
        return _roster_response(service.get(_leader_id()))

    @app.route(f"{PREFIX}/members/<user_id>/break", methods=["POST"], endpoint="crew_verification_set_break")
    @login_required
    @handle_errors
    def set_break(user_id: str):
        service.set_break_minutes(_leader_id(), user_id, _body().get("minutes"))
        return _roster_response(service.get(_leader_id()))

    @app.route(f"{PREFIX}/members/<user_id>/toggle", methods=["POST"], endpoint="crew_verification_toggle")
    @login_required
    @handle_errors
    def toggle(user_id: str):
        service.toggle_confirmed(_leader_id(), user_id)
        return _roster_response(service.get(_leader_id()))

    @app.route(f"{PREFIX}/submit", methods=["POST"], endpoint="crew_verification_submit")
    @login_required
    @handle_errors
    def submit():
        notifier = CollectingNotifier()
        result = service.submit(_leader_id(), notifier=notifier)
        return jsonify({"success": True, "result": result.to_dict(), "messages": notifier.messages}), 200

    @app.route(f"{PREFIX}/skip", methods=["POST"], endpoint="crew_verification_skip")
    @login_required
    @handle_errors
    def skip():
        service.skip(_leader_id())
        return jsonify({"success": True}), 200
