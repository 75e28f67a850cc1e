from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
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
            if session.get("role") != Role.ADMIN.value:
                return jsonify({"success": False, "message": "You do not have permission"}), 403
            return view(*args, **kwargs)

        return wrapper

    def _current_role() -> Role:
        try:
            return Role(session.get("role"))
        except ValueError:
            raise AuthorizationError("Unknown role")

    def _decide(action, request_id: int, message: str):
        data = request.get_json(silent=True) or {}
        try:
            action(
                current_role=_current_role(),
                admin_user_id=str(session["user_id"]),
                request_id=int(request_id),
                admin_note=data.get("admin_note", ""),
            )
            return jsonify({"success": True, "message": message}), 200
        except AuthorizationError as e:
            return jsonify({"success": False, "message": str(e)}), 403
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Error deciding shift request %s", request_id)
            return jsonify({"success": False, "message": "System error while reviewing the request"}), 500

    @app.route("/api/shift-requests/mine", methods=["GET"], endpoint="my_shift_requests")
    @login_required
    def my_shift_requests():
        rows = container.request_service.list_my_requests(user_id=str(session["user_id"]))
        return jsonify({"success": True, "requests": rows}), 200

    @app.route("/api/shift-requests/pending", methods=["GET"], endpoint="pending_shift_requests")
    @admin_required
    def pending_shift_requests():
        rows = container.request_service.list_admin_pending()
        return jsonify({"success": True, "requests": rows}), 200

    @app.route("/api/shift-requests/<int:request_id>/approve", methods=["POST"], endpoint="approve_shift_request")
    @admin_required
    def approve_shift_request(request_id: int):
        return _decide(container.request_service.approve_shift_correction, request_id, "Request approved")

    @app.route("/api/shift-requests/<int:request_id>/reject", methods=["POST"], endpoint="reject_shift_request")
    @admin_required
    def reject_shift_request(request_id: int):
        return _decide(container.request_service.reject_shift_correction, request_id, "Request rejected")
