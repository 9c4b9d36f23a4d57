"""Session checks for the JSON controllers.

The login flow that fills ``session`` lives outside this package; controllers
only read ``user_id`` and ``role`` and hand the acting user id to services.
"""

from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role


def current_user_id() -> int:
    return int(session["user_id"])


def is_admin() -> bool:
    return session.get("role") == Role.ADMIN.value


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Authentication required"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Authentication required"}), 401
        if not is_admin():
            return jsonify({"error": "Admin role required"}), 403
        return view(*args, **kwargs)

    return wrapper
