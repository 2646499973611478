"""Authentication blueprint."""
from __future__ import annotations

from flask import Blueprint, abort, current_app, request

from .credentials import LOGIN_FAILED
from .errors import UnauthorizedError
from .security import token_from_request


auth_bp = Blueprint("auth", __name__)


def _read_credentials(data) -> tuple[str, str] | None:
    if not isinstance(data, dict):
        return None
    username = data.get("username")
    password = data.get("password")
    if not isinstance(username, str) or not isinstance(password, str):
        return None
    if not username or not password:
        return None
    return username, password


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple[dict, int]:
    credentials = _read_credentials(request.get_json(silent=True))
    if credentials is None:
        abort(400, description="Username and password required")

    current_app.credential_store.register_user(*credentials)
    return {"message": "User registered"}, 201


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple[dict, int]:
    credentials = _read_credentials(request.get_json(silent=True))
    if credentials is None:
        raise UnauthorizedError(LOGIN_FAILED)

    token, username = current_app.credential_store.login(*credentials)
    return {"token": token, "username": username}, 200


@auth_bp.route("/logout", methods=["POST"])
def logout() -> tuple[dict, int]:
    current_app.credential_store.logout(token_from_request(request))
    return {"message": "Logged out"}, 200
