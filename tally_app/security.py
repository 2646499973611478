"""Bearer-token authentication wired into Flask-Login."""
from __future__ import annotations

from flask import Request, current_app

from .errors import UnauthorizedError
from .extensions import login_manager
from .models import User


BEARER_PREFIX = "bearer "


def token_from_request(request: Request) -> str | None:
    """Read the session token from the Authorization header.

    Accepts `Bearer <token>` as well as the bare token.
    """
    header = request.headers.get("Authorization", "").strip()
    if header.lower().startswith(BEARER_PREFIX):
        header = header[len(BEARER_PREFIX):].strip()
    return header or None


@login_manager.request_loader
def load_user_from_request(request: Request) -> User | None:
    store = current_app.credential_store
    username = store.resolve_session(token_from_request(request))
    if username is None:
        return None
    return store.get_user(username)


@login_manager.unauthorized_handler
def unauthorized():
    raise UnauthorizedError("Not logged in")
