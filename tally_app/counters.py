"""Counter and config endpoints."""
from __future__ import annotations

from flask import Blueprint, abort, current_app, request
from flask_login import current_user, login_required

from .logger import get_logger
from .models import VALUE_PER_CLICK_KEY


logger = get_logger(__name__)

counters_bp = Blueprint("counters", __name__)


@counters_bp.route("/names", methods=["GET"])
def list_names():
    return current_app.counter_ledger.list_counters()


@counters_bp.route("/config", methods=["GET"])
def get_config():
    return current_app.counter_ledger.get_config()


@counters_bp.route("/config", methods=["POST"])
@login_required
def set_config():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict) or VALUE_PER_CLICK_KEY not in payload:
        abort(400, description=f"{VALUE_PER_CLICK_KEY} required")

    value = payload[VALUE_PER_CLICK_KEY]
    current_app.counter_ledger.set_config(value)
    logger.info("%s set %s to %r", current_user.username, VALUE_PER_CLICK_KEY, value)
    return {"message": "Value saved"}


@counters_bp.route("/add", methods=["POST"])
@login_required
def add_name():
    payload = request.get_json(silent=True)
    name = payload.get("name") if isinstance(payload, dict) else None
    if not isinstance(name, str) or not name:
        abort(400, description="Name required")

    current_app.counter_ledger.add_counter(name)
    logger.info("%s added counter %s", current_user.username, name)
    return {"message": "Added"}, 201


@counters_bp.route("/increment/<name>", methods=["POST"])
@login_required
def increment(name: str):
    counter = current_app.counter_ledger.increment(name)
    logger.info("%s incremented %s to %d", current_user.username, name, counter["count"])
    return {"message": "Counter incremented", **counter}


@counters_bp.route("/reset", methods=["POST"])
@login_required
def reset():
    total = current_app.counter_ledger.reset()
    logger.info("%s reset %d counters", current_user.username, total)
    return {"message": "Reset", "reset": total}


@counters_bp.route("/delete/<name>", methods=["DELETE"])
@login_required
def delete_name(name: str):
    current_app.counter_ledger.delete_counter(name)
    logger.info("%s deleted counter %s", current_user.username, name)
    return {"message": "Name deleted"}
