"""Application factory for the tally service."""
from __future__ import annotations

import click
from flask import Flask

from .config import BaseConfig
from .extensions import db, login_manager
from .auth import auth_bp
from .counters import counters_bp
from .credentials import CredentialStore
from .errors import ConflictError, register_error_handlers
from .ledger import CounterLedger
from .logger import configure_root_logger
from . import security  # noqa: F401  registers the Flask-Login request loader


def create_app(config_object: type[BaseConfig] | None = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_object or BaseConfig)

    if not app.testing:
        configure_root_logger(app.config["LOG_LEVEL"])

    # Initialize extensions.
    db.init_app(app)
    login_manager.init_app(app)

    # One instance of each store per app; views reach them via current_app.
    app.credential_store = CredentialStore(rounds=app.config["BCRYPT_LOG_ROUNDS"])
    app.counter_ledger = CounterLedger(
        default_value_per_click=app.config["DEFAULT_VALUE_PER_CLICK"]
    )

    register_error_handlers(app)

    # Register blueprints.
    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(counters_bp, url_prefix="/api")

    with app.app_context():
        db.create_all()

    @app.cli.command("create-db")
    def create_db_command() -> None:
        """Create tables using SQLAlchemy metadata."""
        with app.app_context():
            db.create_all()
            print("Database tables created.")

    @app.cli.command("create-user")
    @click.argument("username")
    @click.password_option()
    def create_user_command(username: str, password: str) -> None:
        """Register USERNAME with a prompted password."""
        try:
            app.credential_store.register_user(username, password)
        except ConflictError as exc:
            raise click.ClickException(str(exc)) from exc
        print(f"User {username} created.")

    return app
