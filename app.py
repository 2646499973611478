"""WSGI entry point for the tally service."""
from __future__ import annotations

from tally_app import create_app
from tally_app.logger import get_logger


app = create_app()


if __name__ == "__main__":
    get_logger(__name__).info("Serving on http://localhost:%d", app.config["PORT"])
    app.run(host="0.0.0.0", port=app.config["PORT"])
