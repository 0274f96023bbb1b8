from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .container import build_container
from .payload.controller import register as register_payload
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)

SETTING_NAMES = (
    "API_URLS",
    "PROBE_PATH",
    "PROBE_TIMEOUT",
    "REQUEST_TIMEOUT",
    "QR_SECURE_KEY",
    "SCAN_INTERVAL",
    "OUTBOX_PATH",
    "RECONCILE_WORKERS",
    "REPORT_WINDOW_DAYS",
)


def load_settings(settings_module: str | None = None) -> dict:
    module = importlib.import_module(settings_module or get_settings_module())
    settings = {name: getattr(module, name) for name in SETTING_NAMES if hasattr(module, name)}
    settings["SECRET_KEY"] = getattr(module, "SECRET_KEY")
    settings["DEBUG"] = bool(getattr(module, "DEBUG", False))
    settings["TESTING"] = bool(getattr(module, "TESTING", False))
    return settings


def create_app(*, settings: dict | None = None, session=None, store=None) -> Flask:
    load_dotenv(override=False)
    settings = settings or load_settings()

    logging.basicConfig(
        level=logging.DEBUG if settings.get("DEBUG") else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))

    container = build_container(settings=settings, session=session, store=store)
    app.extensions["classroom_attendance"] = container
    logger.info("Candidate servers: %s", ", ".join(container.resolver.candidates))

    register_auth(app, container)
    register_attendance(app, container)
    register_reports(app, container)
    register_payload(app, container)

    return app
