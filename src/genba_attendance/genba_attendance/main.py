from __future__ import annotations

import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module, load_settings

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .reports.controller import register as register_reports
from .sites.controller import register as register_sites
from .store.controller import register as register_store

logger = logging.getLogger(__name__)


def create_app(env: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings = load_settings(env)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.ensure_ascii = False

    logging.basicConfig(
        level=getattr(logging, str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    container = container or build_container(settings=settings)
    app.extensions["genba_container"] = container

    logger.info(
        "[genba-attendance] settings=%s narrative=%s tz=%s",
        get_settings_module(env),
        type(container.narrative_service).__name__,
        container.store.tz,
    )

    if getattr(settings, "AUTO_LOAD_MONTH", False):
        added = container.store.load_monthly_data(container.store.ui.selected_date)
        logger.info("[genba-attendance] demo month ready (records=%d)", added)

    register_store(app, container)
    register_attendance(app, container)
    register_reports(app, container)
    register_sites(app, container)

    return app
