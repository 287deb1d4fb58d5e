from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .classes.controller import register as register_classes
from .common.datetime_utils import today_local
from .container import Container, build_container
from .database.bootstrap import seed_demo_data
from .reports.controller import register as register_reports
from .stats.controller import register as register_stats
from .students.controller import register as register_students
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_UPLOAD_MB", 10)) * 1024 * 1024
    app.config["FACE_CONFIDENCE_THRESHOLD"] = float(getattr(settings, "FACE_CONFIDENCE_THRESHOLD", 80))
    app.json.sort_keys = False

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        container = build_container(face_threshold=app.config["FACE_CONFIDENCE_THRESHOLD"])
        if bool(getattr(settings, "SEED_DEMO_DATA", False)):
            seed_demo_data(container.store, today=today_local())
            logger.info("Demo data loaded")

    logger.debug("settings=%s face_threshold=%s", settings_module, app.config["FACE_CONFIDENCE_THRESHOLD"])

    app.extensions["school_attendance"] = container

    register_users(app, container)
    register_students(app, container)
    register_attendance(app, container)
    register_classes(app, container)
    register_stats(app, container)
    register_reports(app, container)

    return app
