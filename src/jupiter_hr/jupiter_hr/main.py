from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.errors import init_error_handlers
from .common.logging_setup import configure_logging
from .container import Container, build_container
from .core.constants import DEFAULT_EXPIRY_WARNING_DAYS, DEFAULT_SESSION_MINUTES
from .database.bootstrap import apply_schema, ensure_demo_users
from .database.connection import DBConfig
from .documents.controller import register as register_documents
from .hr.controller import register as register_hr
from .performances.controller import register as register_performances
from .skills.controller import register as register_skills
from .students.controller import register as register_students
from .users.controller import register as register_users

logger = logging.getLogger("jupiter_hr")

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    With an explicit container (tests) the database bootstrap is skipped.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(
        minutes=int(getattr(settings, "SESSION_MINUTES", DEFAULT_SESSION_MINUTES))
    )
    app.json.sort_keys = False

    if container is None:
        db_config = dict(getattr(settings, "DB_CONFIG"))
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)

        container = build_container(
            db_config=db_config,
            expiry_warning_days=int(getattr(settings, "EXPIRY_WARNING_DAYS", DEFAULT_EXPIRY_WARNING_DAYS)),
        )
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            created = ensure_demo_users(container.users_repo)
            logger.info("demo users ready (created=%d)", len(created))

    init_error_handlers(app)

    register_users(app, container)
    register_students(app, container)
    register_skills(app, container)
    register_performances(app, container)
    register_documents(app, container)
    register_hr(app, container)

    return app
