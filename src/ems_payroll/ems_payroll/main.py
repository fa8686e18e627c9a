from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .database.bootstrap import apply_schema, list_tables

from .container import Container, build_container
from .common.errors import register_error_handlers
from .auth.controller import register as register_auth
from .users.controller import register as register_users
from .worklogs.controller import register as register_worklogs
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    """App factory.

    Pass a prebuilt ``container`` to skip the database (tests do this).
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            jwt_secret=getattr(settings, "JWT_SECRET"),
            jwt_expiration_seconds=int(getattr(settings, "JWT_EXPIRATION_SECONDS")),
            deduction_rate=float(getattr(settings, "PAYROLL_DEDUCTION_RATE", 0.0)),
        )

    register_error_handlers(app)
    register_auth(app, container)
    register_users(app, container)
    register_worklogs(app, container)
    register_payroll(app, container)

    return app
