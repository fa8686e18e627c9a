from __future__ import annotations

import importlib
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.ems_payroll.ems_payroll.database.bootstrap import apply_schema, ensure_admin_user, list_tables

logger = logging.getLogger("init_db")


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    schema_path = REPO_ROOT / "database" / "schema.sql"
    apply_schema(db_config, schema_path=schema_path)
    tables = list_tables(db_config)
    logger.info(
        "Applied schema.sql -> %s@%s:%s/%s (tables=%s)",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        len(tables),
    )

    # First administrator, only when none exists yet
    password = os.getenv("ADMIN_PASSWORD")
    if password:
        created = ensure_admin_user(
            db_config,
            username=os.getenv("ADMIN_USERNAME", "admin"),
            email=os.getenv("ADMIN_EMAIL", "admin@example.com"),
            password=password,
        )
        logger.info("Administrator %s", "created" if created else "already present")
    else:
        logger.info("ADMIN_PASSWORD not set, skipping administrator bootstrap")


if __name__ == "__main__":
    main()
