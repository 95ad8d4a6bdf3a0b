"""Apply database/schema.sql to the database of the active settings module.

APP_ENV picks the settings (development, testing, production).
Exits with status 1 when a table is still missing afterwards.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.jupiter_hr.jupiter_hr.database.bootstrap import apply_schema, list_tables, missing_tables
from src.jupiter_hr.jupiter_hr.database.connection import DBConfig


def main() -> int:
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    db_config = dict(settings.DB_CONFIG)
    target = DBConfig.from_dict(db_config).describe()

    executed = apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(db_config)
    print(f"[{settings_module}] {target}: {executed} statements, tables: {', '.join(tables) or '-'}")

    missing = missing_tables(tables)
    if missing:
        print(f"ERROR: missing tables after init: {', '.join(missing)}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
