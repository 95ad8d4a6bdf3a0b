"""Create the demo login accounts (existing usernames are left alone)."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.jupiter_hr.jupiter_hr.common.logging_setup import configure_logging
from src.jupiter_hr.jupiter_hr.container import build_container
from src.jupiter_hr.jupiter_hr.database.bootstrap import DEMO_USERS, ensure_demo_users
from src.jupiter_hr.jupiter_hr.database.connection import DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    container = build_container(db_config=db_config)
    created = set(ensure_demo_users(container.users_repo))

    print(f"{DBConfig.from_dict(db_config).describe()}: {len(created)} of {len(DEMO_USERS)} demo users created")
    for username, password, _, full_name, role in DEMO_USERS:
        mark = "+" if username in created else " "
        print(f" {mark} {role.value:<8} {username:<10} {password:<10} {full_name}")


if __name__ == "__main__":
    main()
