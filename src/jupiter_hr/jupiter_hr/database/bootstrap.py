"""Schema setup and demo accounts for a fresh database."""

from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterable, Iterator

from ..core.enums import Role
from ..users.repository import UserRepository
from ..users.service import UserService
from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

EXPECTED_TABLES = ("users", "students", "skills", "performances", "documents")

# (username, password, email, full name, role)
DEMO_USERS = (
    ("admin", "admin123", "admin@jupiter.edu", "System Administrator", Role.ADMIN),
    ("hr1", "pass123", "hr1@jupiter.edu", "HR Manager", Role.HR),
    ("hr2", "pass123", "hr2@jupiter.edu", "HR Assistant", Role.HR),
    ("student1", "pass123", "student1@jupiter.edu", "John Doe", Role.STUDENT),
    ("student2", "pass123", "student2@jupiter.edu", "Jane Smith", Role.STUDENT),
    ("student3", "pass123", "student3@jupiter.edu", "Bob Johnson", Role.STUDENT),
)

_CREATE_DB = re.compile(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$")
_USE_DB = re.compile(r"(?im)^\s*USE\b.*?;\s*$")


def _strip_create_db_and_use(sql: str) -> str:
    # The target database comes from DB_CONFIG, not from the script.
    return _USE_DB.sub("", _CREATE_DB.sub("", sql))


def split_sql_statements(sql: str) -> Iterator[str]:
    """Split a script on ';' outside of quotes, dropping '--' comment lines."""
    lines = [line for line in sql.splitlines() if not line.strip().startswith("--")]
    buf: list[str] = []
    quote = None
    escaped = False
    for ch in "\n".join(lines):
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run(cur, statements: Iterable[str]) -> int:
    count = 0
    for stmt in statements:
        cur.execute(stmt)
        count += 1
    return count


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_dict(db_config)
    with closing(DatabaseConnection(config).connect(with_database=False)) as conn:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> int:
    """Create the database if needed and run every statement of the schema file.

    Returns the number of statements executed.
    """
    config = DBConfig.from_dict(db_config)
    ensure_database_exists(db_config)

    script = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))
    with closing(DatabaseConnection(config).connect()) as conn:
        executed = _run(conn.cursor(), split_sql_statements(script))
        conn.commit()
    logger.info("schema applied to %s (%d statements)", config.describe(), executed)
    return executed


def list_tables(db_config: dict) -> list[str]:
    with closing(DatabaseConnection(DBConfig.from_dict(db_config)).connect()) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())


def missing_tables(existing: Iterable[str]) -> list[str]:
    present = {name.lower() for name in existing}
    return [name for name in EXPECTED_TABLES if name not in present]


def ensure_demo_users(users: UserRepository) -> list[str]:
    """Create the demo accounts that do not exist yet; returns the created usernames."""
    service = UserService(users)
    created: list[str] = []
    for username, password, email, full_name, role in DEMO_USERS:
        if users.exists_by_username(username):
            logger.debug("demo user already exists: %s", username)
            continue
        service.create_user(username=username, password=password, email=email, full_name=full_name, role=role)
        created.append(username)
        logger.info("created demo user: %s (%s)", username, role.value)
    return created
