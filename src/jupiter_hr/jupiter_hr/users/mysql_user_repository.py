from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, like_pattern, new_id
from .model import User
from .repository import UserRepository

_COLUMNS = "id, username, password_hash, email, full_name, role, is_active, created_at, updated_at, last_login"


def _row_to_user(row: dict) -> User:
    return User(
        id=row["id"],
        username=row["username"],
        password_hash=row["password_hash"],
        email=row["email"],
        full_name=row.get("full_name"),
        role=Role(row["role"]),
        is_active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
        last_login=row.get("last_login"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, user: User) -> User:
        if not user.id:
            user.id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO users({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    username=VALUES(username), password_hash=VALUES(password_hash), email=VALUES(email),
                    full_name=VALUES(full_name), role=VALUES(role), is_active=VALUES(is_active),
                    updated_at=VALUES(updated_at), last_login=VALUES(last_login)
                """,
                (
                    user.id,
                    user.username,
                    user.password_hash,
                    user.email,
                    user.full_name,
                    user.role.value,
                    1 if user.is_active else 0,
                    user.created_at,
                    user.updated_at,
                    user.last_login,
                ),
            )
        return user

    def _get_one(self, where: str, value) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE {where}=%s", (value,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._get_one("id", user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return self._get_one("username", username)

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email", email)

    def exists_by_username(self, username: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS hit FROM users WHERE username=%s LIMIT 1", (username,))
            return fetchone(cur) is not None

    def exists_by_email(self, email: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS hit FROM users WHERE email=%s LIMIT 1", (email,))
            return fetchone(cur) is not None

    def list_all(self, *, role: Optional[Role] = None, active: Optional[bool] = None) -> Sequence[User]:
        clauses: list[str] = []
        params: list[object] = []
        if role is not None:
            clauses.append("role=%s")
            params.append(role.value)
        if active is not None:
            clauses.append("is_active=%s")
            params.append(1 if active else 0)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users {where} ORDER BY created_at DESC", tuple(params))
            return [_row_to_user(r) for r in fetchall(cur)]

    def search_by_full_name(self, name: str) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE LOWER(full_name) LIKE %s ORDER BY full_name",
                (like_pattern(name),),
            )
            return [_row_to_user(r) for r in fetchall(cur)]

    def count_by_role(self, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM users WHERE role=%s", (role.value,))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def delete_by_id(self, user_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE id=%s", (user_id,))
