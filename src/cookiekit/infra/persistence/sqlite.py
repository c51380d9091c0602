"""
Cookie persistor backed by a local SQLite database.

Each cookie is one row keyed by its identity columns. Writes are batched
with ``executemany`` and committed per call, so a failed call leaves the
table as it was before the call.
"""

from __future__ import annotations

__all__ = ["SqliteCookiePersistor"]

import contextlib
import logging
import sqlite3
import types
from collections.abc import Iterable
from pathlib import Path
from typing import Self

from cookiekit.schemas import Cookie

from .base import CookiePersistor
from .errors import PersistenceError

logger = logging.getLogger(__name__)

_CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS cookies (
  name       TEXT    NOT NULL,
  domain     TEXT    NOT NULL,
  path       TEXT    NOT NULL,
  secure     BOOLEAN NOT NULL DEFAULT 0,
  host_only  BOOLEAN NOT NULL DEFAULT 0,
  value      TEXT    NOT NULL,
  expires_at REAL,
  http_only  BOOLEAN NOT NULL DEFAULT 0,
  PRIMARY KEY (name, domain, path, secure, host_only)
);
"""

_UPSERT_SQL = """
INSERT INTO cookies
  (name, domain, path, secure, host_only, value, expires_at, http_only)
VALUES (?, ?, ?, ?, ?, ?, ?, ?)
ON CONFLICT(name, domain, path, secure, host_only) DO UPDATE SET
  value=excluded.value,
  expires_at=excluded.expires_at,
  http_only=excluded.http_only
"""

_DELETE_SQL = """
DELETE FROM cookies
WHERE name = ? AND domain = ? AND path = ? AND secure = ? AND host_only = ?
"""


class SqliteCookiePersistor(CookiePersistor):
    """SQLite-backed cookie storage.

    The connection is opened on first use. It is created with
    ``check_same_thread=False`` because the owning jar may call in from
    several threads; the jar's lock serializes those calls.
    """

    def __init__(self, db_path: str | Path) -> None:
        """Initialize the persistor.

        Args:
            db_path: Path to the SQLite file, or ``":memory:"``.
        """
        self._db_path = db_path if db_path == ":memory:" else Path(db_path)
        self._conn: sqlite3.Connection | None = None

    def connect(self) -> None:
        """Open the SQLite connection and create the schema."""
        if self._conn:
            return

        try:
            if isinstance(self._db_path, Path):
                self._db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self._db_path, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.executescript(_CREATE_TABLE_SQL)
            conn.commit()
        except (OSError, sqlite3.Error) as e:
            raise PersistenceError(f"Failed to open {self._db_path}: {e}") from e
        self._conn = conn

    def load_all(self) -> list[Cookie]:
        try:
            rows = self.conn.execute(
                "SELECT name, value, domain, path, expires_at, secure, http_only, "
                "host_only FROM cookies ORDER BY rowid"
            ).fetchall()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to load cookies: {e}") from e

        cookies = [
            Cookie(
                name=row["name"],
                value=row["value"],
                domain=row["domain"],
                path=row["path"],
                expires_at=row["expires_at"],
                secure=bool(row["secure"]),
                http_only=bool(row["http_only"]),
                host_only=bool(row["host_only"]),
            )
            for row in rows
        ]
        logger.debug("Loaded %d cookies from %s", len(cookies), self._db_path)
        return cookies

    def save_all(self, cookies: Iterable[Cookie]) -> None:
        records = [
            (
                c.name,
                c.domain,
                c.path,
                int(c.secure),
                int(c.host_only),
                c.value,
                c.expires_at,
                int(c.http_only),
            )
            for c in cookies
        ]
        if not records:
            return
        self._execute_many(_UPSERT_SQL, records)

    def remove_all(self, cookies: Iterable[Cookie]) -> None:
        keys = [
            (c.name, c.domain, c.path, int(c.secure), int(c.host_only))
            for c in cookies
        ]
        if not keys:
            return
        self._execute_many(_DELETE_SQL, keys)

    def clear(self) -> None:
        try:
            with self.conn:
                self.conn.execute("DELETE FROM cookies")
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to clear cookies: {e}") from e

    def close(self) -> None:
        """Close the SQLite connection."""
        if not self._conn:
            return

        with contextlib.suppress(Exception):
            self._conn.close()
        self._conn = None

    @property
    def conn(self) -> sqlite3.Connection:
        """Return the active connection, opening it if needed."""
        if self._conn is None:
            self.connect()
        assert self._conn is not None
        return self._conn

    def _execute_many(self, sql: str, params: list[tuple[object, ...]]) -> None:
        try:
            with self.conn:
                self.conn.executemany(sql, params)
        except sqlite3.Error as e:
            raise PersistenceError(f"SQLite write failed: {e}") from e

    def __enter__(self) -> Self:
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<SqliteCookiePersistor path='{self._db_path}'>"
