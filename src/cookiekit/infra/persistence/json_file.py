"""
Cookie persistor backed by a single JSON file.
"""

from __future__ import annotations

__all__ = ["JsonFileCookiePersistor"]

import json
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from cookiekit.schemas import Cookie, CookieKey

from .base import CookiePersistor
from .errors import CorruptStoreError, PersistenceError
from .serialize import cookie_from_dict, cookie_to_dict

logger = logging.getLogger(__name__)


class JsonFileCookiePersistor(CookiePersistor):
    """Stores cookies as a JSON array of records.

    The file is read on :meth:`load_all` and lazily before the first
    mutation. Every mutation rewrites the whole file through a temporary
    sibling and :func:`os.replace`, so readers never see a half-written
    document. The in-memory mirror is only updated once the write succeeds.
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize the persistor.

        Args:
            path: Location of the JSON file. Parent directories are created
                on first write.
        """
        self._path = Path(path)
        self._cookies: dict[CookieKey, Cookie] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def load_all(self) -> list[Cookie]:
        self._cookies = self._read()
        return list(self._cookies.values())

    def save_all(self, cookies: Iterable[Cookie]) -> None:
        current = self._ensure_loaded()
        updated = dict(current)
        for cookie in cookies:
            updated[cookie.key] = cookie
        if updated == current:
            return
        self._commit(updated)

    def remove_all(self, cookies: Iterable[Cookie]) -> None:
        current = self._ensure_loaded()
        updated = dict(current)
        for cookie in cookies:
            updated.pop(cookie.key, None)
        if len(updated) == len(current):
            return
        self._commit(updated)

    def clear(self) -> None:
        self._commit({})

    def _ensure_loaded(self) -> dict[CookieKey, Cookie]:
        if self._cookies is None:
            self._cookies = self._read()
        return self._cookies

    def _read(self) -> dict[CookieKey, Cookie]:
        """Load cookie records from disk.

        Returns:
            dict[CookieKey, Cookie]: Cookies keyed by identity. Empty if the
            file does not exist.

        Raises:
            CorruptStoreError: If the file is not a JSON array.
            PersistenceError: If the file cannot be read.
        """
        if not self._path.exists():
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Failed to read {self._path}: {e}") from e

        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptStoreError(f"Invalid JSON in {self._path}: {e}") from e
        if not isinstance(data, list):
            raise CorruptStoreError(
                f"Cookie file root must be a list, got {type(data)} in {self._path}"
            )

        cookies: dict[CookieKey, Cookie] = {}
        for item in data:
            cookie = cookie_from_dict(item)
            if cookie is None:
                logger.warning("Skipping malformed cookie record in %s", self._path)
                continue
            cookies[cookie.key] = cookie
        logger.debug("Loaded %d cookies from %s", len(cookies), self._path)
        return cookies

    def _commit(self, cookies: dict[CookieKey, Cookie]) -> None:
        """Write ``cookies`` to disk, then adopt them as the current state.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        payload = json.dumps(
            [cookie_to_dict(c) for c in cookies.values()],
            ensure_ascii=False,
            indent=2,
        )
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise PersistenceError(f"Failed to write {self._path}: {e}") from e
        self._cookies = cookies
