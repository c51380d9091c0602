from collections.abc import Iterable

from cookiekit.schemas import Cookie, CookieKey

from .base import CookiePersistor


class MemoryCookiePersistor(CookiePersistor):
    """Persistor that keeps cookies in a dict for the lifetime of the object.

    Sharing one instance between several jars simulates a process restart
    in tests.
    """

    def __init__(self) -> None:
        self._cookies: dict[CookieKey, Cookie] = {}

    def load_all(self) -> list[Cookie]:
        return list(self._cookies.values())

    def save_all(self, cookies: Iterable[Cookie]) -> None:
        for cookie in cookies:
            self._cookies[cookie.key] = cookie

    def remove_all(self, cookies: Iterable[Cookie]) -> None:
        for cookie in cookies:
            self._cookies.pop(cookie.key, None)

    def clear(self) -> None:
        self._cookies.clear()

    def __len__(self) -> int:
        return len(self._cookies)
