from __future__ import annotations

import pytest

from cookiekit.infra.persistence.memory import MemoryCookiePersistor
from cookiekit.schemas import Cookie

NOW = 1_700_000_000.0


class FakeClock:
    """Manually advanced clock returning POSIX seconds."""

    def __init__(self, now: float = NOW) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def persistor() -> MemoryCookiePersistor:
    return MemoryCookiePersistor()


@pytest.fixture
def make_cookie():
    """Factory for cookies scoped to example.com with sensible defaults."""

    def _make(
        name: str = "sid",
        value: str = "v",
        *,
        domain: str = "example.com",
        path: str = "/",
        expires_at: float | None = None,
        secure: bool = False,
        http_only: bool = False,
        host_only: bool = False,
    ) -> Cookie:
        return Cookie(
            name=name,
            value=value,
            domain=domain,
            path=path,
            expires_at=expires_at,
            secure=secure,
            http_only=http_only,
            host_only=host_only,
        )

    return _make
