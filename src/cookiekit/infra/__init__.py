"""
Cookie storage infrastructure: cache, persistence and the jar tying them
together.
"""

__all__ = [
    "ClearableCookieJar",
    "CookieCache",
    "PersistentCookieJar",
    "SetCookieCache",
    "create_cookie_jar",
]

from .cache import CookieCache, SetCookieCache
from .jar import ClearableCookieJar, PersistentCookieJar, create_cookie_jar
