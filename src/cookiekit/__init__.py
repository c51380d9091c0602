from .version import __version__ as __version__

__title__ = "cookiekit"
__description__ = "A persistent, thread-safe cookie jar for Python HTTP clients."
__license__ = "Apache-2.0"

__all__ = [
    "Cookie",
    "CookiePersistor",
    "PersistentCookieJar",
    "SetCookieCache",
    "create_cookie_jar",
]

from .infra.cache import SetCookieCache
from .infra.jar import PersistentCookieJar, create_cookie_jar
from .infra.persistence import CookiePersistor
from .schemas import Cookie
