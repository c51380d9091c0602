"""
Data contracts and type definitions.
"""

__all__ = [
    "Cookie",
    "CookieKey",
    "JarConfig",
]

from .config import JarConfig
from .cookie import Cookie, CookieKey
