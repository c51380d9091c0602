"""
Defines structured configuration models using dataclasses.
"""

from dataclasses import dataclass


@dataclass
class JarConfig:
    """Configuration for building a persistent cookie jar.

    Attributes:
        backend: Persistence backend name (json, sqlite, memory).
        path: Location of the backing store. None selects the default file
            under the user data directory.
    """

    backend: str = "json"
    path: str | None = None
