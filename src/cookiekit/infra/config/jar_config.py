"""
Conversion between the ``[jar]`` table of a config file and :class:`JarConfig`.

Expected layout (TOML shown)::

    [jar]
    backend = "sqlite"
    path = "~/.cache/myapp/cookies.sqlite3"
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from cookiekit.schemas import JarConfig

BACKENDS = ("json", "sqlite", "memory")


def jar_config_from_dict(
    data: dict[str, Any],
    *,
    base_dir: Path | None = None,
) -> JarConfig:
    """Build a JarConfig from a parsed configuration mapping.

    A missing or non-table ``jar`` entry yields the defaults. A relative
    ``path`` is resolved against ``base_dir`` when given, so a store named in
    a project-local config file lives next to that file.

    Args:
        data: The whole parsed configuration file.
        base_dir: Directory of the file ``data`` was read from.

    Returns:
        JarConfig: The validated jar configuration.

    Raises:
        ValueError: If the backend name is unknown, or the path is not a
            string, or the ``memory`` backend is given a path.
    """
    table = data.get("jar")
    if not isinstance(table, dict):
        return JarConfig()

    backend = table.get("backend", "json")
    if not isinstance(backend, str) or backend.lower() not in BACKENDS:
        raise ValueError(f"Unsupported persistence backend: {backend!r}")
    backend = backend.lower()

    path = table.get("path") or None
    if path is None:
        return JarConfig(backend=backend)
    if not isinstance(path, str):
        raise ValueError(f"Jar path must be a string, got {type(path).__name__}")
    if backend == "memory":
        raise ValueError("The memory backend does not take a path")

    store = Path(path).expanduser()
    if not store.is_absolute() and base_dir is not None:
        store = base_dir / store
    return JarConfig(backend=backend, path=str(store))


def jar_config_to_dict(cfg: JarConfig) -> dict[str, Any]:
    """Render a JarConfig as a ``jar`` table; a default path is omitted."""
    table: dict[str, Any] = {"backend": cfg.backend}
    if cfg.path:
        table["path"] = cfg.path
    return table
