from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from cookiekit.infra.paths import LOCAL_CONFIG_FILENAMES, USER_CONFIG_PATH
from cookiekit.schemas import JarConfig

from .jar_config import jar_config_from_dict, jar_config_to_dict

logger = logging.getLogger(__name__)


def find_config_file(config_path: str | Path | None = None) -> Path | None:
    """
    Locate the configuration file describing the cookie jar.

    Lookup order:
        1. ``config_path``, which must exist when given
        2. ``cookiekit.toml`` / ``cookiekit.json`` in the working directory
        3. The per-user ``cookiekit.json`` in the platform config directory

    Args:
        config_path: Optional file path explicitly provided by the caller.

    Returns:
        The resolved path, or None when no file exists.

    Raises:
        FileNotFoundError: If ``config_path`` is given but missing.
    """
    if config_path:
        path = Path(config_path).expanduser().resolve()
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {path}")
        return path

    for name in LOCAL_CONFIG_FILENAMES:
        local_path = (Path.cwd() / name).resolve()
        if local_path.is_file():
            logger.debug("Using local config file: %s", local_path)
            return local_path

    if USER_CONFIG_PATH.is_file():
        return USER_CONFIG_PATH.resolve()

    return None


def _read_mapping(path: Path) -> dict[str, Any]:
    """Parse a ``.toml`` or ``.json`` config file into a dict.

    Raises:
        ValueError: On an unsupported extension, a parse error, or a
            non-table root.
    """
    ext = path.suffix.lower()
    try:
        if ext == ".toml":
            with path.open("rb") as f:
                data = tomllib.load(f)
        elif ext == ".json":
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ValueError(f"Unsupported config file extension: {ext}")
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a table in {path}")
    return data


def load_jar_config(config_path: str | Path | None = None) -> JarConfig:
    """
    Load the jar configuration from the first config file found.

    Without any config file the defaults apply: a JSON store in the user
    data directory.

    Args:
        config_path: Optional explicit configuration file path.

    Returns:
        JarConfig: The validated configuration. Relative store paths are
        resolved against the directory of the config file.

    Raises:
        FileNotFoundError: If ``config_path`` is given but missing.
        ValueError: If the file cannot be parsed or its ``[jar]`` table is
            invalid.
    """
    path = find_config_file(config_path)
    if path is None:
        logger.debug("No config file found, using default jar settings")
        return JarConfig()

    logger.debug("Loading jar configuration from: %s", path)
    return jar_config_from_dict(_read_mapping(path), base_dir=path.parent)


def save_jar_config(
    cfg: JarConfig,
    output_path: str | Path | None = None,
) -> Path:
    """
    Write ``cfg`` as the ``jar`` table of a JSON config file.

    Other top-level entries of an existing file are kept.

    Args:
        cfg: The jar configuration to store.
        output_path: Destination ``.json`` file. Defaults to the per-user
            config file.

    Returns:
        The resolved path written to.

    Raises:
        ValueError: If ``output_path`` is not a ``.json`` file or the existing
            file cannot be parsed.
        OSError: If writing to disk fails.
    """
    output = Path(output_path or USER_CONFIG_PATH).expanduser().resolve()
    if output.suffix.lower() != ".json":
        raise ValueError(f"Jar config can only be saved as JSON, got {output}")

    data = _read_mapping(output) if output.is_file() else {}
    data["jar"] = jar_config_to_dict(cfg)

    output.parent.mkdir(parents=True, exist_ok=True)
    try:
        with output.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
    except OSError as e:
        logger.error("Failed to write jar config '%s': %s", output, e)
        raise

    logger.info("Jar configuration saved to: %s", output)
    return output
