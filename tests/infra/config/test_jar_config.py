from pathlib import Path

import pytest

from cookiekit.infra.config.jar_config import jar_config_from_dict, jar_config_to_dict
from cookiekit.schemas import JarConfig


def test_defaults_without_jar_table():
    assert jar_config_from_dict({}) == JarConfig()


def test_non_table_jar_entry_is_ignored():
    assert jar_config_from_dict({"jar": "sqlite"}) == JarConfig()


def test_backend_is_case_insensitive(tmp_path):
    db = str(tmp_path / "cookies.sqlite3")
    cfg = jar_config_from_dict({"jar": {"backend": "SQLite", "path": db}})
    assert cfg == JarConfig(backend="sqlite", path=db)


def test_empty_path_means_default_location():
    assert jar_config_from_dict({"jar": {"path": ""}}).path is None


def test_relative_path_resolved_against_config_dir(tmp_path):
    cfg = jar_config_from_dict(
        {"jar": {"backend": "json", "path": "store/cookies.json"}},
        base_dir=tmp_path,
    )
    assert cfg.path == str(tmp_path / "store" / "cookies.json")


def test_home_relative_path_is_expanded(tmp_path):
    cfg = jar_config_from_dict({"jar": {"path": "~/cookies.json"}}, base_dir=tmp_path)
    assert cfg.path == str(Path("~/cookies.json").expanduser())


@pytest.mark.parametrize(
    "table",
    [
        {"backend": "redis"},
        {"backend": 3},
        {"path": 42},
        {"backend": "memory", "path": "cookies.json"},
    ],
)
def test_invalid_jar_table_rejected(table):
    with pytest.raises(ValueError):
        jar_config_from_dict({"jar": table})


def test_to_dict_omits_default_path():
    assert jar_config_to_dict(JarConfig()) == {"backend": "json"}
    assert jar_config_to_dict(JarConfig("sqlite", "/tmp/c.db")) == {
        "backend": "sqlite",
        "path": "/tmp/c.db",
    }
