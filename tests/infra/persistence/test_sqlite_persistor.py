import sqlite3

import pytest

from cookiekit.infra.persistence.errors import PersistenceError
from cookiekit.infra.persistence.sqlite import SqliteCookiePersistor


def _by_name(cookies):
    return sorted(cookies, key=lambda c: (c.name, c.secure))


def test_connect_creates_file(tmp_path):
    db_path = tmp_path / "nested" / "cookies.sqlite3"
    with SqliteCookiePersistor(db_path) as store:
        assert store.load_all() == []
    assert db_path.exists()


def test_save_and_reload(tmp_path, make_cookie):
    db_path = tmp_path / "cookies.sqlite3"
    cookies = [
        make_cookie("a", expires_at=100.0, http_only=True),
        make_cookie("b", path="/x", expires_at=200.5, host_only=True),
    ]
    with SqliteCookiePersistor(db_path) as store:
        store.save_all(cookies)

    with SqliteCookiePersistor(db_path) as store:
        assert _by_name(store.load_all()) == cookies


def test_upsert_replaces_value_and_expiry(tmp_path, make_cookie):
    with SqliteCookiePersistor(tmp_path / "c.db") as store:
        store.save_all([make_cookie("a", "old", expires_at=1.0)])
        store.save_all([make_cookie("a", "new", expires_at=2.0)])

        loaded = store.load_all()
        assert len(loaded) == 1
        assert loaded[0].value == "new"
        assert loaded[0].expires_at == 2.0


def test_identity_includes_secure_flag(tmp_path, make_cookie):
    with SqliteCookiePersistor(tmp_path / "c.db") as store:
        store.save_all([make_cookie("a"), make_cookie("a", secure=True)])
        assert len(store.load_all()) == 2


def test_session_expiry_round_trips_as_none(tmp_path, make_cookie):
    with SqliteCookiePersistor(tmp_path / "c.db") as store:
        store.save_all([make_cookie("a")])
        assert store.load_all()[0].expires_at is None


def test_remove_all_and_clear(tmp_path, make_cookie):
    with SqliteCookiePersistor(tmp_path / "c.db") as store:
        a, b, c = (make_cookie(n, expires_at=1.0) for n in "abc")
        store.save_all([a, b, c])

        store.remove_all([a, make_cookie("missing")])
        assert _by_name(store.load_all()) == [b, c]

        store.clear()
        assert store.load_all() == []


def test_empty_batches_are_noops(tmp_path):
    with SqliteCookiePersistor(tmp_path / "c.db") as store:
        store.save_all([])
        store.remove_all([])
        assert store.load_all() == []


def test_in_memory_database(make_cookie):
    store = SqliteCookiePersistor(":memory:")
    store.save_all([make_cookie(expires_at=1.0)])
    assert len(store.load_all()) == 1
    store.close()


def test_close_is_idempotent(tmp_path):
    store = SqliteCookiePersistor(tmp_path / "c.db")
    store.connect()
    store.close()
    store.close()


def test_open_failure_raises_persistence_error(tmp_path):
    store = SqliteCookiePersistor(tmp_path)  # a directory, not a file
    with pytest.raises(PersistenceError) as exc:
        store.load_all()
    assert isinstance(exc.value.__cause__, sqlite3.Error)
