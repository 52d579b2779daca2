from __future__ import annotations

from helixia_db import Database
from helixia_db.settings import get_settings


def test_defaults(sandbox_env, monkeypatch):
    monkeypatch.delenv("HELIXIA_DB_FILE", raising=False)
    s = get_settings()
    assert s.default_file == "database.json"
    assert s.indent == 2
    assert s.sort_keys is False
    assert s.debug_log_requests is False


def test_env_overrides(sandbox_env, monkeypatch):
    monkeypatch.setenv("HELIXIA_DB_INDENT", "4")
    monkeypatch.setenv("HELIXIA_DB_SORT_KEYS", "yes")
    monkeypatch.setenv("HELIXIA_DB_DEBUG_LOG_REQUESTS", "1")
    s = get_settings()
    assert s.default_file == str(sandbox_env / "env.json")
    assert s.indent == 4
    assert s.sort_keys is True
    assert s.debug_log_requests is True


def test_database_without_arguments_uses_environment(sandbox_env):
    db = Database()
    db.set("k", "v")
    assert (sandbox_env / "env.json").read_text(encoding="utf-8") == '{\n  "k": "v"\n}\n'
