from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import helixia_db...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from helixia_db.database import Database  # noqa: E402
from helixia_db.settings import Settings  # noqa: E402


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        default_file=str(tmp_path / "database.json"),
        indent=2,
        sort_keys=False,
        debug_log_requests=False,
    )


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "database.json"


@pytest.fixture
def db(db_path: Path, settings: Settings) -> Database:
    return Database(db_path, settings=settings)


@pytest.fixture
def sandbox_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Point every HELIXIA_DB_* setting at a temp directory so tests never touch a real ./database.json.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HELIXIA_DB_FILE", str(tmp_path / "env.json"))
    monkeypatch.delenv("HELIXIA_DB_INDENT", raising=False)
    monkeypatch.delenv("HELIXIA_DB_SORT_KEYS", raising=False)
    monkeypatch.delenv("HELIXIA_DB_DEBUG_LOG_REQUESTS", raising=False)
    return tmp_path
