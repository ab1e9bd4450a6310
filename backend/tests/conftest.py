"""Shared fixtures: a throwaway SQLite file per test and an always-failing gateway."""
import pytest

from conceptcraft import container
from conceptcraft.core import config
from conceptcraft.persistence.db import init_db

from fakes import FailingProvider, make_gateway


@pytest.fixture
def failing_gateway():
    return make_gateway(FailingProvider("primary"), FailingProvider("secondary"))


@pytest.fixture
def temp_db(tmp_path, monkeypatch):
    """Point the app at a fresh database file and drop cached singletons."""
    monkeypatch.setattr(config, "DATABASE_PATH", str(tmp_path / "test.db"))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    container.reset()
    init_db()
    yield tmp_path / "test.db"
    container.reset()
