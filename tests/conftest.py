"""Root pytest configuration for all tests.

This conftest applies to all test types (unit and integration).
"""

import logging

import pytest

from src.persistence.kv_store import KeyValueStore
from src.persistence.repository import PageRepository

# Keep urllib3 connection chatter out of captured logs
logging.getLogger("urllib3").setLevel(logging.WARNING)


@pytest.fixture(autouse=True)
def no_env_token(monkeypatch):
    """Tests never pick up a real gist token from the environment."""
    monkeypatch.delenv("NOTION_LITE_GIST_TOKEN", raising=False)
    monkeypatch.setattr("src.gist_client.auth.load_dotenv", lambda *a, **kw: False)


@pytest.fixture
def kv_store(tmp_path):
    """Key-value store backed by a file in a fresh temp directory."""
    return KeyValueStore(str(tmp_path / "store.yaml"))


@pytest.fixture
def repository(kv_store):
    return PageRepository(kv_store)
