"""Unit tests for sync.config_manager and sync.models modules."""

from src.gist_client.auth import TOKEN_ENV_VAR
from src.sync.config_manager import STORE_ID_KEY, TOKEN_KEY, SyncConfigManager
from src.sync.models import SyncConfig, SyncStatus


class TestSyncConfig:
    """Test cases for SyncConfig.status."""

    def test_status_transitions(self):
        assert SyncConfig().status == SyncStatus.UNCONFIGURED
        assert SyncConfig(token="t").status == SyncStatus.CONFIGURED_NO_REMOTE
        assert SyncConfig(token="t", store_id="abc").status == SyncStatus.CONFIGURED_WITH_REMOTE

    def test_store_id_without_token_is_unconfigured(self):
        assert SyncConfig(store_id="abc").status == SyncStatus.UNCONFIGURED


class TestSyncConfigManager:
    """Test cases for SyncConfigManager."""

    def test_load_empty_store(self, kv_store):
        config = SyncConfigManager(kv_store).load()

        assert config.token is None
        assert config.store_id is None

    def test_save_trims_and_persists(self, kv_store):
        config = SyncConfigManager(kv_store).save("  ghp_x ", " abc123 ")

        assert config == SyncConfig(token="ghp_x", store_id="abc123")
        assert kv_store.get(TOKEN_KEY) == "ghp_x"
        assert kv_store.get(STORE_ID_KEY) == "abc123"

    def test_blank_store_id_removes_stored_id(self, kv_store):
        manager = SyncConfigManager(kv_store)
        manager.save("ghp_x", "abc123")

        config = manager.save("ghp_x", "  ")

        assert config.status == SyncStatus.CONFIGURED_NO_REMOTE
        assert kv_store.get(STORE_ID_KEY) is None

    def test_record_store_id(self, kv_store):
        manager = SyncConfigManager(kv_store)
        manager.save("ghp_x", None)

        manager.record_store_id("def456")

        assert manager.load().status == SyncStatus.CONFIGURED_WITH_REMOTE

    def test_environment_token_used_as_fallback(self, kv_store, monkeypatch):
        monkeypatch.setenv(TOKEN_ENV_VAR, "env-token")

        assert SyncConfigManager(kv_store).load().token == "env-token"
