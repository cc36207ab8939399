"""Unit tests for sync.backup_sync module."""

import pytest

from src.gist_client.errors import InvalidCredentialsError
from src.sync.backup_sync import BackupSync
from src.sync.config_manager import SyncConfigManager
from src.sync.errors import SyncNotConfiguredError
from src.sync.gist_backup import GistBackup
from src.sync.models import SyncStatus
from tests.fixtures.gist_payloads import FakeGistAPI
from tests.fixtures.sample_pages import make_tree


@pytest.fixture
def api():
    return FakeGistAPI(token="ghp_valid")


@pytest.fixture
def manager(kv_store):
    return SyncConfigManager(kv_store)


@pytest.fixture
def sync(manager, api):
    return BackupSync(manager, GistBackup(api))


class TestBackupSync:
    """Test cases for the push/pull state machine."""

    def test_push_refused_when_unconfigured(self, sync, api):
        with pytest.raises(SyncNotConfiguredError, match="access token"):
            sync.push(make_tree())
        assert api.calls == []

    def test_pull_refused_when_unconfigured(self, sync):
        with pytest.raises(SyncNotConfiguredError, match="access token"):
            sync.pull()

    def test_pull_refused_without_remote(self, sync, manager, api):
        manager.save("ghp_valid", "")

        with pytest.raises(SyncNotConfiguredError, match="backup gist id"):
            sync.pull()
        assert api.calls == []

    def test_first_push_records_store_id(self, sync, manager):
        manager.save("ghp_valid", "")

        gist_id = sync.push(make_tree())

        config = sync.status()
        assert config.store_id == gist_id
        assert config.status == SyncStatus.CONFIGURED_WITH_REMOTE

    def test_push_then_pull_round_trip(self, sync, manager):
        manager.save("ghp_valid", "")
        pages = make_tree()

        sync.push(pages)

        assert sync.pull() == pages

    def test_second_push_updates_same_gist(self, sync, manager, api):
        manager.save("ghp_valid", "")
        first = sync.push(make_tree())

        second = sync.push(make_tree()[:2])

        assert first == second
        assert len(api.gists) == 1

    def test_failed_push_leaves_config_unchanged(self, sync, manager):
        manager.save("ghp_wrong", "")

        with pytest.raises(InvalidCredentialsError):
            sync.push(make_tree())
        assert sync.status().status == SyncStatus.CONFIGURED_NO_REMOTE
