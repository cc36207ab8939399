"""Unit tests for gist_client.auth module."""

from src.gist_client.auth import TOKEN_ENV_VAR, Authenticator


class TestAuthenticator:
    """Test cases for Authenticator.resolve_token."""

    def test_saved_token_wins_over_environment(self, monkeypatch):
        monkeypatch.setenv(TOKEN_ENV_VAR, "env-token")

        assert Authenticator().resolve_token(" saved-token ") == "saved-token"

    def test_environment_used_when_nothing_saved(self, monkeypatch):
        monkeypatch.setenv(TOKEN_ENV_VAR, "env-token")

        assert Authenticator().resolve_token(None) == "env-token"
        assert Authenticator().resolve_token("   ") == "env-token"

    def test_none_when_no_token_anywhere(self):
        assert Authenticator().resolve_token(None) is None
