"""
Tests for profile management.
"""

from rest_client.core.env_config.profiles import PROFILE_ENV_VAR, get_env_file_path


class TestGetEnvFilePath:
    """Test get_env_file_path function."""

    def test_explicit_profile(self):
        assert get_env_file_path("production") == ".env.production"
        assert get_env_file_path("development") == ".env.development"

    def test_default(self, monkeypatch):
        monkeypatch.delenv(PROFILE_ENV_VAR, raising=False)
        assert get_env_file_path() == ".env"

    def test_profile_from_environment(self, monkeypatch):
        monkeypatch.setenv(PROFILE_ENV_VAR, "staging")
        assert get_env_file_path() == ".env.staging"

    def test_explicit_profile_wins(self, monkeypatch):
        monkeypatch.setenv(PROFILE_ENV_VAR, "staging")
        assert get_env_file_path("production") == ".env.production"
