"""Tests for environment-driven log levels."""

import pytest
from storefront.utils.logging import current_environment, get_log_level


@pytest.fixture()
def clean_env(monkeypatch):
    for name in ("ENVIRONMENT", "PROTEAN_ENV", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestLogLevels:
    def test_defaults_to_development(self, clean_env):
        assert current_environment() == "development"
        assert get_log_level() == "DEBUG"

    def test_environment_wins_over_protean_env(self, clean_env):
        clean_env.setenv("PROTEAN_ENV", "test")
        clean_env.setenv("ENVIRONMENT", "Production")
        assert current_environment() == "production"
        assert get_log_level() == "INFO"

    def test_test_environment_is_quiet(self, clean_env):
        clean_env.setenv("PROTEAN_ENV", "test")
        assert get_log_level() == "WARNING"

    def test_explicit_level_overrides(self, clean_env):
        clean_env.setenv("PROTEAN_ENV", "production")
        clean_env.setenv("LOG_LEVEL", "debug")
        assert get_log_level() == "DEBUG"

    def test_unknown_environment(self, clean_env):
        clean_env.setenv("ENVIRONMENT", "qa")
        assert get_log_level() == "INFO"
