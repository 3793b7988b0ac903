"""Unit tests for configuration and settings."""
from eventstay.config import get_settings, reset_settings_cache


class TestSettings:
    """Test configuration management."""

    def test_get_settings_returns_same_instance(self):
        """Test that get_settings returns cached instance."""
        assert get_settings() is get_settings()

    def test_reset_settings_cache(self):
        """Test that cache can be reset."""
        settings1 = get_settings()
        reset_settings_cache()
        settings2 = get_settings()

        assert settings1 is not settings2

    def test_environment_overrides(self, monkeypatch):
        """Test that environment variables override defaults."""
        monkeypatch.setenv("BOOKING_WRITE_LIMIT", "5/minute")
        monkeypatch.setenv("LOG_DIR", "/tmp/booking-logs")
        reset_settings_cache()
        try:
            settings = get_settings()
            assert settings.booking_write_limit == "5/minute"
            assert settings.log_dir == "/tmp/booking-logs"
        finally:
            monkeypatch.undo()
            reset_settings_cache()

    def test_test_environment_disables_rate_limiting(self):
        """Test that the suite runs with SlowAPI limits off."""
        assert get_settings().rate_limiting_enabled is False

    def test_jwt_configuration(self):
        """Test JWT configuration values."""
        settings = get_settings()

        assert settings.jwt_secret
        assert settings.jwt_algorithm == "HS256"
        assert settings.access_token_expire_minutes > 0
