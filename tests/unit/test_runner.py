"""Unit tests for the service entry point."""
from eventstay.config import get_settings
from services.booking import __main__ as runner


class TestRunner:
    """Test that the runner serves the booking app on the configured port."""

    def test_main_uses_configured_port(self, monkeypatch):
        """Test that uvicorn receives the app path and booking_service_port."""
        calls = []
        monkeypatch.setattr(runner.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

        runner.main()

        assert calls == [
            ("services.booking.app:app", {"host": "0.0.0.0", "port": get_settings().booking_service_port})
        ]
