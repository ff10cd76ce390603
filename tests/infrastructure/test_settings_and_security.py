"""Tests for environment settings and password hashing."""

from storefront.infrastructure.config import Settings
from storefront.infrastructure.security import hash_password, pwd_context


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("MONGODB_URI", "MONGODB_DB", "PORT", "LOG_LEVEL", "ROLLBACK_PARTIAL_RESERVATIONS"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.mongodb_db == "storefront"
        assert settings.port == 8000
        assert settings.rollback_partial_reservations is False

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("MONGODB_DB", "shop_test")
        monkeypatch.setenv("PORT", "9001")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("ROLLBACK_PARTIAL_RESERVATIONS", "yes")
        settings = Settings.from_env()
        assert settings.mongodb_db == "shop_test"
        assert settings.port == 9001
        assert settings.log_level == "DEBUG"
        assert settings.rollback_partial_reservations is True


class TestPasswords:

    def test_hash_round_trip(self):
        hashed = hash_password("s3cret")
        assert hashed != "s3cret"
        assert pwd_context.verify("s3cret", hashed)
        assert not pwd_context.verify("guess", hashed)
