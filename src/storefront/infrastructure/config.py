"""Runtime settings, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "storefront"
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    # Give back stock taken for earlier lines when a later order line fails.
    rollback_partial_reservations: bool = False

    @staticmethod
    def from_env() -> Settings:
        return Settings(
            mongodb_uri=os.getenv("MONGODB_URI", Settings.mongodb_uri),
            mongodb_db=os.getenv("MONGODB_DB", Settings.mongodb_db),
            host=os.getenv("HOST", Settings.host),
            port=int(os.getenv("PORT", Settings.port)),
            log_level=os.getenv("LOG_LEVEL", Settings.log_level).upper(),
            rollback_partial_reservations=(
                os.getenv("ROLLBACK_PARTIAL_RESERVATIONS", "false").lower() in _TRUTHY
            ),
        )
