"""Application settings with environment-driven configuration.

Why: Einzige Stelle mit Env; everything else receives settings via the container.
"""

import os
from dataclasses import dataclass, field


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass(frozen=True)
class AppSettings:
    """Application settings loaded from environment variables.

    This is the ONLY place where environment variables are read.
    All other layers receive settings via dependency injection.
    """

    # ===== Store Configuration =====
    store_backend: str = field(
        default_factory=lambda: os.getenv("STORE_BACKEND", "mongo").lower()
    )
    # Supported: "mongo" | "memory" (local dev, tests)

    mongo_url: str = field(
        default_factory=lambda: os.getenv("MONGO_URL", "mongodb://localhost:27017")
    )
    mongo_database: str = field(default_factory=lambda: os.getenv("MONGO_DATABASE", "profrate"))
    mongo_professors_collection: str = field(
        default_factory=lambda: os.getenv("MONGO_PROFESSORS_COLLECTION", "professors")
    )
    mongo_users_collection: str = field(
        default_factory=lambda: os.getenv("MONGO_USERS_COLLECTION", "users")
    )
    mongo_timeout_ms: int = field(
        default_factory=lambda: int(os.getenv("MONGO_TIMEOUT_MS", "5000"))
    )

    # ===== Catalog =====
    top_professors_limit: int = field(
        default_factory=lambda: int(os.getenv("TOP_PROFESSORS_LIMIT", "3"))
    )

    # ===== Telemetry Configuration =====
    telemetry_enabled: bool = field(default_factory=lambda: _flag("TELEMETRY_ENABLED", "true"))
    otlp_endpoint: str = field(default_factory=lambda: os.getenv("OTLP_ENDPOINT", ""))
    # Empty string = no OTLP export

    telemetry_environment: str = field(
        default_factory=lambda: os.getenv("TELEMETRY_ENVIRONMENT", "production")
    )

    # ===== Logging =====
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_json: bool = field(default_factory=lambda: _flag("LOG_JSON", "false"))
