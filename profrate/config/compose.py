"""Dependency injection container with environment-driven wiring.

Why: Single place for wiring; all other layers remain pure.
"""

from typing import TYPE_CHECKING

from profrate.application.ports import (
    IdGeneratorPort,
    NoopTelemetry,
    ProfessorStorePort,
    TelemetryPort,
    UserStorePort,
)
from profrate.config.settings import AppSettings

if TYPE_CHECKING:
    from profrate.application.use_cases.professor_catalog import ProfessorCatalog
    from profrate.application.use_cases.recompute_rating import RecomputeRating
    from profrate.application.use_cases.review_coordinator import ReviewCoordinator
    from profrate.infrastructure.mongo.connection import MongoConnection


class Container:
    """Dependency injection container for application components.

    Responsibilities:
    1. Read settings from environment (via AppSettings)
    2. Choose adapters based on settings (store_backend, telemetry_enabled)
    3. Inject dependencies into use cases

    Adapters are built lazily and cached, so the professor and user stores
    share one Mongo client.
    """

    def __init__(self, settings: AppSettings | None = None) -> None:
        """Initialize container with settings.

        Args:
            settings: Application settings (default: load from environment)
        """
        self.settings = settings or AppSettings()
        self._mongo: "MongoConnection | None" = None
        self._ids: IdGeneratorPort | None = None
        self._professor_store: ProfessorStorePort | None = None
        self._user_store: UserStorePort | None = None
        self._telemetry: TelemetryPort | None = None

    # ===== Adapters =====

    def get_id_generator(self) -> IdGeneratorPort:
        if self._ids is None:
            from profrate.infrastructure.ids.object_id_generator import ObjectIdGenerator

            self._ids = ObjectIdGenerator()
        return self._ids

    def get_professor_store(self) -> ProfessorStorePort:
        """Get or create professor store adapter based on settings."""
        if self._professor_store is None:
            self._build_stores()
        assert self._professor_store is not None
        return self._professor_store

    def get_user_store(self) -> UserStorePort:
        """Get or create user store adapter based on settings."""
        if self._user_store is None:
            self._build_stores()
        assert self._user_store is not None
        return self._user_store

    def get_telemetry(self) -> TelemetryPort:
        """Get or create telemetry adapter based on settings."""
        if self._telemetry is None:
            self._telemetry = self._build_telemetry()
        return self._telemetry

    # ===== Use Cases =====

    def get_rating_recomputer(self) -> "RecomputeRating":
        from profrate.application.use_cases.recompute_rating import RecomputeRating

        return RecomputeRating(
            professors=self.get_professor_store(),
            telemetry=self.get_telemetry(),
        )

    def get_review_coordinator(self) -> "ReviewCoordinator":
        """Build review use case with all dependencies."""
        from profrate.application.use_cases.review_coordinator import ReviewCoordinator

        return ReviewCoordinator(
            professors=self.get_professor_store(),
            users=self.get_user_store(),
            ids=self.get_id_generator(),
            recompute=self.get_rating_recomputer(),
            telemetry=self.get_telemetry(),
        )

    def get_professor_catalog(self) -> "ProfessorCatalog":
        from profrate.application.use_cases.professor_catalog import ProfessorCatalog

        return ProfessorCatalog(
            professors=self.get_professor_store(),
            top_limit=self.settings.top_professors_limit,
        )

    async def aclose(self) -> None:
        """Release the Mongo client, if one was opened."""
        if self._mongo is not None:
            await self._mongo.close()
            self._mongo = None

    # ===== Private Builder Methods =====

    def _build_stores(self) -> None:
        """Build both stores based on settings.store_backend.

        Supports: mongo | memory
        """
        backend = self.settings.store_backend

        if backend == "memory":
            self._build_memory_stores()
        elif backend == "mongo":
            self._build_mongo_stores()
        else:
            raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")

    def _build_mongo_stores(self) -> None:
        from profrate.infrastructure.mongo.connection import MongoConfig, MongoConnection
        from profrate.infrastructure.mongo.professor_store import MongoProfessorStore
        from profrate.infrastructure.mongo.user_store import MongoUserStore

        cfg = MongoConfig(
            url=self.settings.mongo_url,
            database=self.settings.mongo_database,
            professors_collection=self.settings.mongo_professors_collection,
            users_collection=self.settings.mongo_users_collection,
            timeout_ms=self.settings.mongo_timeout_ms,
        )
        self._mongo = MongoConnection(cfg)
        self._professor_store = MongoProfessorStore(self._mongo.professors())
        self._user_store = MongoUserStore(self._mongo.users())

    def _build_memory_stores(self) -> None:
        from profrate.infrastructure.memory.in_memory_stores import (
            InMemoryProfessorStore,
            InMemoryUserStore,
        )

        self._professor_store = InMemoryProfessorStore(ids=self.get_id_generator())
        self._user_store = InMemoryUserStore()

    def _build_telemetry(self) -> TelemetryPort:
        """Build telemetry adapter based on settings.telemetry_enabled.

        Returns:
            OpenTelemetryAdapter (or no-op if disabled)
        """
        if not self.settings.telemetry_enabled:
            return NoopTelemetry()

        from profrate.infrastructure.telemetry.otel_adapter import OpenTelemetryAdapter, OtelConfig

        cfg = OtelConfig(
            service_name="profrate",
            otlp_endpoint=self.settings.otlp_endpoint or None,
            environment=self.settings.telemetry_environment,
        )
        return OpenTelemetryAdapter(cfg)


# ===== Convenience Functions =====


def build_container(settings: AppSettings | None = None) -> Container:
    """Build dependency injection container with settings.

    Example:
        container = build_container()
        reviews = container.get_review_coordinator()
        result = await reviews.add_review(request)
    """
    return Container(settings)
