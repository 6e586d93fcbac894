"""Application ports package.

Re-exports the store, id and telemetry ports from their individual modules.
"""

from profrate.application.ports.id_generator_port import IdGeneratorPort
from profrate.application.ports.professor_store_port import ProfessorStorePort
from profrate.application.ports.telemetry_port import NoopTelemetry, TelemetryPort
from profrate.application.ports.user_store_port import UserStorePort

__all__ = [
    "IdGeneratorPort",
    "ProfessorStorePort",
    "UserStorePort",
    "TelemetryPort",
    "NoopTelemetry",
]
