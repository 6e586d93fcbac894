"""ObjectId generator adapter.

This is the production implementation of IdGeneratorPort.
For tests, inject a deterministic fake.
"""

from __future__ import annotations

from bson import ObjectId

from ...application.ports.id_generator_port import IdGeneratorPort


class ObjectIdGenerator(IdGeneratorPort):
    """Mints ObjectIds (timestamp + random + counter), unique across processes."""

    def new_id(self) -> str:
        return str(ObjectId())
