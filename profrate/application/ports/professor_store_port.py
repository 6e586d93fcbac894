from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from profrate.domain.models import Professor, ProfessorSummary, Review
from profrate.domain.value_objects import Identifier

__all__ = ["ProfessorStorePort"]


@runtime_checkable
class ProfessorStorePort(Protocol):
    """Persistence over the professors collection.

    Mutations are single independent writes; boolean results report whether a
    document matched. Backend failures raise StoreError.
    """

    async def find_by_id(self, professor_id: Identifier) -> Professor | None: ...

    async def find_by_review_id(self, review_id: Identifier) -> Professor | None: ...

    async def list_summaries(self) -> list[ProfessorSummary]: ...

    async def insert(self, fields: Mapping[str, Any]) -> Identifier: ...

    async def update_fields(self, professor_id: Identifier, fields: Mapping[str, Any]) -> bool: ...

    async def delete(self, professor_id: Identifier) -> bool: ...

    async def push_review(self, professor_id: Identifier, review: Review) -> bool: ...

    async def pull_review(self, professor_id: Identifier, review_id: Identifier) -> bool: ...

    async def set_overall_rating(self, professor_id: Identifier, value: float | None) -> bool: ...
