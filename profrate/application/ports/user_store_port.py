from typing import Protocol, runtime_checkable

from profrate.domain.models import Review, User
from profrate.domain.value_objects import Identifier

__all__ = ["UserStorePort"]


@runtime_checkable
class UserStorePort(Protocol):
    """The slice of the users collection the review lifecycle needs (push-only)."""

    async def find_by_id(self, user_id: Identifier) -> User | None: ...

    async def push_review(self, user_id: Identifier, review: Review) -> bool: ...
