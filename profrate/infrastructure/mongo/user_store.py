from __future__ import annotations

from typing import Any

from pymongo.errors import PyMongoError

from profrate.application.ports.user_store_port import UserStorePort
from profrate.domain.errors import StoreError
from profrate.domain.models import Review, User
from profrate.domain.value_objects import Identifier

from .documents import oid, review_to_doc, user_from_doc


class MongoUserStore(UserStorePort):
    """Users collection; only the nested reviews array is written here."""

    def __init__(self, collection: Any) -> None:
        self._coll = collection

    async def find_by_id(self, user_id: Identifier) -> User | None:
        try:
            doc = await self._coll.find_one({"_id": oid(user_id)})
        except PyMongoError as ex:
            raise StoreError(f"find user {user_id}: {ex}") from ex
        return user_from_doc(doc) if doc else None

    async def push_review(self, user_id: Identifier, review: Review) -> bool:
        try:
            res = await self._coll.update_one(
                {"_id": oid(user_id)},
                {"$push": {"reviews": review_to_doc(review)}},
            )
        except PyMongoError as ex:
            raise StoreError(f"push review to user {user_id}: {ex}") from ex
        return res.matched_count > 0
