"""MongoDB professor store adapter.

Why: Adapter kapselt alle externen Typen (ObjectId, PyMongoError) und wirft nur
     Domain-Fehler. Each method is one independent server round trip.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pymongo.errors import PyMongoError

from profrate.application.ports.professor_store_port import ProfessorStorePort
from profrate.domain.errors import StoreError
from profrate.domain.models import Professor, ProfessorSummary, Review
from profrate.domain.value_objects import Identifier

from .documents import (
    SUMMARY_PROJECTION,
    oid,
    professor_fields_to_doc,
    professor_from_doc,
    review_to_doc,
    summary_from_doc,
)


class MongoProfessorStore(ProfessorStorePort):
    """Professors collection with reviews nested in each document."""

    def __init__(self, collection: Any) -> None:
        self._coll = collection

    async def find_by_id(self, professor_id: Identifier) -> Professor | None:
        try:
            doc = await self._coll.find_one({"_id": oid(professor_id)})
        except PyMongoError as ex:
            raise StoreError(f"find professor {professor_id}: {ex}") from ex
        return professor_from_doc(doc) if doc else None

    async def find_by_review_id(self, review_id: Identifier) -> Professor | None:
        try:
            doc = await self._coll.find_one({"reviews._id": oid(review_id)})
        except PyMongoError as ex:
            raise StoreError(f"find professor by review {review_id}: {ex}") from ex
        return professor_from_doc(doc) if doc else None

    async def list_summaries(self) -> list[ProfessorSummary]:
        try:
            cursor = self._coll.find({}, projection=SUMMARY_PROJECTION)
            docs = await cursor.to_list(None)
        except PyMongoError as ex:
            raise StoreError(f"list professors: {ex}") from ex
        return [summary_from_doc(d) for d in docs]

    async def insert(self, fields: Mapping[str, Any]) -> Identifier:
        doc = professor_fields_to_doc(fields)
        doc.update({"reviews": [], "courses": [], "overallRating": None})
        try:
            res = await self._coll.insert_one(doc)
        except PyMongoError as ex:
            raise StoreError(f"insert professor: {ex}") from ex
        return Identifier(str(res.inserted_id))

    async def update_fields(self, professor_id: Identifier, fields: Mapping[str, Any]) -> bool:
        return await self._update(professor_id, {"$set": professor_fields_to_doc(fields)})

    async def delete(self, professor_id: Identifier) -> bool:
        try:
            res = await self._coll.delete_one({"_id": oid(professor_id)})
        except PyMongoError as ex:
            raise StoreError(f"delete professor {professor_id}: {ex}") from ex
        return res.deleted_count > 0

    async def push_review(self, professor_id: Identifier, review: Review) -> bool:
        return await self._update(professor_id, {"$push": {"reviews": review_to_doc(review)}})

    async def pull_review(self, professor_id: Identifier, review_id: Identifier) -> bool:
        return await self._update(professor_id, {"$pull": {"reviews": {"_id": oid(review_id)}}})

    async def set_overall_rating(self, professor_id: Identifier, value: float | None) -> bool:
        return await self._update(professor_id, {"$set": {"overallRating": value}})

    async def _update(self, professor_id: Identifier, update: dict[str, Any]) -> bool:
        try:
            res = await self._coll.update_one({"_id": oid(professor_id)}, update)
        except PyMongoError as ex:
            raise StoreError(f"update professor {professor_id}: {ex}") from ex
        # matched, not modified: setting an unchanged rating is still a hit
        return res.matched_count > 0
