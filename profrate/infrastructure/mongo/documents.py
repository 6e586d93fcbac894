"""Mapping between Mongo documents and domain models.

Field names follow the stored layout:
  professors: {_id, professorName, department, introduction, picture,
               reviews, courses, overallRating}
  reviews (nested): {_id, userId, professorId, username, comment, rating}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from bson import ObjectId

from profrate.domain.models import Professor, ProfessorSummary, Review, User
from profrate.domain.services.input_checks import EDITABLE_PROFESSOR_FIELDS
from profrate.domain.value_objects import Identifier

# stored names that differ from the domain field name
_STORED_NAMES = {"name": "professorName"}

# domain field -> stored field
PROFESSOR_FIELDS = {name: _STORED_NAMES.get(name, name) for name in EDITABLE_PROFESSOR_FIELDS}

SUMMARY_PROJECTION = {
    "_id": 1,
    "professorName": 1,
    "department": 1,
    "introduction": 1,
    "picture": 1,
    "overallRating": 1,
}


def oid(identifier: Identifier) -> ObjectId:
    return ObjectId(identifier.value)


def review_to_doc(review: Review) -> dict[str, Any]:
    return {
        "_id": ObjectId(review.id),
        "userId": review.user_id,
        "professorId": review.professor_id,
        "username": review.username,
        "comment": review.comment,
        "rating": review.rating,
    }


def review_from_doc(doc: Mapping[str, Any]) -> Review:
    return Review(
        id=str(doc["_id"]),
        user_id=str(doc.get("userId", "")),
        professor_id=str(doc.get("professorId", "")),
        username=doc.get("username", ""),
        comment=doc.get("comment", ""),
        rating=int(doc["rating"]),
    )


def _rating(doc: Mapping[str, Any]) -> float | None:
    value = doc.get("overallRating")
    return None if value is None else float(value)


def professor_from_doc(doc: Mapping[str, Any]) -> Professor:
    return Professor(
        id=str(doc["_id"]),
        name=doc.get("professorName", ""),
        department=doc.get("department", ""),
        introduction=doc.get("introduction", ""),
        picture=doc.get("picture", ""),
        reviews=tuple(review_from_doc(r) for r in doc.get("reviews") or ()),
        courses=tuple(str(c) for c in doc.get("courses") or ()),
        overall_rating=_rating(doc),
    )


def summary_from_doc(doc: Mapping[str, Any]) -> ProfessorSummary:
    return ProfessorSummary(
        id=str(doc["_id"]),
        name=doc.get("professorName", ""),
        department=doc.get("department", ""),
        introduction=doc.get("introduction", ""),
        picture=doc.get("picture", ""),
        overall_rating=_rating(doc),
    )


def professor_fields_to_doc(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {PROFESSOR_FIELDS[k]: v for k, v in fields.items() if k in PROFESSOR_FIELDS}


def user_from_doc(doc: Mapping[str, Any]) -> User:
    return User(
        id=str(doc["_id"]),
        username=doc.get("username", ""),
        reviews=tuple(review_from_doc(r) for r in doc.get("reviews") or ()),
    )
