"""In-process store adapters (local dev, tests).

Same contract as the Mongo adapters: boolean results for matched writes,
None for absent documents, reviews kept in insertion order.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from profrate.application.ports.id_generator_port import IdGeneratorPort
from profrate.application.ports.professor_store_port import ProfessorStorePort
from profrate.application.ports.user_store_port import UserStorePort
from profrate.domain.models import Professor, ProfessorSummary, Review, User
from profrate.domain.services.input_checks import EDITABLE_PROFESSOR_FIELDS
from profrate.domain.value_objects import Identifier


@dataclass
class InMemoryProfessorStore(ProfessorStorePort):
    ids: IdGeneratorPort
    docs: dict[str, Professor] = field(default_factory=dict)

    def add(self, professor: Professor) -> Professor:
        """Seed a professor as-is (tests, fixtures)."""
        self.docs[professor.id] = professor
        return professor

    async def find_by_id(self, professor_id: Identifier) -> Professor | None:
        return self.docs.get(professor_id.value)

    async def find_by_review_id(self, review_id: Identifier) -> Professor | None:
        for professor in self.docs.values():
            if any(r.id == review_id.value for r in professor.reviews):
                return professor
        return None

    async def list_summaries(self) -> list[ProfessorSummary]:
        return [
            ProfessorSummary(
                id=p.id,
                name=p.name,
                department=p.department,
                introduction=p.introduction,
                picture=p.picture,
                overall_rating=p.overall_rating,
            )
            for p in self.docs.values()
        ]

    async def insert(self, fields: Mapping[str, Any]) -> Identifier:
        pid = Identifier(self.ids.new_id())
        self.docs[pid.value] = Professor(
            id=pid.value,
            **{k: fields[k] for k in EDITABLE_PROFESSOR_FIELDS},
        )
        return pid

    async def update_fields(self, professor_id: Identifier, fields: Mapping[str, Any]) -> bool:
        current = self.docs.get(professor_id.value)
        if current is None:
            return False
        changes = {k: v for k, v in fields.items() if k in EDITABLE_PROFESSOR_FIELDS}
        self.docs[professor_id.value] = replace(current, **changes)
        return True

    async def delete(self, professor_id: Identifier) -> bool:
        return self.docs.pop(professor_id.value, None) is not None

    async def push_review(self, professor_id: Identifier, review: Review) -> bool:
        current = self.docs.get(professor_id.value)
        if current is None:
            return False
        self.docs[professor_id.value] = replace(current, reviews=(*current.reviews, review))
        return True

    async def pull_review(self, professor_id: Identifier, review_id: Identifier) -> bool:
        current = self.docs.get(professor_id.value)
        if current is None:
            return False
        kept = tuple(r for r in current.reviews if r.id != review_id.value)
        self.docs[professor_id.value] = replace(current, reviews=kept)
        return True

    async def set_overall_rating(self, professor_id: Identifier, value: float | None) -> bool:
        current = self.docs.get(professor_id.value)
        if current is None:
            return False
        self.docs[professor_id.value] = replace(current, overall_rating=value)
        return True


@dataclass
class InMemoryUserStore(UserStorePort):
    docs: dict[str, User] = field(default_factory=dict)

    def add(self, user: User) -> User:
        """Seed a user; users are provisioned outside the review lifecycle."""
        self.docs[user.id] = user
        return user

    async def find_by_id(self, user_id: Identifier) -> User | None:
        return self.docs.get(user_id.value)

    async def push_review(self, user_id: Identifier, review: Review) -> bool:
        current = self.docs.get(user_id.value)
        if current is None:
            return False
        self.docs[user_id.value] = replace(current, reviews=(*current.reviews, review))
        return True
