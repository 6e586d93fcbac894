from __future__ import annotations

import structlog

from profrate.application.dto.professor_dto import CreateProfessorRequest, UpdateProfessorRequest
from profrate.application.dto.review_dto import DeletionReceipt
from profrate.application.ports.professor_store_port import ProfessorStorePort
from profrate.domain.errors import DomainError, NotFoundError, ValidationError
from profrate.domain.models import Professor, ProfessorSummary
from profrate.domain.services.input_checks import PROFESSOR_FIELD_CHECKS
from profrate.domain.types import ProfessorFields, Result
from profrate.domain.value_objects import Identifier, parse_identifier

logger = structlog.get_logger(__name__)


def _rating_sort_key(summary: ProfessorSummary) -> tuple[bool, float]:
    # unrated professors sort after every rated one
    rating = summary.overall_rating
    return (rating is None, -(rating or 0.0))


class ProfessorCatalog:
    """Plain professor CRUD and listings. Never writes reviews or the rating."""

    def __init__(self, professors: ProfessorStorePort, top_limit: int = 3) -> None:
        self.professors = professors
        self.top_limit = top_limit

    async def list_professors(self) -> Result[list[ProfessorSummary], DomainError]:
        try:
            return Result.success(await self.professors.list_summaries())
        except DomainError as ex:
            return Result.failure(ex)

    async def top_professors(
        self, limit: int | None = None
    ) -> Result[list[ProfessorSummary], DomainError]:
        limit = self.top_limit if limit is None else limit
        if limit <= 0:
            return Result.failure(ValidationError("limit must be > 0"))
        try:
            summaries = await self.professors.list_summaries()
        except DomainError as ex:
            return Result.failure(ex)
        return Result.success(sorted(summaries, key=_rating_sort_key)[:limit])

    async def get_professor(self, professor_id: str) -> Result[Professor, DomainError]:
        try:
            pid = parse_identifier(professor_id, "professor_id")
            return Result.success(await self._require(pid))
        except DomainError as ex:
            return Result.failure(ex)

    async def create_professor(self, req: CreateProfessorRequest) -> Result[Professor, DomainError]:
        try:
            fields: ProfessorFields = {
                name: check(getattr(req, name)) for name, check in PROFESSOR_FIELD_CHECKS.items()
            }
            pid = await self.professors.insert(fields)
            professor = await self._require(pid)
        except DomainError as ex:
            return Result.failure(ex)

        logger.info("professor.created", professor_id=pid.value, name=professor.name)
        return Result.success(professor)

    async def update_professor(
        self, professor_id: str, req: UpdateProfessorRequest
    ) -> Result[Professor, DomainError]:
        try:
            pid = parse_identifier(professor_id, "professor_id")
            fields: ProfessorFields = {
                name: check(getattr(req, name))
                for name, check in PROFESSOR_FIELD_CHECKS.items()
                if getattr(req, name) is not None
            }
            if not fields:
                raise ValidationError("nothing to update")
            if not await self.professors.update_fields(pid, fields):
                raise NotFoundError("professor", pid.value)
            professor = await self._require(pid)
        except DomainError as ex:
            return Result.failure(ex)

        logger.info("professor.updated", professor_id=pid.value, fields=sorted(fields))
        return Result.success(professor)

    async def remove_professor(self, professor_id: str) -> Result[DeletionReceipt, DomainError]:
        try:
            pid = parse_identifier(professor_id, "professor_id")
            if not await self.professors.delete(pid):
                raise NotFoundError("professor", pid.value)
        except DomainError as ex:
            return Result.failure(ex)

        logger.info("professor.removed", professor_id=pid.value)
        return Result.success(DeletionReceipt(id=pid.value))

    async def _require(self, pid: Identifier) -> Professor:
        professor = await self.professors.find_by_id(pid)
        if professor is None:
            raise NotFoundError("professor", pid.value)
        return professor
