from __future__ import annotations

import structlog

from profrate.application.ports.professor_store_port import ProfessorStorePort
from profrate.application.ports.telemetry_port import NoopTelemetry, TelemetryPort
from profrate.domain.errors import DomainError, NotFoundError
from profrate.domain.services.rating import average_rating
from profrate.domain.types import AggregateRating, Result
from profrate.domain.value_objects import Identifier, parse_identifier

logger = structlog.get_logger(__name__)


class RecomputeRating:
    """
    Re-derives a professor's cached overall rating from its current reviews.
    Reads the whole review sequence every time (no delta), so concurrent or
    missed updates converge on the next run.
    """

    def __init__(
        self,
        professors: ProfessorStorePort,
        telemetry: TelemetryPort | None = None,
    ) -> None:
        self.professors = professors
        self.telemetry = telemetry or NoopTelemetry()

    async def execute(self, professor_id: Identifier | str) -> Result[AggregateRating, DomainError]:
        try:
            pid = parse_identifier(professor_id, "professor_id")
            return Result.success(await self._recompute(pid))
        except DomainError as ex:
            return Result.failure(ex)

    async def execute_all(self) -> Result[dict[str, AggregateRating], DomainError]:
        """Reconcile every professor; used by the admin CLI.

        Professors deleted while the run is in progress are skipped and left
        out of the returned mapping. Store failures still abort the run.
        """
        try:
            summaries = await self.professors.list_summaries()
            ratings: dict[str, AggregateRating] = {}
            for s in summaries:
                try:
                    ratings[s.id] = await self._recompute(Identifier(s.id))
                except NotFoundError:
                    # deleted after the listing; nothing left to reconcile
                    logger.warning("rating.skipped", professor_id=s.id, reason="not_found")
            return Result.success(ratings)
        except DomainError as ex:
            return Result.failure(ex)

    async def _recompute(self, pid: Identifier) -> AggregateRating:
        professor = await self.professors.find_by_id(pid)
        if professor is None:
            raise NotFoundError("professor", pid.value)

        value = average_rating(professor.reviews)
        if not await self.professors.set_overall_rating(pid, value):
            # deleted between the read and the write
            raise NotFoundError("professor", pid.value)

        self.telemetry.incr("ratings.recomputed")
        logger.info(
            "rating.recomputed",
            professor_id=pid.value,
            review_count=len(professor.reviews),
            overall_rating=value,
        )
        return value
