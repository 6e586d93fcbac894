# profrate/application/use_cases/review_coordinator.py
from __future__ import annotations

import structlog

from profrate.application.dto.review_dto import AddReviewRequest, DeletionReceipt
from profrate.application.ports.id_generator_port import IdGeneratorPort
from profrate.application.ports.professor_store_port import ProfessorStorePort
from profrate.application.ports.telemetry_port import NoopTelemetry, TelemetryPort
from profrate.application.ports.user_store_port import UserStorePort
from profrate.application.use_cases.recompute_rating import RecomputeRating
from profrate.domain.errors import DomainError, NotFoundError, PartialWriteError, StoreError
from profrate.domain.models import Review
from profrate.domain.services.input_checks import check_comment, check_rating
from profrate.domain.types import Result
from profrate.domain.value_objects import Identifier, parse_identifier

logger = structlog.get_logger(__name__)


class ReviewCoordinator:
    """
    Application Use-Case for the dual-write review lifecycle.

    A review is written to the author's user document and to the professor
    document as two independent writes (no transaction), then the professor's
    overall rating is recomputed. Steps run strictly in order; every domain
    error is returned unmodified via Result[T, E] and nothing is retried.

    Removal only touches the professor copy; the user copy stays.
    """

    def __init__(
        self,
        professors: ProfessorStorePort,
        users: UserStorePort,
        ids: IdGeneratorPort,
        recompute: RecomputeRating | None = None,
        telemetry: TelemetryPort | None = None,
    ) -> None:
        self.professors = professors
        self.users = users
        self.ids = ids
        self.telemetry = telemetry or NoopTelemetry()
        self.recompute = recompute or RecomputeRating(professors, self.telemetry)

    async def add_review(self, req: AddReviewRequest) -> Result[Review, DomainError]:
        try:
            # 0) Validate everything before touching a store
            uid = parse_identifier(req.user_id, "user_id")
            pid = parse_identifier(req.professor_id, "professor_id")
            comment = check_comment(req.comment)
            rating = check_rating(req.rating)

            # 1) Author
            user = await self.users.find_by_id(uid)
            if user is None:
                raise NotFoundError("user", uid.value)

            # 2) Build the record shared by both copies
            review = Review(
                id=self.ids.new_id(),
                user_id=uid.value,
                professor_id=pid.value,
                username=user.username,
                comment=comment,
                rating=rating,
            )

            # 3) User copy; the user may have vanished since step 1
            if not await self.users.push_review(uid, review):
                raise NotFoundError("user", uid.value)

            # 4) Professor copy; the user copy is not rolled back on failure
            await self._push_to_professor(pid, review)

            # 5) Only after 4 succeeded, so the read includes the new review
            (await self.recompute.execute(pid)).unwrap()
        except DomainError as ex:
            return Result.failure(ex)

        self.telemetry.incr("reviews.added")
        self.telemetry.observe("reviews.rating", review.rating)
        logger.info(
            "review.added",
            review_id=review.id,
            user_id=review.user_id,
            professor_id=review.professor_id,
            rating=review.rating,
        )
        return Result.success(review)

    async def remove_review(self, review_id: str) -> Result[DeletionReceipt, DomainError]:
        try:
            rid = parse_identifier(review_id, "review_id")

            professor = await self.professors.find_by_review_id(rid)
            if professor is None:
                raise NotFoundError("review", rid.value)

            pid = Identifier(professor.id)
            if not await self.professors.pull_review(pid, rid):
                raise NotFoundError("review", rid.value)

            (await self.recompute.execute(pid)).unwrap()
        except DomainError as ex:
            return Result.failure(ex)

        self.telemetry.incr("reviews.removed")
        logger.info("review.removed", review_id=rid.value, professor_id=pid.value)
        return Result.success(DeletionReceipt(id=rid.value))

    async def _push_to_professor(self, pid: Identifier, review: Review) -> None:
        try:
            pushed = await self.professors.push_review(pid, review)
        except StoreError:
            self._flag_partial_write(pid, review)
            raise
        if not pushed:
            self._flag_partial_write(pid, review)
            raise PartialWriteError(
                resource="professor",
                identifier=pid.value,
                review_id=review.id,
                user_id=review.user_id,
            )

    def _flag_partial_write(self, pid: Identifier, review: Review) -> None:
        self.telemetry.incr("reviews.partial_write")
        logger.warning(
            "review.partial_write",
            review_id=review.id,
            user_id=review.user_id,
            professor_id=pid.value,
        )
