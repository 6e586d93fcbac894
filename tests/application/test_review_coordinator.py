"""Tests for the ReviewCoordinator use case (dual-write review lifecycle)."""

import asyncio
from typing import Any

from structlog.testing import capture_logs

from profrate.application.dto.review_dto import AddReviewRequest, DeletionReceipt
from profrate.application.ports.id_generator_port import IdGeneratorPort
from profrate.application.use_cases.recompute_rating import RecomputeRating
from profrate.application.use_cases.review_coordinator import ReviewCoordinator
from profrate.domain.errors import NotFoundError, PartialWriteError, StoreError, ValidationError
from profrate.domain.models import Professor, Review, User
from profrate.domain.value_objects import Identifier
from profrate.infrastructure.ids.object_id_generator import ObjectIdGenerator
from profrate.infrastructure.memory.in_memory_stores import (
    InMemoryProfessorStore,
    InMemoryUserStore,
)

E1 = "624724af974aef308ff7cc6a"
U1 = "62215a7ebd69a460a6193418"
MISSING = "000000000000000000000001"


class SequentialIds(IdGeneratorPort):
    """Deterministic id generator for tests."""

    def __init__(self, start: int = 0x100) -> None:
        self.n = start

    def new_id(self) -> str:
        self.n += 1
        return f"{self.n:024x}"


class Spy:
    """Records every async store call, then delegates."""

    def __init__(self, inner: Any) -> None:
        self.inner = inner
        self.calls: list[str] = []

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self.inner, name)
        if not callable(attr):
            return attr

        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            self.calls.append(name)
            return await attr(*args, **kwargs)

        return wrapper


class FakeTelemetry:
    def __init__(self) -> None:
        self.counters: list[str] = []
        self.observed: list[tuple[str, float]] = []

    def incr(self, name: str, tags: dict | None = None) -> None:
        self.counters.append(name)

    def observe(self, name: str, value: float, tags: dict | None = None) -> None:
        self.observed.append((name, value))


def make_review(rating: int, n: int) -> Review:
    return Review(
        id=f"{n:024x}",
        user_id=U1,
        professor_id=E1,
        username="alice",
        comment="seeded",
        rating=rating,
    )


def build(
    ratings: list[int] | None = None,
    with_user: bool = True,
    ids: IdGeneratorPort | None = None,
) -> tuple[ReviewCoordinator, Spy, Spy, FakeTelemetry]:
    ids = ids or SequentialIds()
    professors = InMemoryProfessorStore(ids=ids)
    reviews = tuple(make_review(r, i + 1) for i, r in enumerate(ratings or []))
    mean = sum(ratings) / len(ratings) if ratings else None
    professors.add(
        Professor(
            id=E1,
            name="Patrick Hill",
            department="Computer Science",
            introduction="Professor in the CS department",
            picture="https://example.edu/hill.jpg",
            reviews=reviews,
            overall_rating=mean,
        )
    )
    users = InMemoryUserStore()
    if with_user:
        users.add(User(id=U1, username="alice"))
    p_spy, u_spy = Spy(professors), Spy(users)
    telemetry = FakeTelemetry()
    uc = ReviewCoordinator(professors=p_spy, users=u_spy, ids=ids, telemetry=telemetry)
    return uc, p_spy, u_spy, telemetry


def professor(spy: Spy) -> Professor:
    return spy.inner.docs[E1]


def add(uc: ReviewCoordinator, rating: int = 5, comment: str = "Great", **kw: str):
    req = AddReviewRequest(
        user_id=kw.get("user_id", U1),
        professor_id=kw.get("professor_id", E1),
        comment=comment,
        rating=rating,
    )
    return asyncio.run(uc.add_review(req))


class TestAddReview:
    def test_first_review_sets_rating(self) -> None:
        """Empty professor + rating 5 -> one review, overall rating 5."""
        uc, profs, _users, _t = build()
        result = add(uc, rating=5, comment="Great")

        assert result.ok
        p = professor(profs)
        assert [r.rating for r in p.reviews] == [5]
        assert p.overall_rating == 5
        assert result.value == p.reviews[0]

    def test_rating_is_mean_over_all_reviews(self) -> None:
        """Ratings [4, 5] + 3 -> [4, 5, 3], overall rating 4."""
        uc, profs, _users, _t = build(ratings=[4, 5])
        assert professor(profs).overall_rating == 4.5

        result = add(uc, rating=3)

        assert result.ok
        p = professor(profs)
        assert [r.rating for r in p.reviews] == [4, 5, 3]
        assert p.overall_rating == 4

    def test_review_is_written_to_user_and_professor_with_same_id(self) -> None:
        uc, profs, users, _t = build()
        review = add(uc).value

        user_copy = users.inner.docs[U1].reviews
        assert user_copy == (review,)
        assert professor(profs).reviews == (review,)
        assert review.professor_id == E1
        assert review.user_id == U1

    def test_username_is_snapshot_at_creation(self) -> None:
        uc, profs, users, _t = build()
        review = add(uc).value
        assert review.username == "alice"

        users.inner.docs[U1] = User(id=U1, username="alice-renamed")
        assert professor(profs).reviews[0].username == "alice"

    def test_write_order_is_user_then_professor_then_recompute(self) -> None:
        uc, profs, users, _t = build()
        add(uc)

        assert users.calls == ["find_by_id", "push_review"]
        assert profs.calls == ["push_review", "find_by_id", "set_overall_rating"]

    def test_comment_is_stored_stripped(self) -> None:
        uc, _profs, _users, _t = build()
        assert add(uc, comment="  Clear lectures  ").value.comment == "Clear lectures"

    def test_unknown_user_touches_no_professor(self) -> None:
        """Well-formed but unknown user id -> NotFound("user"), professor store untouched."""
        uc, profs, users, _t = build(with_user=False)
        result = add(uc, user_id=MISSING)

        assert not result.ok
        assert isinstance(result.error, NotFoundError)
        assert result.error.resource == "user"
        assert profs.calls == []
        assert users.calls == ["find_by_id"]

    def test_user_vanishing_before_push_is_not_found(self) -> None:
        uc, profs, users, _t = build()

        async def gone(user_id: Identifier, review: Review) -> bool:
            return False

        users.inner.push_review = gone
        result = add(uc)

        assert isinstance(result.error, NotFoundError)
        assert result.error.resource == "user"
        assert profs.calls == []

    def test_missing_professor_is_a_flagged_partial_write(self) -> None:
        uc, profs, users, telemetry = build()
        with capture_logs() as logs:
            result = add(uc, professor_id=MISSING)

        assert not result.ok
        err = result.error
        assert isinstance(err, PartialWriteError)
        assert isinstance(err, NotFoundError)
        assert err.resource == "professor"
        assert err.identifier == MISSING
        assert err.user_id == U1

        # user copy is not rolled back
        user_reviews = users.inner.docs[U1].reviews
        assert len(user_reviews) == 1
        assert user_reviews[0].id == err.review_id

        # no recompute after a failed push
        assert profs.calls == ["push_review"]
        assert "reviews.partial_write" in telemetry.counters
        assert "reviews.added" not in telemetry.counters
        partial = [e for e in logs if e["event"] == "review.partial_write"]
        assert partial and partial[0]["log_level"] == "warning"

    def test_store_failure_on_professor_push_is_returned_unmodified(self) -> None:
        uc, profs, _users, telemetry = build()
        boom = StoreError("connection reset")

        async def fail(professor_id: Identifier, review: Review) -> bool:
            raise boom

        profs.inner.push_review = fail
        result = add(uc)

        assert result.error is boom
        assert "reviews.partial_write" in telemetry.counters

    def test_success_is_counted(self) -> None:
        uc, _profs, _users, telemetry = build()
        add(uc, rating=4)
        assert telemetry.counters.count("reviews.added") == 1
        assert ("reviews.rating", 4) in telemetry.observed


class TestAddReviewValidation:
    def test_invalid_ids_are_rejected_before_any_store_access(self) -> None:
        for kw in ({"user_id": "not-a-valid-token"}, {"professor_id": "123"}):
            uc, profs, users, _t = build()
            result = add(uc, **kw)

            assert isinstance(result.error, ValidationError)
            assert profs.calls == [] and users.calls == []

    def test_bad_comment_or_rating_performs_no_writes(self) -> None:
        cases = [{"comment": "   "}, {"comment": "x" * 1001}, {"rating": 0}, {"rating": 6}]
        for kw in cases:
            uc, profs, users, _t = build()
            result = add(uc, **kw)

            assert isinstance(result.error, ValidationError), kw
            assert profs.calls == [] and users.calls == []


class TestRemoveReview:
    def test_removing_last_review_clears_rating(self) -> None:
        """One review (rating 3) removed -> no reviews, rating absent."""
        uc, profs, _users, _t = build(ratings=[3])
        r1 = professor(profs).reviews[0]

        result = asyncio.run(uc.remove_review(r1.id))

        assert result.ok
        assert result.value == DeletionReceipt(id=r1.id, deleted=True)
        p = professor(profs)
        assert p.reviews == ()
        assert p.overall_rating is None

    def test_remove_recomputes_from_remaining(self) -> None:
        uc, profs, _users, _t = build(ratings=[1, 5, 3])
        target = professor(profs).reviews[0]

        asyncio.run(uc.remove_review(target.id))

        assert professor(profs).overall_rating == 4

    def test_malformed_review_id_touches_no_store(self) -> None:
        uc, profs, users, _t = build(ratings=[3])
        result = asyncio.run(uc.remove_review("not-a-valid-token"))

        assert isinstance(result.error, ValidationError)
        assert profs.calls == [] and users.calls == []

    def test_unknown_review_is_not_found(self) -> None:
        uc, profs, _users, _t = build(ratings=[3])
        result = asyncio.run(uc.remove_review(MISSING))

        assert isinstance(result.error, NotFoundError)
        assert result.error.resource == "review"
        assert profs.calls == ["find_by_review_id"]

    def test_user_copy_is_kept(self) -> None:
        uc, _profs, users, _t = build()
        review = add(uc).value

        assert asyncio.run(uc.remove_review(review.id)).ok
        assert users.inner.docs[U1].reviews == (review,)


class TestProperties:
    def test_add_then_remove_restores_professor(self) -> None:
        uc, profs, _users, _t = build(ratings=[4, 5])
        before = professor(profs)

        review = add(uc, rating=1).value
        assert professor(profs).overall_rating != before.overall_rating
        asyncio.run(uc.remove_review(review.id))

        after = professor(profs)
        assert after.reviews == before.reviews
        assert after.overall_rating == before.overall_rating

    def test_recompute_is_idempotent(self) -> None:
        uc, profs, _users, _t = build(ratings=[2, 3, 5])
        recompute = RecomputeRating(profs)

        first = asyncio.run(recompute.execute(E1))
        second = asyncio.run(recompute.execute(E1))

        assert first.ok and second.ok
        assert first.value == second.value == 10 / 3

    def test_concurrent_adds_get_unique_ids(self) -> None:
        uc, profs, _users, _t = build(ids=ObjectIdGenerator())

        async def run_many() -> list:
            reqs = [
                AddReviewRequest(user_id=U1, professor_id=E1, comment=f"c{i}", rating=1 + i % 5)
                for i in range(50)
            ]
            return await asyncio.gather(*(uc.add_review(r) for r in reqs))

        results = asyncio.run(run_many())

        assert all(r.ok for r in results)
        ids = {r.value.id for r in results}
        assert len(ids) == 50
        p = professor(profs)
        assert len(p.reviews) == 50
        assert p.overall_rating == sum(r.rating for r in p.reviews) / 50
