# profrate/domain/models.py
# Domain models must be pure (no I/O, no external libs)
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Review:
    """
    A rated comment by a user about a professor.

    The same record is stored twice (on the user and on the professor) under
    one shared id.

    - id:            review id, unique and immutable
    - user_id:       author
    - professor_id:  subject
    - username:      author's name copied at creation; later renames do not propagate
    - comment:       free text
    - rating:        integer in [RATING_MIN, RATING_MAX]
    """

    id: str
    user_id: str
    professor_id: str
    username: str
    comment: str
    rating: int


@dataclass(frozen=True)
class Professor:
    id: str
    name: str
    department: str
    introduction: str
    picture: str
    reviews: tuple[Review, ...] = ()
    courses: tuple[str, ...] = ()
    # Cache of the mean over reviews; None while there are none.
    overall_rating: float | None = None


@dataclass(frozen=True)
class ProfessorSummary:
    """Listing projection of a professor (no reviews, no courses)."""

    id: str
    name: str
    department: str
    introduction: str
    picture: str
    overall_rating: float | None = None


@dataclass(frozen=True)
class User:
    id: str
    username: str
    reviews: tuple[Review, ...] = field(default=())
