"""Input checks for review and professor fields.

Each check returns the normalised value or raises ValidationError. No I/O.
"""

from __future__ import annotations

from urllib.parse import urlparse

from ..errors import ValidationError

RATING_MIN = 1
RATING_MAX = 5
COMMENT_MAX_CHARS = 1000
NAME_MAX_CHARS = 100
DEPARTMENT_MAX_CHARS = 100
INTRODUCTION_MAX_CHARS = 2000
PICTURE_MAX_CHARS = 2048


def _check_text(value: object, field: str, max_chars: int) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    text = value.strip()
    if not text:
        raise ValidationError(f"{field} must not be empty")
    if len(text) > max_chars:
        raise ValidationError(f"{field} must be at most {max_chars} characters")
    return text


def check_comment(comment: object) -> str:
    return _check_text(comment, "comment", COMMENT_MAX_CHARS)


def check_rating(rating: object) -> int:
    # bool is an int subclass; True must not count as one star
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError("rating must be an integer")
    if not (RATING_MIN <= rating <= RATING_MAX):
        raise ValidationError(f"rating must be between {RATING_MIN} and {RATING_MAX}")
    return rating


def check_professor_name(name: object) -> str:
    return _check_text(name, "name", NAME_MAX_CHARS)


def check_department(department: object) -> str:
    return _check_text(department, "department", DEPARTMENT_MAX_CHARS)


def check_introduction(introduction: object) -> str:
    return _check_text(introduction, "introduction", INTRODUCTION_MAX_CHARS)


def check_picture(picture: object) -> str:
    url = _check_text(picture, "picture", PICTURE_MAX_CHARS)
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError("picture must be an http(s) URL")
    return url


# editable professor fields and their checks; stores and the catalog key off this
PROFESSOR_FIELD_CHECKS = {
    "name": check_professor_name,
    "department": check_department,
    "introduction": check_introduction,
    "picture": check_picture,
}
EDITABLE_PROFESSOR_FIELDS = tuple(PROFESSOR_FIELD_CHECKS)
