"""Review DTOs.

Why: Saubere Input-Verträge; raw values are validated inside the use case.
"""

from dataclasses import dataclass


@dataclass
class AddReviewRequest:
    """Request to add a review by a user about a professor."""

    user_id: str
    professor_id: str
    comment: str
    rating: int


@dataclass(frozen=True)
class DeletionReceipt:
    """Confirmation returned by removal operations."""

    id: str
    deleted: bool = True
