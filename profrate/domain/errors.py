"""Domain errors (typed) for the review lifecycle.

Why: Unified error family for Application layer, without Infra leaks.
"""

from dataclasses import dataclass


class DomainError(Exception):
    """Base class for domain-specific errors."""


class ValidationError(DomainError):
    """Invalid input (identifier, comment, rating, professor fields)."""


@dataclass(eq=False)
class NotFoundError(DomainError):
    """Addressed document does not exist.

    resource is one of "user", "professor", "review".
    """

    resource: str
    identifier: str = ""

    def __str__(self) -> str:
        if self.identifier:
            return f"{self.resource} not found: {self.identifier}"
        return f"{self.resource} not found"


@dataclass(eq=False)
class PartialWriteError(NotFoundError):
    """Review landed on the user but the professor push failed.

    Still a NotFoundError("professor") for callers; carries enough ids to
    reconcile the orphaned user-side copy.
    """

    review_id: str = ""
    user_id: str = ""

    def __str__(self) -> str:
        return (
            f"professor not found: {self.identifier} "
            f"(review {self.review_id} already written to user {self.user_id})"
        )


class StoreError(DomainError):
    """Document store backend failed or is misconfigured."""
