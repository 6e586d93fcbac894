from __future__ import annotations

from abc import ABC, abstractmethod


class IdGeneratorPort(ABC):
    """Port for minting new document ids.

    Why: Use cases need fresh, globally unique review ids without importing
    the storage driver. Infrastructure provides ObjectIdGenerator.
    """

    @abstractmethod
    def new_id(self) -> str:
        """Return a new 24-char hex id."""
        ...
