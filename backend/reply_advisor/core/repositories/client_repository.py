from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from reply_advisor.core.models.client import Client


class ClientRepository(ABC):
    """Abstract repository interface for the client roster.

    The roster is stored as one document: callers load the whole collection,
    change it and save it back. There is no locking; the last save wins.
    """

    @abstractmethod
    async def get_all(self) -> list[Client]:  # pragma: no cover - interface only
        """Return every stored client in stored order, or an empty list."""

    @abstractmethod
    async def save_all(self, clients: Sequence[Client]) -> None:  # pragma: no cover
        """Replace the stored collection with `clients`."""
