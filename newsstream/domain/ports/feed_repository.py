"""Port responsible for reading and writing the persisted feed."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

from newsstream.domain.entities import PersistedItem


class FeedRepository(ABC):
    """Stores the ordered feed consumed by the static site."""

    @abstractmethod
    def load(self) -> List[PersistedItem]:
        """Return the stored feed; an unreadable feed is reported as empty."""

    @abstractmethod
    def save(self, items: Sequence[PersistedItem]) -> None:
        """Replace the stored feed atomically with ``items``."""
