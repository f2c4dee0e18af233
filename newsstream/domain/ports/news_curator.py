"""Port for the generative extraction step."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

from newsstream.domain.entities import CuratedItem, SearchResult, SubjectConfig


class NewsCurator(ABC):
    """Turns filtered search results into validated news items."""

    @abstractmethod
    async def curate(
        self, subject: SubjectConfig, results: Sequence[SearchResult]
    ) -> List[CuratedItem]:
        """Return the items worth publishing; model failures yield ``[]``."""
