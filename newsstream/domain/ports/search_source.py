"""Input port implemented by every search provider adapter."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from newsstream.domain.entities import SearchResult, SubjectConfig


@dataclass(frozen=True)
class SearchBudget:
    """Limits applied to a single adapter call."""

    #: Desired number of results after the adapter merged its queries.
    count: int = 20
    #: Provider freshness window: ``pd`` day, ``pw`` week, ``pm`` month, ``py`` year.
    freshness: str = "pw"


class SearchSource(ABC):
    """Defines how the pipeline retrieves raw results about a subject."""

    #: Short name used in logs and progress messages.
    name: str = "source"

    @abstractmethod
    async def search(
        self, subject: SubjectConfig, budget: SearchBudget
    ) -> List[SearchResult]:
        """Return results for the subject; failures yield partial or empty lists."""
