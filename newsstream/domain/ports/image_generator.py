"""Output port used to illustrate items that arrive without an image."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from newsstream.domain.entities import Category


class ImageGenerator(ABC):
    """Produces an embeddable image reference for a news item."""

    @abstractmethod
    async def generate(
        self, *, title: str, summary: str, category: Category
    ) -> Optional[str]:
        """Return an image reference, or ``None`` when generation fails."""
