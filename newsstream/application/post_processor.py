"""Acceptance of curated items into the pending feed batch."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Iterable, List, MutableSet
from uuid import uuid4

from newsstream.domain import CuratedItem, PersistedItem, SubjectConfig


def _new_id() -> str:
    return str(uuid4())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class PostProcessResult:
    """Items accepted for a subject and the duplicates that were skipped."""

    accepted: List[PersistedItem] = field(default_factory=list)
    duplicates: List[CuratedItem] = field(default_factory=list)


class PostProcessor:
    """Drops already known URLs and stamps identity and provenance."""

    def __init__(
        self,
        *,
        id_factory: Callable[[], str] = _new_id,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._id_factory = id_factory
        self._clock = clock
        self._log = logging.getLogger("newsstream.post_processor")

    def process(
        self,
        subject: SubjectConfig,
        items: Iterable[CuratedItem],
        seen_urls: MutableSet[str],
    ) -> PostProcessResult:
        """Accept the items whose URL is not in ``seen_urls``.

        ``seen_urls`` holds the URLs of the persisted history and of the items
        accepted earlier in the run; accepted URLs are added to it.
        """

        result = PostProcessResult()
        retrieved_at = self._clock()
        for item in items:
            if item.url in seen_urls:
                self._log.info("Skipping duplicate: %s", item.title)
                result.duplicates.append(item)
                continue
            seen_urls.add(item.url)
            result.accepted.append(
                PersistedItem.from_curated(
                    item,
                    item_id=self._id_factory(),
                    subject=subject.canonical_name,
                    retrieved_at=retrieved_at,
                )
            )
        return result


__all__ = ["PostProcessResult", "PostProcessor"]
