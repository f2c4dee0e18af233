"""Merging and ordering of the persisted feed.

Two history policies exist. ``MERGE`` (the default) keeps the stored feed,
uses it for duplicate detection and appends the new batch before re-sorting.
``REPLACE`` ignores the stored feed entirely and writes only the new batch.
With either policy a run without new items leaves the stored feed untouched.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from newsstream.domain import FeedRepository, PersistedItem


class FeedPolicy(str, Enum):
    """How a run combines its new items with the stored feed."""

    MERGE = "merge"
    REPLACE = "replace"


def order_feed(items: Iterable[PersistedItem]) -> List[PersistedItem]:
    """Sort by descending effective date; ties keep their input order."""

    return sorted(items, key=lambda item: item.effective_timestamp(), reverse=True)


def merge_feed(
    history: Sequence[PersistedItem],
    new_items: Sequence[PersistedItem],
    *,
    policy: FeedPolicy = FeedPolicy.MERGE,
    max_items: Optional[int] = None,
) -> List[PersistedItem]:
    """Combine the new batch with history according to ``policy``.

    New items are placed first so that they win ties after sorting.
    ``max_items`` caps the ordered feed, evicting the oldest entries.
    """

    combined = list(new_items)
    if policy is FeedPolicy.MERGE:
        combined.extend(history)
    ordered = order_feed(combined)
    if max_items is not None and max_items > 0:
        ordered = ordered[:max_items]
    return ordered


class FeedStore:
    """Applies the history policy on top of a :class:`FeedRepository`."""

    def __init__(
        self,
        repository: FeedRepository,
        *,
        policy: FeedPolicy = FeedPolicy.MERGE,
        max_items: Optional[int] = None,
    ) -> None:
        self._repository = repository
        self._policy = policy
        self._max_items = max_items
        self._log = logging.getLogger("newsstream.feed_store")

    @property
    def policy(self) -> FeedPolicy:
        return self._policy

    def load_history(self) -> List[PersistedItem]:
        """Return the history relevant to the policy (empty for ``REPLACE``)."""

        if self._policy is FeedPolicy.REPLACE:
            self._log.info("History policy is 'replace'; ignoring the stored feed")
            return []
        return self._repository.load()

    def commit(
        self, history: Sequence[PersistedItem], new_items: Sequence[PersistedItem]
    ) -> Optional[List[PersistedItem]]:
        """Write the merged feed and return it, or ``None`` when nothing changed.

        Raises:
            FeedStoreError: Propagated from the repository when the write fails.
        """

        if not new_items:
            return None
        merged = merge_feed(
            history, new_items, policy=self._policy, max_items=self._max_items
        )
        self._repository.save(merged)
        return merged


__all__ = ["FeedPolicy", "FeedStore", "merge_feed", "order_feed"]
