"""JSON file storage for the feed read by the static site."""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Sequence

from newsstream.domain import FeedRepository, PersistedItem

log = logging.getLogger(__name__)


class FeedStoreError(RuntimeError):
    """Raised when the feed cannot be written."""


class JsonFeedRepository(FeedRepository):
    """Keeps the feed as a pretty-printed JSON array on disk."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> List[PersistedItem]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            log.info("No existing feed at %s; starting a new one", self._path)
            return []
        except OSError as exc:
            log.warning("Could not read feed %s (%s); treating it as empty", self._path, exc)
            return []

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            log.warning("Feed %s is not valid JSON (%s); treating it as empty", self._path, exc)
            return []
        if not isinstance(payload, list):
            log.warning("Feed %s is not a JSON array; treating it as empty", self._path)
            return []

        items: List[PersistedItem] = []
        for index, record in enumerate(payload):
            if not isinstance(record, dict):
                log.warning("Skipping feed record %d: not an object", index)
                continue
            try:
                items.append(PersistedItem.from_mapping(record))
            except ValueError as exc:
                log.warning("Skipping feed record %d: %s", index, exc)
        return items

    def save(self, items: Sequence[PersistedItem]) -> None:
        """Write the feed to a temporary file and rename it over the target."""

        document = json.dumps(
            [item.to_mapping() for item in items], ensure_ascii=False, indent=2
        )
        directory = self._path.parent
        tmp_name: str | None = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as stream:
                tmp_name = stream.name
                stream.write(document)
                stream.write("\n")
                stream.flush()
                os.fsync(stream.fileno())
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise FeedStoreError(f"Could not write feed to {self._path}: {exc}") from exc
        log.debug("Wrote %d items to %s", len(items), self._path)


__all__ = ["FeedStoreError", "JsonFeedRepository"]
