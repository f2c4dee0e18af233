"""Entities for curated and persisted news items."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class Category(str, Enum):
    """Kinds of announcements accepted in the feed."""

    RELEASE = "Release"
    TOUR = "Tour"
    INTERVIEW = "Interview"
    MEDIA = "Media"
    OTHER = "Other"


@dataclass(frozen=True)
class CuratedItem:
    """News item extracted by the curation engine."""

    #: Short headline written for the feed.
    title: str
    #: Two or three sentence summary of the announcement.
    summary: str
    #: Address of the original article.
    url: str
    #: Outlet name (site or domain) the item was taken from.
    source: str
    #: Publication date of the announcement.
    date: date
    #: Classification of the announcement.
    category: Category
    #: Editorial weight from 1 (trivia) to 5 (major news).
    importance: int
    #: Illustration attached to the item, if any.
    image_url: Optional[str] = None


@dataclass(frozen=True)
class PersistedItem:
    """Curated item accepted into the feed together with provenance data."""

    #: Opaque unique identifier generated on acceptance.
    id: str
    #: Canonical name of the artist the item was curated for.
    subject: str
    #: Moment the item was accepted.
    retrieved_at: Optional[datetime]
    title: str
    summary: str
    url: str
    source: str
    #: Date as stored in the feed (``YYYY-MM-DD`` for items written by us).
    date: str
    category: str
    importance: int
    image_url: Optional[str] = None

    @classmethod
    def from_curated(
        cls,
        item: CuratedItem,
        *,
        item_id: str,
        subject: str,
        retrieved_at: datetime,
    ) -> "PersistedItem":
        """Stamp a curated item with identity and provenance metadata."""

        return cls(
            id=item_id,
            subject=subject,
            retrieved_at=retrieved_at,
            title=item.title,
            summary=item.summary,
            url=item.url,
            source=item.source,
            date=item.date.isoformat(),
            category=item.category.value,
            importance=item.importance,
            image_url=item.image_url,
        )

    def effective_timestamp(self) -> float:
        """Timestamp used to order the feed.

        The reported ``date`` wins when it can be parsed, ``retrieved_at`` is
        the fallback and anything else sorts as the epoch.
        """

        parsed = _parse_feed_datetime(self.date)
        if parsed is None:
            parsed = self.retrieved_at
        if parsed is None:
            return 0.0
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.timestamp()

    def to_mapping(self) -> Dict[str, Any]:
        """Serialize the item to the JSON shape read by the static site."""

        payload: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "url": self.url,
        }
        if self.image_url:
            payload["imageUrl"] = self.image_url
        payload.update(
            {
                "source": self.source,
                "date": self.date,
                "category": self.category,
                "importance": self.importance,
                "artist": self.subject,
                "fetchedAt": (
                    self.retrieved_at.isoformat() if self.retrieved_at else None
                ),
            }
        )
        return payload

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PersistedItem":
        """Rebuild an item from a stored feed record.

        Raises:
            ValueError: When the record lacks an identifier or a URL.
        """

        item_id = data.get("id")
        url = data.get("url")
        if not item_id or not url:
            raise ValueError("feed record requires 'id' and 'url'")

        try:
            importance = int(data.get("importance") or 0)
        except (TypeError, ValueError):
            importance = 0

        return cls(
            id=str(item_id),
            subject=str(data.get("artist") or data.get("subject") or ""),
            retrieved_at=_parse_feed_datetime(data.get("fetchedAt")),
            title=str(data.get("title") or ""),
            summary=str(data.get("summary") or ""),
            url=str(url),
            source=str(data.get("source") or ""),
            date=str(data.get("date") or ""),
            category=str(data.get("category") or Category.OTHER.value),
            importance=importance,
            image_url=data.get("imageUrl") or None,
        )


def _parse_feed_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 date or timestamp stored in the feed."""

    if not value or not isinstance(value, str):
        return None
    candidate = value.strip()
    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        pass
    try:
        return datetime.combine(date.fromisoformat(candidate), datetime.min.time())
    except ValueError:
        return None
