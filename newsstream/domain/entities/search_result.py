"""Entity describing a single hit returned by a search source."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit


@dataclass(frozen=True)
class SearchResult:
    """Normalized result produced by every source adapter."""

    #: Title as reported by the provider or scraped from the page.
    title: str
    #: Address of the result; used as the dedup key within a run.
    url: str
    #: Snippet or summary text attached to the result.
    description: str
    #: Free-form age signal ("3 days ago", "P2D", "Published 2024-05-01"...).
    recency_hint: Optional[str] = None
    #: Hostname reported by the provider, when available.
    hostname: Optional[str] = None
    #: Thumbnail image address reported by the provider.
    thumbnail_url: Optional[str] = None

    def resolved_hostname(self) -> str:
        """Return the lower-cased hostname, parsing the URL when needed."""

        if self.hostname:
            return self.hostname.strip().lower().rstrip(".")
        try:
            host = urlsplit(self.url).hostname
        except ValueError:
            return ""
        return (host or "").lower().rstrip(".")
