"""Entity describing an artist tracked by the pipeline."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class SubjectConfig:
    """Static configuration of an artist whose news is curated."""

    #: Name used as the primary identity of the artist in the feed.
    canonical_name: str
    #: Name as written by the local (Japanese) press.
    localized_name: str
    #: Alternative spellings searched in addition to the two names above.
    aliases: Tuple[str, ...] = field(default_factory=tuple)
    #: Genre hint forwarded to the curation prompt.
    genre: str = ""
    #: Free-text note that helps telling this artist apart from homonyms.
    disambiguation_note: Optional[str] = None
    #: Artist pages on fixed media sites, keyed by site (``natalie``, ``barks``).
    fixed_source_pages: Dict[str, str] = field(default_factory=dict)
    #: Terms excluded from web searches for this artist.
    search_exclusions: Tuple[str, ...] = field(default_factory=tuple)

    def search_names(self) -> Tuple[str, ...]:
        """Return every distinct name worth querying, canonical name first."""

        names = [self.canonical_name, self.localized_name, *self.aliases]
        return tuple(dict.fromkeys(name.strip() for name in names if name and name.strip()))
