"""Loading of the artist list that drives a curation run."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from newsstream.domain import SubjectConfig
from newsstream.settings import ConfigurationError


class MediaPagesPayload(BaseModel):
    """Artist pages on fixed media sites (extra site keys are kept)."""

    model_config = ConfigDict(extra="allow")

    natalie: str | None = None
    barks: str | None = None

    def to_mapping(self) -> dict[str, str]:
        pages = {"natalie": self.natalie, "barks": self.barks}
        pages.update(self.model_extra or {})
        return {key: str(value) for key, value in pages.items() if value}


class SearchHintsPayload(BaseModel):
    excludeTerms: list[str] = Field(default_factory=list)


class SubjectPayload(BaseModel):
    """Validated entry of the subjects file."""

    model_config = ConfigDict(str_strip_whitespace=True)

    #: Canonical name of the artist.
    name: str = Field(min_length=1)
    #: Japanese notation of the name.
    nameJa: str | None = None
    aliases: list[str] = Field(default_factory=list)
    genre: str = ""
    #: Note that helps telling the artist apart from homonyms.
    disambiguation: str | None = None
    mediaPages: MediaPagesPayload = Field(default_factory=MediaPagesPayload)
    searchHints: SearchHintsPayload = Field(default_factory=SearchHintsPayload)

    def to_domain(self) -> SubjectConfig:
        name = self.name.strip()
        return SubjectConfig(
            canonical_name=name,
            localized_name=(self.nameJa or "").strip() or name,
            aliases=tuple(alias.strip() for alias in self.aliases if alias.strip()),
            genre=self.genre,
            disambiguation_note=(self.disambiguation or "").strip() or None,
            fixed_source_pages=self.mediaPages.to_mapping(),
            search_exclusions=tuple(
                term.strip() for term in self.searchHints.excludeTerms if term.strip()
            ),
        )


def parse_subjects(payload: Any) -> List[SubjectConfig]:
    """Convert the decoded subjects file into ``SubjectConfig`` objects.

    Entries may be objects or bare strings (canonical name only).

    Raises:
        ConfigurationError: When the payload is not a list or an entry is invalid.
    """

    if not isinstance(payload, list):
        raise ConfigurationError("Subjects file must contain a JSON array")

    subjects: List[SubjectConfig] = []
    for index, entry in enumerate(payload):
        if isinstance(entry, str):
            entry = {"name": entry}
        try:
            subjects.append(SubjectPayload.model_validate(entry).to_domain())
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid subject at index {index}: {exc}") from exc
    return subjects


def load_subjects(path: Path) -> List[SubjectConfig]:
    """Read and validate the subjects file at ``path``."""

    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Could not read subjects file {path}: {exc}") from exc
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Subjects file {path} is not valid JSON: {exc}") from exc
    return parse_subjects(payload)


__all__ = ["SubjectPayload", "load_subjects", "parse_subjects"]
