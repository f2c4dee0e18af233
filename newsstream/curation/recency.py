"""Parsing of the heterogeneous age hints attached to search results.

Providers describe the age of a result in very different ways: relative
phrases ("3 days ago", "5時間前"), ISO-8601 durations ("P2D", "PT6H"),
explicit markers written by the scrapers ("Published 2024-05-01") or plain
absolute dates. Everything here is pure and never raises on bad input.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

_UNIT_DELTAS = {
    "second": timedelta(seconds=1),
    "minute": timedelta(minutes=1),
    "hour": timedelta(hours=1),
    "day": timedelta(days=1),
    "week": timedelta(weeks=1),
    "month": timedelta(days=30),
    "year": timedelta(days=365),
}
_UNIT_ORDER = ("second", "minute", "hour", "day", "week", "month", "year")

_EN_UNITS = {
    "sec": "second",
    "secs": "second",
    "second": "second",
    "seconds": "second",
    "min": "minute",
    "mins": "minute",
    "minute": "minute",
    "minutes": "minute",
    "hr": "hour",
    "hrs": "hour",
    "hour": "hour",
    "hours": "hour",
    "day": "day",
    "days": "day",
    "week": "week",
    "weeks": "week",
    "month": "month",
    "months": "month",
    "year": "year",
    "years": "year",
}
_JA_UNITS = {
    "秒": "second",
    "分": "minute",
    "時間": "hour",
    "日": "day",
    "週間": "week",
    "週": "week",
    "ヶ月": "month",
    "か月": "month",
    "カ月": "month",
    "ヵ月": "month",
    "ケ月": "month",
    "年": "year",
}

_EN_RELATIVE_RE = re.compile(
    r"\b(\d+|an?|one)\s+(" + "|".join(sorted(_EN_UNITS, key=len, reverse=True)) + r")\s+ago\b",
    re.IGNORECASE,
)
_JA_RELATIVE_RE = re.compile(
    r"(\d+)\s*(" + "|".join(sorted(_JA_UNITS, key=len, reverse=True)) + r")前"
)
_ISO_DURATION_RE = re.compile(
    r"^P(?!$)(?:(\d+)Y)?(?:(\d+)M)?(?:(\d+)W)?(?:(\d+)D)?"
    r"(?:T(?=\d)(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?)?$",
    re.IGNORECASE,
)
_PUBLISHED_RE = re.compile(
    r"published\s*:?\s*(\d{4})-(\d{1,2})-(\d{1,2})", re.IGNORECASE
)
_JA_DATE_RE = re.compile(r"(\d{4})年(\d{1,2})月(\d{1,2})日")
_NUMERIC_DATE_RE = re.compile(r"\b(\d{4})[./](\d{1,2})[./](\d{1,2})\b")
_COLLAPSE_WHITESPACE_RE = re.compile(r"\s+", re.UNICODE)

_JUST_NOW = {"just now", "now", "today", "たった今", "今日", "本日"}
_YESTERDAY = {"yesterday", "昨日"}
_UNKNOWN = {"unknown", "none", "n/a", "不明"}

_ABSOLUTE_FORMATS = (
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%b. %d, %Y",
)


@dataclass(frozen=True)
class RecencyAge:
    """Duration-style age extracted from a hint."""

    #: Amount of the dominant unit ("3" in "3 months ago").
    amount: int
    #: Dominant unit, from ``second`` up to ``year``.
    unit: str
    #: Total age, with months counted as 30 days and years as 365.
    delta: timedelta

    def is_stale(self) -> bool:
        """Coarse staleness check: a year or more, or two months or more."""

        if self.delta >= _UNIT_DELTAS["year"]:
            return True
        if self.unit == "year" and self.amount >= 1:
            return True
        return self.unit == "month" and self.amount >= 2


def parse_age(hint: Optional[str]) -> Optional[RecencyAge]:
    """Return the age encoded by a duration-style hint, if there is one."""

    text = _normalize(hint)
    if not text:
        return None
    lowered = text.lower()

    if lowered in _JUST_NOW:
        return RecencyAge(amount=0, unit="minute", delta=timedelta())
    if lowered in _YESTERDAY:
        return RecencyAge(amount=1, unit="day", delta=_UNIT_DELTAS["day"])

    match = _EN_RELATIVE_RE.search(text)
    if match:
        raw_amount, raw_unit = match.groups()
        amount = int(raw_amount) if raw_amount.isdigit() else 1
        unit = _EN_UNITS[raw_unit.lower()]
        return RecencyAge(amount=amount, unit=unit, delta=_scaled(unit, amount))

    match = _JA_RELATIVE_RE.search(text)
    if match:
        amount = int(match.group(1))
        unit = _JA_UNITS[match.group(2)]
        return RecencyAge(amount=amount, unit=unit, delta=_scaled(unit, amount))

    return _parse_iso_duration(text)


def parse_recency(hint: Optional[str], now: datetime) -> Optional[date]:
    """Resolve a recency hint to a calendar date relative to ``now``.

    Returns ``None`` for missing, ``Unknown`` or unparseable hints.
    """

    text = _normalize(hint)
    if not text or text.lower() in _UNKNOWN:
        return None

    match = _PUBLISHED_RE.search(text)
    if match:
        return _safe_date(*match.groups())

    age = parse_age(text)
    if age is not None:
        try:
            return (now - age.delta).date()
        except OverflowError:
            return None

    return _parse_absolute(text)


def _scaled(unit: str, amount: int) -> timedelta:
    # Ages beyond the timedelta range saturate and still count as stale.
    try:
        return _UNIT_DELTAS[unit] * amount
    except OverflowError:
        return timedelta.max


def _parse_iso_duration(text: str) -> Optional[RecencyAge]:
    match = _ISO_DURATION_RE.match(text)
    if not match:
        return None
    years, months, weeks, days, hours, minutes, seconds = (
        int(group) if group else 0 for group in match.groups()
    )
    components = {
        "year": years,
        "month": months,
        "week": weeks,
        "day": days,
        "hour": hours,
        "minute": minutes,
        "second": seconds,
    }
    try:
        delta = sum(
            (_scaled(unit, amount) for unit, amount in components.items()),
            timedelta(),
        )
    except OverflowError:
        delta = timedelta.max
    dominant = next(
        (unit for unit in reversed(_UNIT_ORDER) if components[unit]), "second"
    )
    return RecencyAge(amount=components[dominant], unit=dominant, delta=delta)


def _parse_absolute(text: str) -> Optional[date]:
    candidate = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return datetime.fromisoformat(candidate).date()
    except ValueError:
        pass

    match = _JA_DATE_RE.search(text) or _NUMERIC_DATE_RE.search(text)
    if match:
        return _safe_date(*match.groups())

    for date_format in _ABSOLUTE_FORMATS:
        try:
            return datetime.strptime(text, date_format).date()
        except ValueError:
            continue
    return None


def _safe_date(year: str, month: str, day: str) -> Optional[date]:
    try:
        return date(int(year), int(month), int(day))
    except (ValueError, OverflowError):
        return None


def _normalize(hint: Optional[str]) -> str:
    if not hint or not isinstance(hint, str):
        return ""
    sanitized = hint.replace("\xa0", " ").replace("\u202f", " ")
    return _COLLAPSE_WHITESPACE_RE.sub(" ", sanitized).strip()


__all__ = ["RecencyAge", "parse_age", "parse_recency"]
