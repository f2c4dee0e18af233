from datetime import date, datetime, timedelta, timezone

import pytest

from newsstream.curation.recency import parse_age, parse_recency


NOW = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("hint", "expected"),
    [
        ("3 days ago", date(2024, 5, 7)),
        ("1 day ago", date(2024, 5, 9)),
        ("an hour ago", date(2024, 5, 10)),
        ("2 weeks ago", date(2024, 4, 26)),
        ("5日前", date(2024, 5, 5)),
        ("3時間前", date(2024, 5, 10)),
        ("P2D", date(2024, 5, 8)),
        ("PT6H", date(2024, 5, 10)),
        ("Just now", date(2024, 5, 10)),
        ("yesterday", date(2024, 5, 9)),
        ("昨日", date(2024, 5, 9)),
    ],
)
def test_relative_hints_resolve_against_now(hint: str, expected: date) -> None:
    assert parse_recency(hint, NOW) == expected


@pytest.mark.parametrize(
    ("hint", "expected"),
    [
        ("Published 2024-05-01", date(2024, 5, 1)),
        ("2024-05-01", date(2024, 5, 1)),
        ("2024-05-01T09:30:00Z", date(2024, 5, 1)),
        ("2024年5月1日", date(2024, 5, 1)),
        ("2024.05.01", date(2024, 5, 1)),
        ("May 1, 2024", date(2024, 5, 1)),
        ("1 May 2024", date(2024, 5, 1)),
    ],
)
def test_absolute_hints(hint: str, expected: date) -> None:
    assert parse_recency(hint, NOW) == expected


@pytest.mark.parametrize(
    "hint",
    [
        None,
        "",
        "Unknown",
        "不明",
        "sometime soon",
        "Published 2024-13-40",
        "5000 years ago",
        "P5000Y",
        "99999999999 days ago",
        "P99999999999D",
    ],
)
def test_unparseable_hints_are_unknown(hint) -> None:
    assert parse_recency(hint, NOW) is None


@pytest.mark.parametrize("hint", ["99999999999 days ago", "P99999999999D", "5000 years ago"])
def test_out_of_range_ages_saturate(hint: str) -> None:
    age = parse_age(hint)

    assert age is not None and age.is_stale()


def test_parse_age_reports_dominant_unit() -> None:
    age = parse_age("P1Y2M")

    assert age is not None
    assert age.unit == "year"
    assert age.amount == 1
    assert age.delta == timedelta(days=365 + 60)


@pytest.mark.parametrize("hint", ["2 years ago", "3 months ago", "13ヶ月前", "P400D", "a year ago"])
def test_obviously_old_ages_are_stale(hint: str) -> None:
    age = parse_age(hint)

    assert age is not None and age.is_stale()


@pytest.mark.parametrize("hint", ["1 month ago", "20 days ago", "6時間前", "P2D"])
def test_recent_ages_are_not_stale(hint: str) -> None:
    age = parse_age(hint)

    assert age is not None and not age.is_stale()


def test_absolute_dates_are_not_ages() -> None:
    assert parse_age("2024-05-01") is None
    assert parse_age("Published 2024-05-01") is None
