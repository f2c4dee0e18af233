"""Tests for the generative curation step with fake agents and a function model."""
from __future__ import annotations

import asyncio
from datetime import date, datetime, timezone
from types import SimpleNamespace

import pytest
from pydantic_ai.messages import ModelMessage, ModelResponse, ToolCallPart
from pydantic_ai.models.function import AgentInfo, FunctionModel

from newsstream.curation import (
    CurationResult,
    GenerativeNewsCurator,
    build_curation_prompt,
    validate_items,
)
from newsstream.curation.agents import build_curation_agent
from newsstream.domain import Category, CuratedItem, SearchResult, SubjectConfig

NOW = datetime(2024, 5, 10, 9, 0, tzinfo=timezone.utc)
SUBJECT = SubjectConfig(
    canonical_name="Radiohead",
    localized_name="レディオヘッド",
    aliases=("RH",),
    genre="Alternative Rock",
    disambiguation_note="UK band formed in 1985",
)
RESULTS = [
    SearchResult(
        title="Radiohead announce tour",
        url="https://www.nme.com/news/radiohead-tour",
        description="The band will tour Japan.",
        recency_hint="2 days ago",
        thumbnail_url="https://www.nme.com/thumb.jpg",
    )
]


class _FakeAgent:
    """Agent double returning a fixed output and recording prompts."""

    def __init__(self, output=None, error: Exception | None = None) -> None:
        self.output = output
        self.error = error
        self.prompts: list[str] = []

    async def run(self, prompt: str):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(output=self.output)


def _payload(**overrides) -> dict:
    payload = {
        "title": "レディオヘッド来日ツアー決定",
        "summary": "レディオヘッドが来日ツアーを発表した。",
        "url": "https://www.nme.com/news/radiohead-tour",
        "image_url": None,
        "source": "NME",
        "date": "2024-05-08",
        "category": "Tour",
        "importance": 4,
    }
    payload.update(overrides)
    return payload


def _curator(agent: _FakeAgent) -> GenerativeNewsCurator:
    return GenerativeNewsCurator(agent, clock=lambda: NOW)


def test_prompt_contains_subject_and_computed_dates() -> None:
    prompt = build_curation_prompt(SUBJECT, RESULTS, NOW)

    assert "Radiohead" in prompt
    assert "レディオヘッド" in prompt
    assert "UK band formed in 1985" in prompt
    assert "2024-05-08" in prompt
    assert "https://www.nme.com/thumb.jpg" in prompt
    assert "2024-05-10" in prompt


def test_valid_item_is_converted() -> None:
    agent = _FakeAgent(CurationResult.model_validate({"news": [_payload()]}))

    items = asyncio.run(_curator(agent).curate(SUBJECT, RESULTS))

    assert items == [
        CuratedItem(
            title="レディオヘッド来日ツアー決定",
            summary="レディオヘッドが来日ツアーを発表した。",
            url="https://www.nme.com/news/radiohead-tour",
            source="NME",
            date=date(2024, 5, 8),
            category=Category.TOUR,
            importance=4,
        )
    ]
    assert len(agent.prompts) == 1


def test_future_date_is_clamped_to_today() -> None:
    agent = _FakeAgent(CurationResult.model_validate({"news": [_payload(date="2024-05-11")]}))

    items = asyncio.run(_curator(agent).curate(SUBJECT, RESULTS))

    assert len(items) == 1
    assert items[0].date == date(2024, 5, 10)


def test_item_older_than_horizon_is_dropped() -> None:
    agent = _FakeAgent(CurationResult.model_validate({"news": [_payload(date="2024-04-20")]}))

    items = asyncio.run(_curator(agent).curate(SUBJECT, RESULTS))

    assert items == []


def test_low_importance_items_are_dropped() -> None:
    agent = _FakeAgent(
        CurationResult.model_validate(
            {"news": [_payload(importance=2), _payload(url="https://b.example/", importance=3)]}
        )
    )

    items = asyncio.run(_curator(agent).curate(SUBJECT, RESULTS))

    assert [item.url for item in items] == ["https://b.example/"]


def test_empty_input_does_not_call_the_model() -> None:
    agent = _FakeAgent(CurationResult(news=[]))

    items = asyncio.run(_curator(agent).curate(SUBJECT, []))

    assert items == []
    assert agent.prompts == []


def test_model_failure_yields_no_items() -> None:
    agent = _FakeAgent(error=RuntimeError("output validation failed"))

    items = asyncio.run(_curator(agent).curate(SUBJECT, RESULTS))

    assert items == []


def test_unexpected_output_type_yields_no_items() -> None:
    agent = _FakeAgent(output={"news": []})

    items = asyncio.run(_curator(agent).curate(SUBJECT, RESULTS))

    assert items == []


def test_horizon_boundary_is_inclusive() -> None:
    today = date(2024, 5, 10)
    item = CuratedItem(
        title="t",
        summary="s",
        url="https://a.example/",
        source="a",
        date=date(2024, 4, 26),
        category=Category.OTHER,
        importance=3,
    )

    assert validate_items([item], today) == [item]


def test_out_of_range_hint_is_unknown_in_prompt() -> None:
    results = [
        SearchResult(
            title="Radiohead archive",
            url="https://a.example/archive",
            description="Old news.",
            recency_hint="5000 years ago",
        )
    ]

    prompt = build_curation_prompt(SUBJECT, results, NOW)

    assert "Unknown" in prompt


def _function_model_curator(arguments: dict) -> tuple[GenerativeNewsCurator, list[int]]:
    """Curator backed by the real agent and a model answering with ``arguments``."""

    calls: list[int] = []

    def _respond(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
        calls.append(len(messages))
        return ModelResponse(parts=[ToolCallPart(info.output_tools[0].name, arguments)])

    agent = build_curation_agent(FunctionModel(_respond))
    return GenerativeNewsCurator(agent, clock=lambda: NOW), calls


def test_real_schema_accepts_valid_output() -> None:
    curator, calls = _function_model_curator({"news": [_payload()]})

    items = asyncio.run(curator.curate(SUBJECT, RESULTS))

    assert [item.url for item in items] == ["https://www.nme.com/news/radiohead-tour"]
    assert len(calls) == 1


@pytest.mark.parametrize(
    "overrides",
    [
        {"date": "2024-02-30"},
        {"date": "08/05/2024"},
        {"category": "Gossip"},
        {"importance": 9},
        {"importance": 0},
        {"date": "2024-02-30", "category": "Gossip", "importance": 9},
    ],
)
def test_schema_violation_yields_no_items(overrides: dict) -> None:
    curator, calls = _function_model_curator({"news": [_payload(**overrides)]})

    items = asyncio.run(curator.curate(SUBJECT, RESULTS))

    assert items == []
    assert len(calls) == 1


def test_one_invalid_item_discards_the_whole_response() -> None:
    curator, _ = _function_model_curator(
        {"news": [_payload(), _payload(url="https://b.example/", importance=9)]}
    )

    items = asyncio.run(curator.curate(SUBJECT, RESULTS))

    assert items == []
