from __future__ import annotations

import asyncio
import base64
from types import SimpleNamespace

from newsstream.curation import SvgImage, SvgImageGenerator, svg_to_data_url
from newsstream.domain import Category

SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 800 600"><circle r="10"/></svg>'


class _FakeAgent:
    def __init__(self, output=None, error: Exception | None = None) -> None:
        self.output = output
        self.error = error
        self.prompts: list[str] = []

    async def run(self, prompt: str):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(output=self.output)


def test_svg_is_encoded_as_data_url() -> None:
    data_url = svg_to_data_url(f"```svg\n{SVG}\n```")

    assert data_url is not None
    prefix = "data:image/svg+xml;base64,"
    assert data_url.startswith(prefix)
    assert base64.b64decode(data_url[len(prefix):]).decode("utf-8") == SVG


def test_non_svg_output_is_rejected() -> None:
    assert svg_to_data_url("I cannot draw that.") is None
    assert svg_to_data_url("<svg><circle/>") is None


def test_generator_uses_musical_motif_for_releases() -> None:
    agent = _FakeAgent(SvgImage(svg=SVG))

    data_url = asyncio.run(
        SvgImageGenerator(agent).generate(title="新譜", summary="発売決定", category=Category.RELEASE)
    )

    assert data_url is not None
    assert "音楽的な要素" in agent.prompts[0]


def test_generator_failure_returns_none() -> None:
    agent = _FakeAgent(error=RuntimeError("quota exceeded"))

    result = asyncio.run(
        SvgImageGenerator(agent).generate(title="t", summary="s", category=Category.OTHER)
    )

    assert result is None
