"""Illustrations for items that arrive without an image."""
from __future__ import annotations

import base64
import logging
import re
from typing import Any, Optional

from newsstream.domain import Category, ImageGenerator

from .prompts import IMAGE_USER_TEMPLATE
from .schemas import SvgImage

_CODE_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")
_MUSICAL_CATEGORIES = {Category.RELEASE, Category.TOUR}


def svg_to_data_url(svg: str) -> Optional[str]:
    """Encode SVG markup as a data URL, rejecting anything that is not SVG."""

    markup = _CODE_FENCE_RE.sub("", svg.strip()).strip()
    start = markup.find("<svg")
    if start < 0 or "</svg>" not in markup:
        return None
    markup = markup[start:]
    encoded = base64.b64encode(markup.encode("utf-8")).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"


class SvgImageGenerator(ImageGenerator):
    """Asks a structured-output agent for a small abstract SVG."""

    def __init__(self, agent: Any) -> None:
        self._agent = agent
        self._log = logging.getLogger("newsstream.images")

    async def generate(
        self, *, title: str, summary: str, category: Category
    ) -> Optional[str]:
        motif = (
            "関連する音楽的な要素を含めてください"
            if category in _MUSICAL_CATEGORIES
            else "抽象的なイメージ"
        )
        prompt = IMAGE_USER_TEMPLATE.format(
            title=title, summary=summary, motif=motif
        )
        try:
            run = await self._agent.run(prompt)
            output = run.output
            if not isinstance(output, SvgImage):
                raise TypeError(f"unexpected image output type: {type(output).__name__}")
        except Exception as exc:
            self._log.warning("Image generation failed for '%s': %s", title, exc)
            return None

        data_url = svg_to_data_url(output.svg)
        if data_url is None:
            self._log.warning("Image generation for '%s' returned no SVG markup", title)
        return data_url


__all__ = ["SvgImageGenerator", "svg_to_data_url"]
