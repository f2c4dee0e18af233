"""Construction of the pydantic-ai agents used for curation and images."""
from __future__ import annotations

from pydantic_ai import Agent
from pydantic_ai.models import Model
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.providers.google import GoogleProvider
from pydantic_ai.settings import ModelSettings

from .prompts import CURATOR_SYSTEM_PROMPT, IMAGE_SYSTEM_PROMPT
from .schemas import CurationResult, SvgImage

CURATION_TEMPERATURE = 0.3


def build_gemini_model(api_key: str, model_name: str) -> GoogleModel:
    """Gemini through the Google AI Studio API key."""

    return GoogleModel(model_name, provider=GoogleProvider(api_key=api_key))


def build_curation_agent(model: Model, *, retries: int = 0) -> Agent[None, CurationResult]:
    """One structured request per subject; a schema violation is not retried."""

    return Agent(
        model,
        output_type=CurationResult,
        system_prompt=CURATOR_SYSTEM_PROMPT,
        retries=retries,
        model_settings=ModelSettings(temperature=CURATION_TEMPERATURE),
    )


def build_image_agent(model: Model) -> Agent[None, SvgImage]:
    return Agent(
        model,
        output_type=SvgImage,
        system_prompt=IMAGE_SYSTEM_PROMPT,
        retries=1,
    )


__all__ = ["build_curation_agent", "build_gemini_model", "build_image_agent"]
