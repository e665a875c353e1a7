"""Product copy rewriting with Gemini.

Rewrites are cosmetic: every failure falls back to the text the caller
already has, and nothing here touches cart or order state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from google import genai
from google.genai import types

from storefront.utils.settings import Settings

logger = structlog.get_logger(__name__)

FALLBACK_REVIEW = "Great product!"

_DESCRIPTION_PROMPT = (
    "As a sales and marketing expert, improve this product description to make it more "
    "appealing to customers.\n"
    "Product name: {name}\n"
    "Current description: {description}\n"
    "Reply with the new description only."
)

_REVIEW_PROMPT = (
    'You are a customer who bought this product: "{name}". '
    "Write a short, realistic review expressing satisfaction with its quality."
)


class EnhancementFailed(Exception):
    """The text model could not produce a rewrite."""


@dataclass(frozen=True, slots=True)
class GeminiClientFactory:
    api_key: str

    def create(self) -> Any:
        return genai.Client(api_key=self.api_key)


class DescriptionEnhancer:
    """Single-attempt, asynchronous text rewriting with a fallback to the input."""

    def __init__(self, client: Any, model: str = "gemini-3-flash-preview", temperature: float = 0.7):
        self._client = client
        self.model = model
        self.temperature = temperature

    @classmethod
    def from_settings(cls, settings: Settings) -> DescriptionEnhancer:
        """Build an enhancer; without an API key every call returns the text it was given."""
        client = GeminiClientFactory(settings.gemini_api_key).create() if settings.gemini_api_key else None
        return cls(client, model=settings.gemini_model, temperature=settings.gemini_temperature)

    async def enhance(self, product_name: str, current_text: str) -> str:
        prompt = _DESCRIPTION_PROMPT.format(name=product_name, description=current_text)
        try:
            text = await self._generate(prompt, self.temperature)
        except EnhancementFailed as exc:
            logger.warning("Description enhancement failed, keeping current text", product=product_name, error=str(exc))
            return current_text
        return text or current_text

    async def suggest_review(self, product_name: str) -> str:
        try:
            text = await self._generate(_REVIEW_PROMPT.format(name=product_name), 0.8)
        except EnhancementFailed as exc:
            logger.warning("Review suggestion failed", product=product_name, error=str(exc))
            return FALLBACK_REVIEW
        return text or FALLBACK_REVIEW

    async def _generate(self, contents: str, temperature: float) -> str:
        if self._client is None:
            raise EnhancementFailed("Gemini client is not configured")

        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=contents,
                config=types.GenerateContentConfig(temperature=temperature),
            )
        except Exception as exc:
            raise EnhancementFailed(str(exc)) from exc

        return (getattr(response, "text", None) or "").strip()
