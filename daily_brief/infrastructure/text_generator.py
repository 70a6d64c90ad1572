"""Infrastructure adapter for the external text-generation service."""

from __future__ import annotations

from typing import Protocol

import anthropic

from daily_brief.errors import BriefServiceError
from daily_brief.utils.logger import log


class TextGenerator(Protocol):
    def generate_text(self, prompt: str) -> str: ...


class AnthropicTextGenerator:
    """Prompt-in/text-out client backed by the Anthropic Messages API."""

    def __init__(self, api_key: str, model: str, max_tokens: int = 1024, client: anthropic.Anthropic | None = None):
        self.model = model
        self.max_tokens = max_tokens
        self.client = client or anthropic.Anthropic(api_key=api_key)

    def generate_text(self, prompt: str) -> str:
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as exc:
            raise BriefServiceError(f"Text generation failed: {exc}") from exc

        text = "".join(block.text for block in response.content if getattr(block, "type", "") == "text")
        log.debug(f"Generated {len(text)} characters with {self.model}")
        return text
