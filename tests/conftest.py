from __future__ import annotations

from typing import List

import pytest

from builders import funnel_dataset
from daily_brief.domain.models import MarketingDataset
from daily_brief.errors import BriefServiceError


class StubTextGenerator:
    """Records prompts and answers with canned text."""

    def __init__(self, response: str = "1. First insight\n2. Second insight\n", fail: bool = False):
        self.response = response
        self.fail = fail
        self.prompts: List[str] = []

    def generate_text(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.fail:
            raise BriefServiceError("service unavailable")
        return self.response


@pytest.fixture
def text_generator() -> StubTextGenerator:
    return StubTextGenerator()


@pytest.fixture
def failing_text_generator() -> StubTextGenerator:
    return StubTextGenerator(fail=True)


@pytest.fixture
def dataset() -> MarketingDataset:
    return funnel_dataset()


@pytest.fixture(autouse=True)
def _clear_brief_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "ANTHROPIC_API_KEY",
        "DATA_DIR",
        "OUTPUT_DIR",
        "DATA_PREFIX",
        "HISTORICAL_DAYS",
        "SIGNIFICANT_CHANGE_THRESHOLD",
        "VERBOSE",
        "LLM_MODEL",
        "LLM_MAX_TOKENS",
        "LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
