"""
Configuration management for the daily brief
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from daily_brief.errors import BriefConfigError

DEFAULT_HISTORICAL_DAYS = 7
DEFAULT_SIGNIFICANT_CHANGE_THRESHOLD = 10.0


class Settings(BaseSettings):
    """Runtime settings, read once per process and passed down explicitly."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Language model
    anthropic_api_key: str
    llm_model: str = "claude-sonnet-4-20250514"
    llm_max_tokens: int = 1024

    # Data paths
    data_dir: Path
    output_dir: Path = Path("output")
    data_prefix: str = "test"

    # Analysis parameters
    # Accepted but unused: the analysis stages always look back a fixed 30 days.
    historical_days: int = DEFAULT_HISTORICAL_DAYS
    significant_change_threshold: float = DEFAULT_SIGNIFICANT_CHANGE_THRESHOLD

    verbose: bool = False
    log_dir: Optional[Path] = None


def load_settings(**overrides: Any) -> Settings:
    """Build settings from the environment, turning validation failures into ``BriefConfigError``."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        problems = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error.get("loc", ())) or "settings"
            if error.get("type") == "missing":
                problems.append(f"{field.upper()} environment variable is required but not set.")
            else:
                problems.append(f"{field.upper()}: {error.get('msg', 'invalid value')}")
        raise BriefConfigError(" ".join(problems)) from exc
