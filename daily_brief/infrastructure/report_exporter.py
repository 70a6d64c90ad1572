"""Infrastructure adapter for brief export targets."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from daily_brief.domain.results import DailyBrief


def brief_output_path(output_dir: Path, date: str) -> Path:
    return Path(output_dir) / f"daily-brief-{date}.json"


def save_summary_json(path: Path, summary: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")


def save_daily_brief(output_dir: Path, brief: DailyBrief) -> Path:
    path = brief_output_path(output_dir, brief.date)
    save_summary_json(path, brief.to_dict())
    return path
