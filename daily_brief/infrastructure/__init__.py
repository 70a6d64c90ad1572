"""Infrastructure layer package."""

from .csv_repository import load_marketing_dataset
from .report_exporter import save_daily_brief, save_summary_json
from .text_generator import AnthropicTextGenerator, TextGenerator

__all__ = ["load_marketing_dataset", "save_daily_brief", "save_summary_json", "AnthropicTextGenerator", "TextGenerator"]
