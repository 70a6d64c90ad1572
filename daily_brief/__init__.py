"""Daily marketing brief package."""

from .application import BriefPipeline, BriefState, Stage
from .config import Settings, load_settings
from .domain import DailyBrief, MarketingDataset
from .infrastructure import load_marketing_dataset, save_daily_brief

__all__ = [
    "BriefPipeline",
    "BriefState",
    "Stage",
    "Settings",
    "load_settings",
    "DailyBrief",
    "MarketingDataset",
    "load_marketing_dataset",
    "save_daily_brief",
]
