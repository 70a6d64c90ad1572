"""Domain layer package."""

from .models import MarketingDataset
from .periods import AnalysisWindow
from .results import DailyBrief, DataValidationResult

__all__ = ["MarketingDataset", "AnalysisWindow", "DailyBrief", "DataValidationResult"]
