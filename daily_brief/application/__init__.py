"""Application layer package."""

from .pipeline import BriefPipeline, BriefState, Stage, StageFailed, StageSucceeded
from .validation_service import validate_dataset

__all__ = ["BriefPipeline", "BriefState", "Stage", "StageFailed", "StageSucceeded", "validate_dataset"]
