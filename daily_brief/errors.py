"""Daily brief exception hierarchy.

Each layer raises a specific error type so the CLI can report the failing
boundary without inspecting messages.
"""

from __future__ import annotations


class BriefError(Exception):
    """Base exception for all daily brief failures."""


class BriefConfigError(BriefError):
    """Raised for missing or invalid runtime configuration."""


class BriefIngestError(BriefError):
    """Raised when an input dataset cannot be read."""


class BriefStageError(BriefError):
    """Raised by a pipeline stage when its prerequisites are missing."""


class BriefServiceError(BriefError):
    """Raised when the external text-generation service fails."""
