"""Utilities module for bidismoke."""

from .config import ConfigLoader, SmokeConfig
from .exceptions import (
    ConfigurationError,
    EvaluationError,
    NavigationError,
    ScreenshotError,
    ScreenshotFormatError,
    ScreenshotSignatureError,
    SessionError,
    SmokeTestError,
)

__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "EvaluationError",
    "NavigationError",
    "ScreenshotError",
    "ScreenshotFormatError",
    "ScreenshotSignatureError",
    "SessionError",
    "SmokeConfig",
    "SmokeTestError",
]
