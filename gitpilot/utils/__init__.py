"""Utility functions for GitPilot."""

from .logging import (
    LogCapture,
    disable_logging,
    get_logger,
    setup_logging,
)

__all__ = [
    "LogCapture",
    "disable_logging",
    "get_logger",
    "setup_logging",
]
