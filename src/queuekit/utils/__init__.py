"""Utility functions and helpers."""

from queuekit.utils.logging import setup_logging
from queuekit.utils.metrics import metrics

__all__ = ["setup_logging", "metrics"]
