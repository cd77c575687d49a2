"""Common utilities for the link shortener."""

from .validators import is_valid_url, normalize_url, validate
from .urls import build_base_url, build_short_url
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "normalize_url",
    "validate",
    "build_base_url",
    "build_short_url",
    "setup_logging",
    "get_logger",
]
