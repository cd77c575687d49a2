"""Middleware for the link shortener web app."""

from .headers import CORSHeadersMiddleware
from .logging import LoggingMiddleware

__all__ = ["CORSHeadersMiddleware", "LoggingMiddleware"]
