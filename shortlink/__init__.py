"""Core business logic for the link shortener."""

from .allocator import IdentifierAllocator
from .resolver import RedirectResolver
from .service import LinkService
from .shortcode import ShortCodeGenerator

__all__ = ["IdentifierAllocator", "RedirectResolver", "LinkService", "ShortCodeGenerator"]
