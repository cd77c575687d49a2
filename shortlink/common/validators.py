"""Validation utilities for the link shortener."""

from urllib.parse import urlparse
from typing import Tuple


ALLOWED_SCHEMES = ("http", "https")

# C0 controls and space are trimmed from both ends; tab and newlines anywhere
_TRIM_CHARS = "".join(chr(c) for c in range(0x21))
_REMOVE_ANYWHERE = str.maketrans("", "", "\t\n\r")


def normalize_url(url: str) -> str:
    """Return ``url`` as it will be stored and redirected to.

    urlparse silently ignores these characters while the raw string would
    still carry them into the Location header.
    """
    return url.strip(_TRIM_CHARS).translate(_REMOVE_ANYWHERE)


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a candidate long URL.

    Slashless forms such as ``http:example.com`` are rejected; only
    ``scheme://host`` URLs are accepted.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    try:
        result = urlparse(url)
        # Accessing .port forces validation of the netloc
        result.port
    except ValueError as e:
        return False, f"Invalid URL format: {e}"

    if result.scheme not in ALLOWED_SCHEMES:
        return False, "URL must use http or https protocol"

    if not result.hostname:
        return False, "URL must have a valid domain"

    return True, ""


def validate(candidate: str) -> bool:
    """Return True when ``candidate`` is an absolute http(s) URL."""
    valid, _ = is_valid_url(candidate)
    return valid
