"""Short code generation utilities."""

import secrets
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate random identifiers for links."""

    # Base36 characters (lowercase alphanumeric)
    ALPHABET = string.ascii_lowercase + string.digits

    def __init__(self, default_length: int = 6):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
        """
        if default_length < 1:
            raise ValueError("default_length must be positive")
        self.default_length = default_length

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Each character is drawn independently and uniformly from ALPHABET, so
        two draws of length n collide with probability 36**-n.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return "".join(secrets.choice(self.ALPHABET) for _ in range(length))

    @classmethod
    def is_valid_format(cls, code: str) -> bool:
        """Check that every character of ``code`` comes from ALPHABET."""
        return bool(code) and all(c in cls.ALPHABET for c in code)
