"""Tests for short code generation."""

import pytest
from shortlink.shortcode import ShortCodeGenerator


class TestShortCodeGenerator:
    """Test short code generation."""

    def test_generate_random(self):
        generator = ShortCodeGenerator(default_length=6)

        code = generator.generate_random()
        assert len(code) == 6
        assert generator.is_valid_format(code)

    def test_generate_random_custom_length(self):
        generator = ShortCodeGenerator(default_length=6)

        code = generator.generate_random(length=8)
        assert len(code) == 8
        assert generator.is_valid_format(code)

    def test_alphabet_is_base36(self):
        assert len(ShortCodeGenerator.ALPHABET) == 36
        assert set(ShortCodeGenerator.ALPHABET) == set("abcdefghijklmnopqrstuvwxyz0123456789")

    def test_draws_cover_alphabet(self):
        generator = ShortCodeGenerator(default_length=6)
        seen = set()
        for _ in range(500):
            seen.update(generator.generate_random())
        # 3000 uniform draws over 36 symbols miss one with negligible probability
        assert seen == set(ShortCodeGenerator.ALPHABET)

    def test_is_valid_format(self):
        assert ShortCodeGenerator.is_valid_format("abc123")

        assert not ShortCodeGenerator.is_valid_format("")
        assert not ShortCodeGenerator.is_valid_format("ABC123")
        assert not ShortCodeGenerator.is_valid_format("abc 12")
        assert not ShortCodeGenerator.is_valid_format("abc-12")

    def test_rejects_non_positive_length(self):
        with pytest.raises(ValueError):
            ShortCodeGenerator(default_length=0)
