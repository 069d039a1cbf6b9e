"""
Tests for short code generation strategies.
"""
import random

import pytest

from redirector_app.exceptions import ExhaustedError
from redirector_app.services.short_code_strategies import SpeakableShortCodeStrategy


class Everything:
    """Pretends every code is taken"""

    def __contains__(self, code):
        return True


class ShorterThan:
    """Pretends every code shorter than `length` is taken"""

    def __init__(self, length):
        self.length = length

    def __contains__(self, code):
        return len(code) < self.length


class TestSpeakableStrategy:
    """Test the digit + letters strategy"""

    def test_code_shape(self):
        """One unambiguous digit, then unambiguous lowercase letters"""
        strategy = SpeakableShortCodeStrategy(rng=random.Random(1))

        for _ in range(200):
            code = strategy.generate(set())
            assert len(code) == 5
            assert code[0] in "23456789"
            assert all(c in "abcdefghijkmnpqrstuvwxyz" for c in code[1:])
            assert not set(code) & set("01ol")

    def test_same_seed_same_code(self):
        code1 = SpeakableShortCodeStrategy(rng=random.Random(99)).generate({})
        code2 = SpeakableShortCodeStrategy(rng=random.Random(99)).generate({})
        assert code1 == code2

    def test_extends_past_taken_prefixes(self):
        """If the short candidates are taken, the same draw grows longer"""
        strategy = SpeakableShortCodeStrategy(rng=random.Random(7))

        code = strategy.generate(ShorterThan(8))

        assert len(code) == 8

    def test_first_unused_length_wins(self):
        strategy = SpeakableShortCodeStrategy(rng=random.Random(7))
        assert len(strategy.generate(ShorterThan(6))) == 6

    def test_exhausted_raises(self):
        """Bounded retries instead of looping forever"""
        strategy = SpeakableShortCodeStrategy(max_attempts=3, rng=random.Random(7))

        with pytest.raises(ExhaustedError, match="3 attempts"):
            strategy.generate(Everything())

    def test_uniqueness_while_growing(self):
        """Thousands of sequential codes never collide with the growing set"""
        strategy = SpeakableShortCodeStrategy(rng=random.Random(2024))
        mappings = {}

        for i in range(3000):
            code = strategy.generate(mappings)
            assert code not in mappings
            mappings[code] = f"https://example.com/{i}"

        assert len(mappings) == 3000

    def test_custom_lengths(self):
        strategy = SpeakableShortCodeStrategy(min_length=3, max_length=4, rng=random.Random(5))
        assert len(strategy.generate(set())) == 3

    @pytest.mark.parametrize("min_length,max_length", [(1, 8), (6, 5)])
    def test_invalid_lengths(self, min_length, max_length):
        with pytest.raises(ValueError):
            SpeakableShortCodeStrategy(min_length=min_length, max_length=max_length)
