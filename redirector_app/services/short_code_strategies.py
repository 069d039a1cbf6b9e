"""
Short code generation strategies for the redirector.
Uses Strategy Pattern so the mapping service does not care how codes are made.
"""

import logging
import random
from abc import ABC, abstractmethod
from typing import Container, Optional

from redirector_app.exceptions import ExhaustedError

logger = logging.getLogger(__name__)


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""

    @abstractmethod
    def generate(self, existing: Container[str]) -> str:
        """
        Generate a short code.

        Args:
            existing: Codes already in use (usually the domain's mapping set)

        Returns:
            A code not contained in `existing`
        """
        pass


class SpeakableShortCodeStrategy(ShortCodeStrategy):
    """
    Random codes that are easy to read out loud.

    A code is one digit followed by lowercase letters, e.g. "7kqzd".
    0/1 and o/l are left out because they are easily confused. Leading
    with a digit usually keeps random codes apart from hand-picked ones.

    Each draw extends one candidate a letter at a time and returns the
    first length (min_length..max_length) that is unused. A draw where
    every length is taken is thrown away and retried, up to max_attempts.

    Capacity at length 5: 8 * 24^4 = 2,654,208 codes, so retries are
    rare for a personal database.
    """

    DIGITS = "23456789"
    LETTERS = "abcdefghijkmnpqrstuvwxyz"

    def __init__(
        self,
        min_length: int = 5,
        max_length: int = 8,
        max_attempts: int = 100,
        rng: Optional[random.Random] = None
    ):
        if min_length < 2:
            raise ValueError("min_length must be at least 2")
        if max_length < min_length:
            raise ValueError(
                f"max_length ({max_length}) must be >= min_length ({min_length})"
            )
        self.min_length = min_length
        self.max_length = max_length
        self.max_attempts = max_attempts
        self.rng = rng or random.Random()

    def generate(self, existing: Container[str]) -> str:
        """Generate an unused code, retrying whole draws on collision"""
        for attempt in range(1, self.max_attempts + 1):
            code = self._draw(existing)
            if code is not None:
                if attempt > 1:
                    logger.debug("Generated code %s after %d draws", code, attempt)
                return code

        raise ExhaustedError(
            f"Could not generate unique short code after {self.max_attempts} attempts"
        )

    def _draw(self, existing: Container[str]) -> Optional[str]:
        """One random draw: first unused prefix of length >= min_length, or None"""
        chars = [self.rng.choice(self.DIGITS)]
        while len(chars) < self.max_length:
            chars.append(self.rng.choice(self.LETTERS))
            if len(chars) >= self.min_length:
                candidate = "".join(chars)
                if candidate not in existing:
                    return candidate
        return None
