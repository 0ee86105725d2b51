"""
Short identifier generation for new links.
Uses Strategy Pattern so tests and future algorithms can plug in.
"""

import secrets
import string
from abc import ABC, abstractmethod
from typing import Callable

from linktrackr.config import settings
from linktrackr.exceptions import IdentifierAllocationError

# URL-safe alphabet: 64 characters
SHORT_ID_ALPHABET = string.ascii_letters + string.digits + "_-"


class ShortIdStrategy(ABC):
    """Abstract base class for short identifier strategies"""

    @abstractmethod
    def generate(self, is_taken: Callable[[str], bool]) -> str:
        """
        Generate a short identifier that is not yet in use.

        Args:
            is_taken: Callback telling whether an identifier already exists

        Returns:
            A free short identifier

        Raises:
            IdentifierAllocationError: If no free identifier was found
        """
        pass


class RandomShortIdStrategy(ShortIdStrategy):
    """
    Draws random identifiers and checks the store for collisions.

    One initial draw plus up to ``max_retries`` redraws. Running out of
    attempts fails the request instead of risking a duplicate key.
    """

    def __init__(self, length: int = 7, max_retries: int = 5, alphabet: str = SHORT_ID_ALPHABET):
        self.length = length
        self.max_retries = max_retries
        self.alphabet = alphabet

    def generate(self, is_taken: Callable[[str], bool]) -> str:
        for attempt in range(self.max_retries + 1):
            short_id = self._draw()
            if not is_taken(short_id):
                return short_id

        raise IdentifierAllocationError()

    def _draw(self) -> str:
        return ''.join(secrets.choice(self.alphabet) for _ in range(self.length))


def default_short_id_strategy() -> ShortIdStrategy:
    return RandomShortIdStrategy(
        length=settings.short_id_length,
        max_retries=settings.short_id_max_retries,
    )
