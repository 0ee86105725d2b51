"""
Tests for short identifier generation.
"""
import pytest

from linktrackr.exceptions import IdentifierAllocationError
from linktrackr.services.short_id import (
    RandomShortIdStrategy,
    SHORT_ID_ALPHABET,
    default_short_id_strategy,
)


class TestRandomShortIdStrategy:
    """Test random generation with collision checking"""

    def test_generates_correct_length(self):
        strategy = RandomShortIdStrategy(length=7)

        short_id = strategy.generate(lambda candidate: False)

        assert len(short_id) == 7
        assert all(char in SHORT_ID_ALPHABET for char in short_id)

    def test_alphabet_is_url_safe(self):
        assert len(SHORT_ID_ALPHABET) == 64
        assert set(SHORT_ID_ALPHABET) - set("_-") <= set(
            "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
        )

    def test_redraws_on_collision(self):
        """Taken identifiers are skipped until a free one comes up"""
        answers = iter([True, True, False])
        checked = []

        def is_taken(candidate):
            checked.append(candidate)
            return next(answers)

        short_id = RandomShortIdStrategy().generate(is_taken)

        assert len(checked) == 3
        assert short_id == checked[-1]

    def test_gives_up_after_max_retries(self):
        """One draw plus max_retries redraws, then the request fails"""
        checked = []

        def is_taken(candidate):
            checked.append(candidate)
            return True

        with pytest.raises(IdentifierAllocationError):
            RandomShortIdStrategy(max_retries=5).generate(is_taken)

        assert len(checked) == 6

    def test_ids_vary(self):
        strategy = RandomShortIdStrategy()
        ids = {strategy.generate(lambda candidate: False) for _ in range(50)}
        assert len(ids) > 1

    def test_default_from_settings(self):
        strategy = default_short_id_strategy()
        assert strategy.length == 7
        assert strategy.max_retries == 5
