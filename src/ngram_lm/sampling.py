"""
Random word generation from a probability table.

Words are drawn by inverse-CDF sampling over the vocabulary in its fixed
first-occurrence order. A history with no observed continuation yields the
failure token instead of raising.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Protocol, Sequence

import numpy as np

from .config import END_TOKEN, FAIL_TOKEN
from .tokenization import join_ngram

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def random(self) -> float: ...


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(seed)


class Sampler:
    """
    Draws next words given a history.

    The random source is anything with a ``random()`` method returning a
    float in [0, 1): a ``numpy.random.Generator`` (the default) or
    ``random.Random`` both work.

    Usage:
        sampler = Sampler(probabilities, vocabulary, rng=make_rng(42))
        word = sampler.draw_next(["<s>", "the"], order=3)
        words = sampler.complete_sentence(["<s>"], order=3)
    """

    def __init__(
        self,
        probabilities: Mapping[str, float],
        vocabulary: Sequence[str],
        rng: Optional[RandomSource] = None,
        fail_token: str = FAIL_TOKEN,
        end_token: str = END_TOKEN,
    ):
        self.probabilities = probabilities
        self.vocabulary = tuple(vocabulary)
        self.rng = rng if rng is not None else make_rng()
        self.fail_token = fail_token
        self.end_token = end_token

    def history_key(self, history: Sequence[str], order: int) -> str:
        """Join the last ``order - 1`` tokens of ``history`` into a lookup key."""
        if order < 1:
            raise ValueError(f"order must be >= 1, got {order}")
        if len(history) >= order:
            history = history[len(history) - order + 1:]
        return join_ngram(history)

    def draw_next(self, history: Sequence[str], order: int) -> str:
        """
        Draw one word following ``history`` under an order-``order`` model.

        The last vocabulary word is never visited inside the loop; it takes
        whatever mass is left once every other word's probability has been
        added without passing the draw.

        Returns:
            The drawn word, or the failure token when no word follows the
            history
        """
        key = self.history_key(history, order)
        r = self.rng.random()
        cumulative = 0.0

        for word in self.vocabulary[:-1]:
            cumulative += self.probabilities.get(f"{key} {word}", 0.0)
            if cumulative > r:
                return word

        if cumulative == 0:
            logger.debug(f"No continuation for history {key!r}")
            return self.fail_token

        return self.vocabulary[-1]

    def complete_sentence(
        self,
        history: Sequence[str],
        order: int,
        max_length: Optional[int] = None,
    ) -> List[str]:
        """
        Generate words after ``history`` until a sentence end or a failure.

        The terminal token is the last element of the result. ``history`` is
        copied, never modified. Without ``max_length`` the loop only stops on
        a terminal token.

        Args:
            history: Tokens to condition on
            order: N-gram order used for every draw
            max_length: Optional cap on the number of generated tokens

        Returns:
            The generated tokens
        """
        context = list(history)
        generated: List[str] = []

        while max_length is None or len(generated) < max_length:
            word = self.draw_next(context, order)
            generated.append(word)
            context.append(word)
            if word == self.end_token or word == self.fail_token:
                break
        else:
            logger.info(f"Completion stopped at max_length={max_length}")

        return generated
