from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping

from .tokenization import history_of

logger = logging.getLogger(__name__)


def estimate_probabilities(
    ngram_counts: Mapping[str, int],
    history_counts: Mapping[str, int],
) -> Mapping[str, float]:
    """Maximum-likelihood estimates of P(w | h) for every counted n-gram.

    ``P(w | h) = count(h w) / count(h)``. Only strictly positive
    probabilities are kept; a missing key means probability 0.

    Every history of an n-gram must be present in ``history_counts`` with a
    positive count. ``extract_counts`` guarantees this, so a violation is
    reported as a ``KeyError``.
    """

    probabilities: dict[str, float] = {}

    for ngram, count in ngram_counts.items():
        history = history_of(ngram)
        history_count = history_counts.get(history, 0)
        if history_count <= 0:
            raise KeyError(f"n-gram {ngram!r} has no count for its history {history!r}")

        probability = float(count) / float(history_count)
        if probability > 0:
            probabilities[ngram] = probability

    logger.debug(f"Estimated {len(probabilities)} conditional probabilities")
    return MappingProxyType(probabilities)
