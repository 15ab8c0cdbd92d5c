"""
N-gram counting.

Turns corpus lines into two count tables and a vocabulary:

- ``ngram_counts``: windows of two or more tokens (history + next word)
- ``history_counts``: every window, including single tokens
- ``vocabulary``: distinct tokens in first-occurrence order

Windows never cross a line boundary and never exceed ``max_order`` tokens.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List

from .tokenization import join_ngram, split_line, windows

logger = logging.getLogger(__name__)


@dataclass
class NgramCounts:
    """
    Counts extracted from a corpus.

    Attributes:
        ngram_counts: Occurrences of each n-gram of length >= 2
        history_counts: Occurrences of each window of length >= 1
        vocabulary: Distinct tokens, in the order they first appear
        max_order: Longest window that was counted
    """

    ngram_counts: Counter = field(default_factory=Counter)
    history_counts: Counter = field(default_factory=Counter)
    vocabulary: List[str] = field(default_factory=list)
    max_order: int = 1

    def __len__(self) -> int:
        return len(self.ngram_counts)


def extract_counts(lines: Iterable[str], max_order: int) -> NgramCounts:
    """
    Count every n-gram up to ``max_order`` in ``lines``.

    Each line is split on single spaces. Lines with fewer than two tokens
    contribute nothing, including to the vocabulary.

    Args:
        lines: Corpus lines, one sentence per line, markers already present
        max_order: Longest window to count

    Returns:
        NgramCounts with both tables and the vocabulary
    """
    if max_order < 1:
        raise ValueError(f"max_order must be >= 1, got {max_order}")

    counts = NgramCounts(max_order=max_order)
    seen = set()
    n_lines = 0

    for line in lines:
        n_lines += 1
        for window in windows(split_line(line), max_order):
            key = join_ngram(window)
            counts.history_counts[key] += 1

            if len(window) > 1:
                counts.ngram_counts[key] += 1
            elif key not in seen:
                seen.add(key)
                counts.vocabulary.append(key)

    logger.debug(
        f"Counted {len(counts.ngram_counts)} n-grams, "
        f"{len(counts.history_counts)} histories and "
        f"{len(counts.vocabulary)} word types from {n_lines} lines"
    )
    return counts
