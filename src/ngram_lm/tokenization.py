from __future__ import annotations

from typing import Iterable, Iterator, Sequence


def split_line(line: str) -> list[str]:
    """Split a corpus line on single spaces.

    The line terminator is removed and trailing empty tokens are dropped, so
    ``"a b \\n"`` and ``"a b"`` yield the same tokens.
    """

    tokens = line.rstrip("\r\n").split(" ")
    while tokens and tokens[-1] == "":
        tokens.pop()
    return tokens


def join_ngram(tokens: Iterable[str]) -> str:
    """Canonical n-gram string: tokens joined by single spaces."""
    return " ".join(tokens)


def split_ngram(ngram: str) -> list[str]:
    """Inverse of join_ngram."""
    return ngram.split(" ")


def history_of(ngram: str) -> str:
    """All tokens of an n-gram but the last, as an n-gram string."""

    head, _, _ = ngram.rpartition(" ")
    return head


def windows(tokens: Sequence[str], max_order: int) -> Iterator[tuple[str, ...]]:
    """Yield every window of 1..max_order consecutive tokens.

    Windows are produced by start position, shortest first, and never run
    past the end of ``tokens``. Sequences shorter than two tokens yield
    nothing.
    """

    if max_order <= 0:
        raise ValueError("max_order must be >= 1")
    n = len(tokens)
    if n < 2:
        return
    for start in range(n):
        for end in range(start + 1, min(start + max_order, n) + 1):
            yield tuple(tokens[start:end])
