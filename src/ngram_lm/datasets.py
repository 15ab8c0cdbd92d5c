from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Mapping, Sequence

import pandas as pd

from .counting import NgramCounts
from .text_cleaning import CleanTextConfig, prepare_sentence
from .tokenization import split_ngram

logger = logging.getLogger(__name__)


def load_corpus(path: str | Path, encoding: str = "utf-8") -> list[str]:
    """Read a corpus file, one sentence per line, without line terminators."""

    try:
        with open(path, "r", encoding=encoding) as f:
            lines = f.read().splitlines()
    except FileNotFoundError:
        logger.error(f"Unable to open corpus file: {path}")
        raise
    logger.info(f"Loaded {len(lines)} lines from {path}")
    return lines


def prepare_corpus(lines: Iterable[str], config: CleanTextConfig | None = None) -> list[str]:
    """Clean raw sentences and add sentence markers, dropping empty ones."""

    prepared = [prepare_sentence(line, config) for line in lines]
    return [line for line in prepared if line]


def write_vocabulary(vocabulary: Sequence[str], path: str | Path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        for word in vocabulary:
            f.write(f"{word}\n")
    logger.info(f"Wrote {len(vocabulary)} vocabulary entries to {path}")


def write_counts(ngram_counts: Mapping[str, int], path: str | Path) -> None:
    """Write one ``ngram<TAB>count`` line per n-gram."""

    with open(path, "w", encoding="utf-8") as f:
        for ngram, count in ngram_counts.items():
            f.write(f"{ngram}\t{count}\n")
    logger.info(f"Wrote {len(ngram_counts)} n-gram counts to {path}")


def count_summary(counts: NgramCounts) -> pd.DataFrame:
    """Distinct n-grams and total occurrences per order.

    Order 1 comes from the history table (single tokens), higher orders from
    the n-gram table.
    """

    rows = [(1, ngram, count) for ngram, count in counts.history_counts.items() if " " not in ngram]
    rows += [(len(split_ngram(ngram)), ngram, count) for ngram, count in counts.ngram_counts.items()]
    df = pd.DataFrame(rows, columns=["order", "ngram", "count"])

    summary = df.groupby("order")["count"].agg(types="size", tokens="sum")
    summary = summary.reindex(range(1, counts.max_order + 1), fill_value=0)
    return summary.rename_axis("order").astype(int)


def format_completion(tokens: Iterable[str]) -> str:
    """Render generated tokens as printed output: a space before each token."""

    return "".join(f" {token}" for token in tokens)
