"""
Language model facade.

Builds a model from a corpus in one pass (count, optionally dump, estimate)
and exposes the sampler for repeated completion requests. The model is not
modified after construction; only its random source advances.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence

from .config import LMConfig
from .counting import NgramCounts, extract_counts
from .datasets import format_completion, load_corpus, write_counts, write_vocabulary
from .estimation import estimate_probabilities
from .sampling import RandomSource, Sampler, make_rng
from .tokenization import join_ngram

logger = logging.getLogger(__name__)


class LanguageModel:
    """
    Maximum-likelihood n-gram language model.

    Usage:
        lm = LanguageModel.from_file("corpus.txt", max_order=3, seed=7)
        print(lm.random_completion(["<s>", "the"]))
    """

    def __init__(
        self,
        counts: NgramCounts,
        config: Optional[LMConfig] = None,
        rng: Optional[RandomSource] = None,
    ):
        if config is not None and config.max_order != counts.max_order:
            raise ValueError(
                f"config max_order={config.max_order} does not match "
                f"counts max_order={counts.max_order}"
            )
        self.config = config or LMConfig(max_order=counts.max_order)
        self._counts = counts
        self._probabilities = estimate_probabilities(counts.ngram_counts, counts.history_counts)
        self._sampler = Sampler(
            self._probabilities,
            counts.vocabulary,
            rng=rng if rng is not None else make_rng(self.config.seed),
            fail_token=self.config.fail_token,
            end_token=self.config.end_token,
        )
        logger.info(
            f"Built order-{counts.max_order} model: {len(counts.vocabulary)} words, "
            f"{len(self._probabilities)} n-grams"
        )

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        max_order: Optional[int] = None,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
        config: Optional[LMConfig] = None,
    ) -> "LanguageModel":
        """
        Count, dump and estimate a model from corpus lines.

        Explicit ``max_order`` and ``seed`` arguments override the config.
        The vocabulary and count dumps are written when the config names
        their paths.
        """
        cfg = config or LMConfig()
        overrides = {}
        if max_order is not None:
            overrides["max_order"] = max_order
        if seed is not None:
            overrides["seed"] = seed
        if overrides:
            cfg = LMConfig.from_dict({**cfg.to_dict(), **overrides})

        counts = extract_counts(lines, cfg.max_order)

        if cfg.vocab_path:
            write_vocabulary(counts.vocabulary, cfg.vocab_path)
        if cfg.counts_path:
            write_counts(counts.ngram_counts, cfg.counts_path)

        return cls(counts, config=cfg, rng=rng)

    @classmethod
    def from_file(cls, path: str | Path, **kwargs) -> "LanguageModel":
        return cls.from_lines(load_corpus(path), **kwargs)

    @property
    def max_order(self) -> int:
        return self._counts.max_order

    @property
    def vocabulary(self) -> tuple:
        return self._sampler.vocabulary

    @property
    def probabilities(self) -> Mapping[str, float]:
        return self._probabilities

    @property
    def counts(self) -> NgramCounts:
        return self._counts

    def probability(self, history: Sequence[str], word: str) -> float:
        """P(word | history) under the full history given, 0.0 if unseen."""
        return self._probabilities.get(join_ngram([*history, word]), 0.0)

    def _order(self, order: Optional[int]) -> int:
        return order if order is not None else self.config.sampling_order

    def draw_next(self, history: Sequence[str], order: Optional[int] = None) -> str:
        return self._sampler.draw_next(history, self._order(order))

    def complete_sentence(
        self,
        history: Sequence[str],
        order: Optional[int] = None,
        max_length: Optional[int] = None,
    ) -> List[str]:
        if max_length is None:
            max_length = self.config.max_length
        return self._sampler.complete_sentence(history, self._order(order), max_length)

    def random_completion(self, history: Sequence[str], order: Optional[int] = None) -> str:
        """One completion rendered as an output line (without the newline)."""
        return format_completion(self.complete_sentence(history, order))
