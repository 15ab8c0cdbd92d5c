"""
Configuration for the n-gram language model.

Holds the model order, the sentinel tokens the corpus is expected to carry,
the random seed and the optional dump paths. A config can be built in code,
from a plain dictionary, or from a JSON file passed on the command line.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

START_TOKEN = "<s>"
END_TOKEN = "</s>"
FAIL_TOKEN = "<fail>"


@dataclass(frozen=True)
class LMConfig:
    """
    Settings for building and sampling from a language model.

    Attributes:
        max_order: Longest n-gram counted from the corpus
        order: Order used when drawing words (defaults to max_order)
        seed: Seed for the random source, None for fresh entropy
        start_token: Sentence-start marker
        end_token: Sentence-end marker, terminates a completion
        fail_token: Returned when a history has no observed continuation
        vocab_path: Where to write the vocabulary, if anywhere
        counts_path: Where to write the n-gram counts, if anywhere
        max_length: Optional cap on the number of generated tokens
        lowercase: Lowercase raw text before adding sentence markers
    """

    max_order: int = 3
    order: Optional[int] = None
    seed: Optional[int] = None

    start_token: str = START_TOKEN
    end_token: str = END_TOKEN
    fail_token: str = FAIL_TOKEN

    vocab_path: Optional[str] = None
    counts_path: Optional[str] = None

    max_length: Optional[int] = None
    lowercase: bool = False

    def __post_init__(self):
        if self.max_order < 1:
            raise ValueError(f"max_order must be >= 1, got {self.max_order}")
        if self.order is not None and self.order < 1:
            raise ValueError(f"order must be >= 1, got {self.order}")
        if self.max_length is not None and self.max_length < 1:
            raise ValueError(f"max_length must be >= 1, got {self.max_length}")
        for name in ("start_token", "end_token", "fail_token"):
            token = getattr(self, name)
            if not token or " " in token:
                raise ValueError(f"{name} must be a non-empty token without spaces: {token!r}")

    @property
    def sampling_order(self) -> int:
        return self.order if self.order is not None else self.max_order

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "LMConfig":
        """Create an LMConfig from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_dict) - known)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")
        return cls(**{k: v for k, v in config_dict.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(path: str | Path) -> LMConfig:
    """Read an LMConfig from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        config_dict = json.load(f)
    if not isinstance(config_dict, dict):
        raise ValueError(f"Config file must contain a JSON object: {path}")
    logger.debug(f"Loaded config from {path}")
    return LMConfig.from_dict(config_dict)
