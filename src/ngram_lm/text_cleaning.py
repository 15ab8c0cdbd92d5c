from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

import regex  # type: ignore

from .config import END_TOKEN, START_TOKEN


_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class CleanTextConfig:
    lowercase: bool = False
    strip_accents: bool = False
    start_token: str = START_TOKEN
    end_token: str = END_TOKEN


def clean_text(text: str, config: CleanTextConfig | None = None) -> str:
    """Normalize one raw sentence into space-separated tokens.

    Whitespace runs (tabs, newlines, non-breaking spaces) collapse to a
    single space so the result splits cleanly on " ".
    """

    cfg = config or CleanTextConfig()
    s = text

    if cfg.lowercase:
        s = s.lower()

    if cfg.strip_accents:
        # Decompose, then drop combining marks
        s = regex.sub(r"\p{Mn}+", "", unicodedata.normalize("NFKD", s))

    # Control characters would otherwise end up inside tokens.
    s = regex.sub(r"\p{Cc}", " ", s)

    return _WHITESPACE_RE.sub(" ", s).strip()


def prepare_sentence(text: str, config: CleanTextConfig | None = None) -> str:
    """Clean a raw sentence and wrap it in sentence markers.

    Returns an empty string when nothing is left after cleaning.
    """

    cfg = config or CleanTextConfig()
    cleaned = clean_text(text, cfg)
    if not cleaned:
        return ""
    return f"{cfg.start_token} {cleaned} {cfg.end_token}"
