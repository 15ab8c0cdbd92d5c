"""Maximum-likelihood n-gram language model with random sentence completion.

Counting, estimation and sampling are usable on their own; `LanguageModel`
ties them together.
"""

from .config import LMConfig
from .counting import NgramCounts, extract_counts
from .estimation import estimate_probabilities
from .model import LanguageModel
from .sampling import Sampler

__all__ = [
    "LMConfig",
    "LanguageModel",
    "NgramCounts",
    "Sampler",
    "estimate_probabilities",
    "extract_counts",
]
