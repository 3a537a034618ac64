"""
seqfuzz — fuzzy string matching on longest matching blocks, in pure Python.
"""

from __future__ import annotations

from . import compat, fuzz, matcher, process, utils, weighting
from .fuzz import ScoreAlignment
from .matcher import MatchingBlock, SequenceMatcher
from .weighting import LengthBucket, WRatioConfig

__version__: str = "0.1.0"

__all__ = [
    "compat",
    "fuzz",
    "matcher",
    "process",
    "utils",
    "weighting",
    "LengthBucket",
    "MatchingBlock",
    "ScoreAlignment",
    "SequenceMatcher",
    "WRatioConfig",
    "__version__",
]
