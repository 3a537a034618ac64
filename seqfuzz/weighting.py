"""
seqfuzz.weighting — the length-ratio decision table behind ``WRatio``.

``WRatio`` trusts whole-string scorers when both strings have similar
lengths and falls back to scaled-down partial scorers as the length gap
grows. Each row of the table names an upper bound on
``len(longer) / len(shorter)`` and the scale applied to partial scores in
that bucket.
"""

from __future__ import annotations

import dataclasses
import math


@dataclasses.dataclass(frozen=True)
class LengthBucket:
    """
    One row of the decision table.

    Parameters
    ----------
    upper : float
        Upper bound on the length ratio for this bucket.
    partial_scale : float | None
        Scale applied to partial scorers, or ``None`` to use the full-string
        scorers unscaled.
    inclusive : bool
        Whether a length ratio equal to *upper* still falls in this bucket.
    """

    upper: float
    partial_scale: float | None
    inclusive: bool = False

    def contains(self, length_ratio: float) -> bool:
        if self.inclusive:
            return length_ratio <= self.upper
        return length_ratio < self.upper


DEFAULT_BUCKETS: tuple[LengthBucket, ...] = (
    LengthBucket(upper=1.5, partial_scale=None),
    LengthBucket(upper=8.0, partial_scale=0.9, inclusive=True),
    LengthBucket(upper=math.inf, partial_scale=0.6, inclusive=True),
)

# Token-based scores never beat an equally good character-level score.
DEFAULT_TOKEN_SCALE = 0.95


@dataclasses.dataclass(frozen=True)
class WRatioConfig:
    """
    Configuration for :func:`seqfuzz.fuzz.WRatio`.

    The defaults reproduce the reference weighting exactly; change them only
    when score parity with other fuzzy matching libraries does not matter.

    Parameters
    ----------
    buckets : tuple[LengthBucket, ...]
        Rows ordered by ascending ``upper``; the last row must be unbounded.
    token_scale : float
        Extra scale applied to the token-sort and token-set scorers.

    Examples
    --------
    >>> cfg = WRatioConfig(token_scale=0.9)
    >>> WRatio("new york mets", "mets new york", config=cfg)
    90
    """

    buckets: tuple[LengthBucket, ...] = DEFAULT_BUCKETS
    token_scale: float = DEFAULT_TOKEN_SCALE

    def __post_init__(self) -> None:
        if not self.buckets:
            raise ValueError("WRatioConfig needs at least one length bucket")
        uppers = [bucket.upper for bucket in self.buckets]
        if uppers != sorted(uppers) or uppers[0] <= 0:
            raise ValueError(
                f"Length bucket bounds must be positive and ascending, got {uppers}"
            )
        if not math.isinf(uppers[-1]):
            raise ValueError(
                f"The last length bucket must be unbounded, got upper={uppers[-1]}"
            )

    def bucket_for(self, length_ratio: float) -> LengthBucket:
        """Return the first bucket that contains *length_ratio*."""
        for bucket in self.buckets:
            if bucket.contains(length_ratio):
                return bucket
        return self.buckets[-1]


DEFAULT_CONFIG = WRatioConfig()


def length_ratio(len1: int, len2: int) -> float:
    """``len(longer) / len(shorter)``; both lengths must be non-zero."""
    return max(len1, len2) / min(len1, len2)


__all__ = [
    "DEFAULT_BUCKETS",
    "DEFAULT_CONFIG",
    "DEFAULT_TOKEN_SCALE",
    "LengthBucket",
    "WRatioConfig",
    "length_ratio",
]
