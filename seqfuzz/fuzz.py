"""
seqfuzz.fuzz — fuzzy string similarity scorers.

Every scorer returns an ``int`` between 0 and 100 and accepts optional
keyword-only ``processor`` and ``score_cutoff`` arguments. Scores below
``score_cutoff`` are reported as 0.

Shared conventions:

* ``None`` on either side scores 0.
* Equal strings score 100, so two empty strings are identical.
* One empty string against a non-empty one scores 0.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import NamedTuple

from . import utils
from .matcher import SequenceMatcher, find_matching_blocks
from .weighting import DEFAULT_CONFIG, WRatioConfig, length_ratio

_Processor = Callable[[str], str]


class ScoreAlignment(NamedTuple):
    """Where the best ``partial_ratio`` window lies in each string."""

    score: int
    src_start: int
    src_end: int
    dest_start: int
    dest_end: int


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _trivial(s1: str, s2: str) -> int | None:
    if s1 == s2:
        return 100
    if not s1 or not s2:
        return 0
    return None


def _cutoff(score: int, score_cutoff: float | None) -> int:
    return score if score_cutoff is None or score >= score_cutoff else 0


def _preprocess(
    s1: str, s2: str, processor: _Processor | None
) -> tuple[str, str]:
    if processor is not None:
        return processor(s1), processor(s2)
    return s1, s2


def _directional_ratio(s1: str, s2: str) -> int:
    # 100 * 2M / T rounded half up, kept in integers.
    total = len(s1) + len(s2)
    if not total:
        return 100
    matched = SequenceMatcher(s1, s2).matched_length
    return (400 * matched + total) // (2 * total)


def _ratio(s1: str, s2: str) -> int:
    if (len(s1), s1) > (len(s2), s2):
        s1, s2 = s2, s1
    return _directional_ratio(s1, s2)


def _window_starts(
    i: int, j: int, len_shorter: int, len_longer: int
) -> tuple[int, ...]:
    """Window offsets into the longer string that keep block ``(i, j)`` aligned."""
    start = max(0, j - i)
    complementary = max(0, j - i + len_shorter - len_longer)
    if complementary == start:
        return (start,)
    return (start, complementary)


def _partial_alignment(s1: str, s2: str) -> ScoreAlignment:
    trivial = _trivial(s1, s2)
    if trivial is not None:
        return ScoreAlignment(trivial, 0, len(s1), 0, len(s2))

    swapped = len(s1) > len(s2)
    shorter, longer = (s2, s1) if swapped else (s1, s2)

    # A substring must always find its block, so nothing is autojunked here.
    blocks = find_matching_blocks(shorter, longer, autojunk=False)

    best_score, best_start, best_end = -1, 0, 0
    for i, j, _ in blocks:
        for start in _window_starts(i, j, len(shorter), len(longer)):
            end = min(start + len(shorter), len(longer))
            score = _directional_ratio(shorter, longer[start:end])
            if score > best_score:
                best_score, best_start, best_end = score, start, end
        if best_score > 99:
            break

    if swapped:
        return ScoreAlignment(best_score, best_start, best_end, 0, len(s2))
    return ScoreAlignment(best_score, 0, len(s1), best_start, best_end)


def _partial_ratio(s1: str, s2: str) -> int:
    return _partial_alignment(s1, s2).score


def _process_and_sort(s: str, force_ascii: bool, full_process: bool) -> str:
    if full_process:
        s = utils.full_process(s, force_ascii)
    return utils.sorted_tokens(utils.tokenize(s))


def _token_set(
    s1: str, s2: str, partial: bool, force_ascii: bool, full_process: bool
) -> int:
    trivial = _trivial(s1, s2)
    if trivial is not None:
        return trivial

    if full_process:
        s1 = utils.full_process(s1, force_ascii)
        s2 = utils.full_process(s2, force_ascii)
    tokens1 = utils.token_set(s1)
    tokens2 = utils.token_set(s2)
    if not tokens1 or not tokens2:
        return 0

    intersection = utils.sorted_tokens(tokens1 & tokens2)
    diff1to2 = utils.sorted_tokens(tokens1 - tokens2)
    diff2to1 = utils.sorted_tokens(tokens2 - tokens1)
    combined1to2 = " ".join(part for part in (intersection, diff1to2) if part)
    combined2to1 = " ".join(part for part in (intersection, diff2to1) if part)

    score = _partial_ratio if partial else _ratio
    return max(
        score(intersection, combined1to2),
        score(intersection, combined2to1),
        score(combined1to2, combined2to1),
    )


def ratio(
    s1: str,
    s2: str,
    *,
    processor: _Processor | None = None,
    score_cutoff: float | None = None,
) -> int:
    """
    Normalized block-matching similarity.

    ``round(100 * 2 * M / T)`` where ``M`` is the number of matched
    characters and ``T`` the combined length. Symmetric in its arguments.

    Examples
    --------
    >>> ratio("this is a test", "this is a test!")
    97
    """
    if s1 is None or s2 is None:
        return 0
    s1, s2 = _preprocess(s1, s2, processor)
    return _cutoff(_ratio(s1, s2), score_cutoff)


def partial_ratio(
    s1: str,
    s2: str,
    *,
    processor: _Processor | None = None,
    score_cutoff: float | None = None,
) -> int:
    """
    Best ``ratio`` of the shorter string against an equally long window of
    the longer one.

    Windows are anchored on the matching blocks: one starts at the block's
    offset and, when it differs, one is shifted left by the length gap. The
    alignment is a heuristic rather than an exhaustive search and, for
    strings of equal length, depends on argument order.

    Examples
    --------
    >>> partial_ratio("this is a test", "this is a test!")
    100
    >>> partial_ratio("ad", "abcd")
    50
    """
    if s1 is None or s2 is None:
        return 0
    s1, s2 = _preprocess(s1, s2, processor)
    return _cutoff(_partial_ratio(s1, s2), score_cutoff)


def partial_ratio_alignment(
    s1: str,
    s2: str,
    *,
    processor: _Processor | None = None,
    score_cutoff: float | None = None,
) -> ScoreAlignment | None:
    """
    Like :func:`partial_ratio` but also report the window that scored best.

    ``src_*`` indexes into *s1*, ``dest_*`` into *s2*. Returns ``None`` when
    an input is ``None`` or the score falls below *score_cutoff*.
    """
    if s1 is None or s2 is None:
        return None
    s1, s2 = _preprocess(s1, s2, processor)
    alignment = _partial_alignment(s1, s2)
    if score_cutoff is not None and alignment.score < score_cutoff:
        return None
    return alignment


def token_sort_ratio(
    s1: str,
    s2: str,
    force_ascii: bool = True,
    full_process: bool = True,
    *,
    processor: _Processor | None = None,
    score_cutoff: float | None = None,
) -> int:
    """
    ``ratio`` of the two strings after sorting their words.

    Examples
    --------
    >>> token_sort_ratio("fuzzy wuzzy was a bear", "wuzzy fuzzy was a bear")
    100
    """
    if s1 is None or s2 is None:
        return 0
    s1, s2 = _preprocess(s1, s2, processor)
    trivial = _trivial(s1, s2)
    if trivial is not None:
        return _cutoff(trivial, score_cutoff)
    sorted1 = _process_and_sort(s1, force_ascii, full_process)
    sorted2 = _process_and_sort(s2, force_ascii, full_process)
    return _cutoff(_ratio(sorted1, sorted2), score_cutoff)


def partial_token_sort_ratio(
    s1: str,
    s2: str,
    force_ascii: bool = True,
    full_process: bool = True,
    *,
    processor: _Processor | None = None,
    score_cutoff: float | None = None,
) -> int:
    """``partial_ratio`` of the two strings after sorting their words."""
    if s1 is None or s2 is None:
        return 0
    s1, s2 = _preprocess(s1, s2, processor)
    trivial = _trivial(s1, s2)
    if trivial is not None:
        return _cutoff(trivial, score_cutoff)
    sorted1 = _process_and_sort(s1, force_ascii, full_process)
    sorted2 = _process_and_sort(s2, force_ascii, full_process)
    return _cutoff(_partial_ratio(sorted1, sorted2), score_cutoff)


def token_set_ratio(
    s1: str,
    s2: str,
    force_ascii: bool = True,
    full_process: bool = True,
    *,
    processor: _Processor | None = None,
    score_cutoff: float | None = None,
) -> int:
    """
    Compare the strings as word sets.

    Three strings are built from the sorted word groups: the shared words,
    the shared words followed by those only in *s1*, and the shared words
    followed by those only in *s2*. The best pairwise ``ratio`` wins, so
    word order, repeated words and extra words are all forgiven.

    Examples
    --------
    >>> token_set_ratio("fuzzy was a bear", "fuzzy fuzzy was a bear")
    100
    """
    if s1 is None or s2 is None:
        return 0
    s1, s2 = _preprocess(s1, s2, processor)
    score = _token_set(s1, s2, False, force_ascii, full_process)
    return _cutoff(score, score_cutoff)


def partial_token_set_ratio(
    s1: str,
    s2: str,
    force_ascii: bool = True,
    full_process: bool = True,
    *,
    processor: _Processor | None = None,
    score_cutoff: float | None = None,
) -> int:
    """:func:`token_set_ratio` scored with ``partial_ratio``."""
    if s1 is None or s2 is None:
        return 0
    s1, s2 = _preprocess(s1, s2, processor)
    score = _token_set(s1, s2, True, force_ascii, full_process)
    return _cutoff(score, score_cutoff)


def QRatio(
    s1: str,
    s2: str,
    force_ascii: bool = True,
    full_process: bool = True,
    *,
    processor: _Processor | None = None,
    score_cutoff: float | None = None,
) -> int:
    """Quick ``ratio`` on processed strings; 0 if processing empties either."""
    if s1 is None or s2 is None:
        return 0
    s1, s2 = _preprocess(s1, s2, processor)
    trivial = _trivial(s1, s2)
    if trivial is not None:
        return _cutoff(trivial, score_cutoff)
    if full_process:
        s1 = utils.full_process(s1, force_ascii)
        s2 = utils.full_process(s2, force_ascii)
    if not s1 or not s2:
        return 0
    return _cutoff(_ratio(s1, s2), score_cutoff)


def UQRatio(
    s1: str,
    s2: str,
    full_process: bool = True,
    *,
    processor: _Processor | None = None,
    score_cutoff: float | None = None,
) -> int:
    """:func:`QRatio` without forcing ASCII."""
    return QRatio(
        s1,
        s2,
        force_ascii=False,
        full_process=full_process,
        processor=processor,
        score_cutoff=score_cutoff,
    )


def WRatio(
    s1: str,
    s2: str,
    force_ascii: bool = True,
    full_process: bool = True,
    *,
    processor: _Processor | None = None,
    score_cutoff: float | None = None,
    config: WRatioConfig | None = None,
) -> int:
    """
    Weighted blend of the other scorers.

    1. Process both strings (unless *full_process* is false); 0 if either
       becomes empty.
    2. Start from the plain ``ratio``.
    3. Pick the length-ratio bucket from *config*. Similar lengths use
       ``token_sort_ratio`` and ``token_set_ratio`` scaled by the token
       scale. Otherwise the partial scorers are used, scaled by the bucket's
       partial scale (and the token scale on top for token scorers).
    4. Return the rounded maximum.

    Examples
    --------
    >>> WRatio("new york mets", "the wonderful new york mets")
    90
    """
    if s1 is None or s2 is None:
        return 0
    s1, s2 = _preprocess(s1, s2, processor)
    trivial = _trivial(s1, s2)
    if trivial is not None:
        return _cutoff(trivial, score_cutoff)

    cfg = config if config is not None else DEFAULT_CONFIG
    if full_process:
        p1 = utils.full_process(s1, force_ascii)
        p2 = utils.full_process(s2, force_ascii)
    else:
        p1, p2 = s1, s2
    if not p1 or not p2:
        return 0

    best = float(_ratio(p1, p2))
    bucket = cfg.bucket_for(length_ratio(len(p1), len(p2)))

    # Multiply left to right: 100 * 0.95 * 0.9 must land on 85.5 exactly.
    token_scale = cfg.token_scale
    if bucket.partial_scale is None:
        best = max(
            best,
            token_sort_ratio(p1, p2, force_ascii, True) * token_scale,
            token_set_ratio(p1, p2, force_ascii, True) * token_scale,
        )
    else:
        partial_scale = bucket.partial_scale
        best = max(
            best,
            _partial_ratio(p1, p2) * partial_scale,
            partial_token_sort_ratio(p1, p2, force_ascii, True)
            * token_scale
            * partial_scale,
            partial_token_set_ratio(p1, p2, force_ascii, True)
            * token_scale
            * partial_scale,
        )

    return _cutoff(_round_half_up(best), score_cutoff)


def UWRatio(
    s1: str,
    s2: str,
    full_process: bool = True,
    *,
    processor: _Processor | None = None,
    score_cutoff: float | None = None,
    config: WRatioConfig | None = None,
) -> int:
    """:func:`WRatio` without forcing ASCII."""
    return WRatio(
        s1,
        s2,
        force_ascii=False,
        full_process=full_process,
        processor=processor,
        score_cutoff=score_cutoff,
        config=config,
    )


# snake_case spellings
qratio = QRatio
uqratio = UQRatio
wratio = WRatio
uwratio = UWRatio

__all__ = [
    "ScoreAlignment",
    "ratio",
    "partial_ratio",
    "partial_ratio_alignment",
    "token_sort_ratio",
    "partial_token_sort_ratio",
    "token_set_ratio",
    "partial_token_set_ratio",
    "QRatio",
    "UQRatio",
    "WRatio",
    "UWRatio",
    "qratio",
    "uqratio",
    "wratio",
    "uwratio",
]
