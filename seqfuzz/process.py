"""
seqfuzz.process — scoring a query against many choices.

Candidates are ``(choice, score)`` tuples, or ``(choice, score, key)`` when
*choices* is a mapping or a pandas Series. A candidate passes a
``score_cutoff`` only when its score is strictly greater than the cutoff.
"""

from __future__ import annotations

import heapq
import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from . import fuzz
from .compat import _is_keyed, _iter_choices
from .utils import default_process

logger = logging.getLogger(__name__)

_Candidate = tuple[Any, ...]

_KEEP_POLICIES = ("first", "longest")


def _identity(s: Any) -> Any:
    return s


def extract_without_order(
    query: Any,
    choices: Iterable[Any],
    processor: Callable[[Any], Any] | None = default_process,
    scorer: Callable[[Any, Any], int] = fuzz.WRatio,
    score_cutoff: float | None = None,
) -> Iterator[_Candidate]:
    """
    Yield a candidate for every choice scoring above *score_cutoff*.

    Candidates come out in input order. The query is processed once; each
    choice is processed just before it is scored. Exceptions raised by
    *processor* or *scorer* propagate to the caller.
    """
    process = processor if processor is not None else _identity
    processed_query = process(query)
    if isinstance(processed_query, str) and not processed_query:
        logger.warning(
            "Processor reduced query %r to an empty string; "
            "all comparisons will score 0.",
            query,
        )

    keyed = _is_keyed(choices)
    for key, choice in _iter_choices(choices):
        score = scorer(processed_query, process(choice))
        if score_cutoff is not None and score <= score_cutoff:
            continue
        yield (choice, score, key) if keyed else (choice, score)


def extract_one(
    query: Any,
    choices: Iterable[Any],
    processor: Callable[[Any], Any] | None = default_process,
    scorer: Callable[[Any, Any], int] = fuzz.WRatio,
    score_cutoff: float = 0,
) -> _Candidate | None:
    """
    Return the best candidate, or ``None``.

    Ties go to the choice seen first. ``None`` is returned for empty
    *choices* or when nothing scores strictly above *score_cutoff*.

    Examples
    --------
    >>> extract_one("cowboys", ["Atlanta Falcons", "Dallas Cowboys", "New York Jets"])
    ('Dallas Cowboys', 90)
    """
    best: _Candidate | None = None
    for candidate in extract_without_order(
        query, choices, processor, scorer, score_cutoff
    ):
        if best is None or candidate[1] > best[1]:
            best = candidate
    return best


def extract(
    query: Any,
    choices: Iterable[Any],
    processor: Callable[[Any], Any] | None = default_process,
    scorer: Callable[[Any, Any], int] = fuzz.WRatio,
    limit: int | None = 5,
) -> list[_Candidate]:
    """
    Return the top *limit* candidates sorted by descending score.

    Equal scores keep their input order. ``limit=None`` returns every
    choice; a limit of zero or less returns an empty list.
    """
    return extract_bests(query, choices, processor, scorer, None, limit)


def extract_bests(
    query: Any,
    choices: Iterable[Any],
    processor: Callable[[Any], Any] | None = default_process,
    scorer: Callable[[Any, Any], int] = fuzz.WRatio,
    score_cutoff: float | None = 0,
    limit: int | None = 5,
) -> list[_Candidate]:
    """Like :func:`extract`, keeping only scores above *score_cutoff*."""
    if limit is not None and limit <= 0:
        return []
    candidates = extract_without_order(
        query, choices, processor, scorer, score_cutoff
    )
    if limit is None:
        return sorted(candidates, key=lambda c: c[1], reverse=True)
    return heapq.nlargest(limit, candidates, key=lambda c: c[1])


def dedupe(
    contains_dupes: Iterable[Any],
    threshold: float = 70,
    scorer: Callable[[Any, Any], int] = fuzz.token_set_ratio,
    *,
    processor: Callable[[Any], Any] | None = None,
    keep: str = "first",
) -> list[Any]:
    """
    Collapse fuzzy duplicates in a single greedy pass.

    Each item is scored against the representatives kept so far; scoring at
    least *threshold* against any of them marks it as a duplicate of the
    first such representative.

    Parameters
    ----------
    keep : str
        ``"first"`` keeps the first-seen item of each group. ``"longest"``
        swaps a representative for a longer duplicate, in place.

    Returns
    -------
    list
        Representatives in input order.
    """
    if keep not in _KEEP_POLICIES:
        raise ValueError(
            f"Unknown keep policy {keep!r}; expected one of {_KEEP_POLICIES}"
        )

    process = processor if processor is not None else _identity
    kept: list[Any] = []
    kept_processed: list[Any] = []
    for item in contains_dupes:
        processed = process(item)
        for idx, rep in enumerate(kept_processed):
            if scorer(processed, rep) >= threshold:
                if keep == "longest" and len(item) > len(kept[idx]):
                    kept[idx] = item
                    kept_processed[idx] = processed
                break
        else:
            kept.append(item)
            kept_processed.append(processed)
    return kept


def cdist(
    queries: Iterable[Any],
    choices: Iterable[Any],
    scorer: Callable[[Any, Any], int] = fuzz.ratio,
    processor: Callable[[Any], Any] | None = None,
    dtype: Any = None,
) -> Any:
    """
    Score every query against every choice. Requires numpy.

    Returns
    -------
    numpy.ndarray
        Matrix of shape ``(len(queries), len(choices))``; ``int32`` unless
        *dtype* says otherwise.
    """
    try:
        import numpy as np
    except ImportError as e:
        msg = "cdist requires numpy: pip install seqfuzz[all]"
        raise ImportError(msg) from e

    process = processor if processor is not None else _identity
    processed_queries = [process(q) for q in queries]
    processed_choices = [process(c) for _, c in _iter_choices(choices)]

    matrix = np.zeros(
        (len(processed_queries), len(processed_choices)),
        dtype=dtype if dtype is not None else np.int32,
    )
    for row, query in enumerate(processed_queries):
        for col, choice in enumerate(processed_choices):
            matrix[row, col] = scorer(query, choice)
    return matrix


# camelCase spellings familiar from other fuzzy matching libraries
extractOne = extract_one
extractBests = extract_bests
extractWithoutOrder = extract_without_order

__all__ = [
    "extract",
    "extract_bests",
    "extract_one",
    "extract_without_order",
    "dedupe",
    "cdist",
    "extractOne",
    "extractBests",
    "extractWithoutOrder",
]
