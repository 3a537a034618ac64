"""
seqfuzz.matcher — longest-matching-block sequence comparison.

The algorithm follows the classic Ratcliff/Obershelp partitioning used by
difflib: find the longest common run, then recurse into the regions on
either side of it. All bookkeeping is done with index ranges into the
original sequences, never with slices.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Sequence
from typing import NamedTuple

logger = logging.getLogger(__name__)

# Sequences shorter than this are never autojunked.
AUTOJUNK_MIN_LENGTH = 200

# Fraction of ``b`` that must stay indexed after popular elements are dropped.
AUTOJUNK_MIN_COVERAGE = 0.9


class MatchingBlock(NamedTuple):
    """A maximal common run: ``a[a:a+size] == b[b:b+size]``."""

    a: int
    b: int
    size: int


def _build_index(
    b: Sequence[Hashable], autojunk: bool
) -> dict[Hashable, list[int]]:
    """Map every element of *b* to the ascending positions where it occurs."""
    b2j: dict[Hashable, list[int]] = {}
    for j, elt in enumerate(b):
        b2j.setdefault(elt, []).append(j)

    n = len(b)
    if not autojunk or n < AUTOJUNK_MIN_LENGTH:
        return b2j

    ntest = n // 100 + 1
    covered = n
    floor = AUTOJUNK_MIN_COVERAGE * n
    popular = []
    for elt, idxs in list(b2j.items()):
        if len(idxs) > ntest and covered - len(idxs) >= floor:
            covered -= len(idxs)
            popular.append(elt)
            del b2j[elt]

    if popular:
        logger.debug(
            "autojunk dropped %d popular element(s) from a %d-long sequence: %r",
            len(popular),
            n,
            popular,
        )
    return b2j


class SequenceMatcher:
    """
    Compare two sequences of hashable elements.

    Parameters
    ----------
    a, b : Sequence
        The sequences to compare. Neither is modified.
    autojunk : bool
        Drop very frequent elements of *b* from the match index when *b* has
        at least 200 elements.

    Examples
    --------
    >>> SequenceMatcher("abxcd", "abcd").get_matching_blocks()
    [MatchingBlock(a=0, b=0, size=2), MatchingBlock(a=3, b=2, size=2), MatchingBlock(a=5, b=4, size=0)]
    """

    def __init__(
        self,
        a: Sequence[Hashable],
        b: Sequence[Hashable],
        autojunk: bool = True,
    ) -> None:
        self.a = a
        self.b = b
        self.autojunk = autojunk
        self._b2j = _build_index(b, autojunk)
        self._blocks: list[MatchingBlock] | None = None

    def find_longest_match(
        self, alo: int, ahi: int, blo: int, bhi: int
    ) -> MatchingBlock:
        """
        Longest run common to ``a[alo:ahi]`` and ``b[blo:bhi]``.

        Of all maximal runs, the one starting earliest in ``a`` wins, and of
        those the one starting earliest in ``b``. Returns ``(alo, blo, 0)``
        when nothing matches.
        """
        a, b, b2j = self.a, self.b, self._b2j
        besti, bestj, bestsize = alo, blo, 0
        # j2len[j] = length of the run ending at a[i-1], b[j]
        j2len: dict[int, int] = {}
        nothing: list[int] = []
        for i in range(alo, ahi):
            j2lenget = j2len.get
            newj2len: dict[int, int] = {}
            for j in b2j.get(a[i], nothing):
                if j < blo:
                    continue
                if j >= bhi:
                    break
                k = newj2len[j] = j2lenget(j - 1, 0) + 1
                if k > bestsize:
                    besti, bestj, bestsize = i - k + 1, j - k + 1, k
            j2len = newj2len

        # Popular elements are not indexed; pick them up at the edges.
        while besti > alo and bestj > blo and a[besti - 1] == b[bestj - 1]:
            besti, bestj, bestsize = besti - 1, bestj - 1, bestsize + 1
        while (
            besti + bestsize < ahi
            and bestj + bestsize < bhi
            and a[besti + bestsize] == b[bestj + bestsize]
        ):
            bestsize += 1

        return MatchingBlock(besti, bestj, bestsize)

    def get_matching_blocks(self) -> list[MatchingBlock]:
        """Ascending, non-overlapping blocks followed by the zero-size sentinel."""
        if self._blocks is not None:
            return self._blocks

        la, lb = len(self.a), len(self.b)
        stack = [(0, la, 0, lb)]
        blocks: list[MatchingBlock] = []
        while stack:
            alo, ahi, blo, bhi = stack.pop()
            block = self.find_longest_match(alo, ahi, blo, bhi)
            i, j, k = block
            if not k:
                continue
            blocks.append(block)
            if alo < i and blo < j:
                stack.append((alo, i, blo, j))
            if i + k < ahi and j + k < bhi:
                stack.append((i + k, ahi, j + k, bhi))

        blocks.sort()
        blocks.append(MatchingBlock(la, lb, 0))
        self._blocks = blocks
        return blocks

    @property
    def matched_length(self) -> int:
        """Total number of elements covered by the matching blocks."""
        return sum(block.size for block in self.get_matching_blocks())

    def ratio(self) -> float:
        """``2 * M / T`` in [0, 1]; two empty sequences are identical."""
        total = len(self.a) + len(self.b)
        if not total:
            return 1.0
        return 2.0 * self.matched_length / total


def find_matching_blocks(
    a: Sequence[Hashable],
    b: Sequence[Hashable],
    *,
    autojunk: bool = True,
) -> list[MatchingBlock]:
    """
    Matching blocks between *a* and *b*.

    Adjacent blocks are reported separately. The last element is always the
    sentinel ``MatchingBlock(len(a), len(b), 0)``.
    """
    return SequenceMatcher(a, b, autojunk=autojunk).get_matching_blocks()


def find_longest_match(
    a: Sequence[Hashable],
    b: Sequence[Hashable],
    *,
    autojunk: bool = True,
) -> MatchingBlock:
    """Longest common run over the whole of *a* and *b*."""
    return SequenceMatcher(a, b, autojunk=autojunk).find_longest_match(
        0, len(a), 0, len(b)
    )


__all__ = [
    "MatchingBlock",
    "SequenceMatcher",
    "find_longest_match",
    "find_matching_blocks",
]
