"""
seqfuzz.utils — tokenization and the default preprocessing hook.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

_NON_WORD = re.compile(r"(?ui)\W")


def asciionly(s: str) -> str:
    """Drop every code point outside the 7-bit ASCII range."""
    return "".join(ch for ch in s if ord(ch) < 128)


def full_process(s: str | None, force_ascii: bool = False) -> str:
    """
    Lowercase *s*, turn every non-word character into a space and trim it.

    Each non-word character becomes exactly one space; runs are not
    collapsed. With *force_ascii* the non-ASCII code points are removed
    first, which can change where spaces end up.

    Examples
    --------
    >>> full_process("ABC What! do_ you mean? ... ")
    'abc what  do_ you mean'
    >>> full_process("a¬4ሴ2€耀", force_ascii=True)
    'a42'
    """
    if s is None:
        return ""
    if force_ascii:
        s = asciionly(s)
    return _NON_WORD.sub(" ", s).lower().strip()


def default_process(s: str | None) -> str:
    """Preprocessing hook used by :mod:`seqfuzz.process` unless overridden."""
    return full_process(s, force_ascii=False)


def tokenize(s: str) -> list[str]:
    """Split on whitespace runs, keeping order and dropping empty tokens."""
    return s.split()


def token_set(s: str) -> set[str]:
    return set(s.split())


def sorted_tokens(tokens: Iterable[str]) -> str:
    """Canonical form of a token group: sorted and single-space joined."""
    return " ".join(sorted(tokens))


__all__ = [
    "asciionly",
    "default_process",
    "full_process",
    "sorted_tokens",
    "token_set",
    "tokenize",
]
