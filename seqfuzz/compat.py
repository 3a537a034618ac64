"""
seqfuzz.compat — choice-container helpers for :mod:`seqfuzz.process`.

Mappings and pandas Series carry a key for each choice; Polars Series,
PyArrow arrays and plain iterables do not. All framework imports are lazy so
none of them is a hard dependency.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any


def _is_polars_series(data: Any) -> bool:
    try:
        import polars as pl

        return isinstance(data, pl.Series)
    except ImportError:
        return False


def _is_pandas_series(data: Any) -> bool:
    try:
        import pandas as pd

        return isinstance(data, pd.Series)
    except ImportError:
        return False


def _is_pyarrow_array(data: Any) -> bool:
    try:
        import pyarrow as pa

        return isinstance(data, (pa.Array, pa.ChunkedArray))
    except ImportError:
        return False


def _is_keyed(choices: Any) -> bool:
    """Whether candidates built from *choices* carry a key."""
    return isinstance(choices, Mapping) or _is_pandas_series(choices)


def _iter_choices(choices: Any) -> Iterator[tuple[Any, Any]]:
    """
    Yield ``(key, choice)`` pairs from *choices*.

    Supported input types
    ---------------------
    * ``Mapping`` — ``(key, value)`` from ``.items()``.
    * ``pandas.Series`` — ``(index label, value)``.
    * ``polars.Series`` — ``(position, value)`` via ``.to_list()``.
    * ``pyarrow.Array`` / ``pyarrow.ChunkedArray`` — ``(position, value)``
      via ``.to_pylist()``.
    * Any other ``Iterable`` — ``(position, value)``.

    Raises
    ------
    TypeError
        If *choices* is not iterable.
    """
    if isinstance(choices, Mapping):
        yield from choices.items()
        return

    if _is_pandas_series(choices):
        yield from choices.items()  # type: ignore[union-attr]
        return

    if _is_polars_series(choices):
        yield from enumerate(choices.to_list())  # type: ignore[union-attr]
        return

    if _is_pyarrow_array(choices):
        yield from enumerate(choices.to_pylist())  # type: ignore[union-attr]
        return

    if isinstance(choices, (str, bytes)) or not isinstance(choices, Iterable):
        raise TypeError(
            f"Cannot iterate choices of type {type(choices).__name__}. "
            "Pass a list, a mapping, a Pandas/Polars Series or a PyArrow Array."
        )

    yield from enumerate(choices)


__all__ = ["_is_keyed", "_iter_choices"]
