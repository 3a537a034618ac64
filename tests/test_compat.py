"""Tests for seqfuzz.compat — choice containers from data frameworks."""

from __future__ import annotations

import pytest

from seqfuzz import process
from seqfuzz.compat import _is_keyed, _iter_choices

TEAMS = ["Atlanta Falcons", "Dallas Cowboys", "New York Jets"]


class TestIterChoices:
    def test_list_enumerates(self) -> None:
        assert list(_iter_choices(["a", "b"])) == [(0, "a"), (1, "b")]

    def test_mapping_items(self) -> None:
        assert list(_iter_choices({"x": "a", "y": "b"})) == [("x", "a"), ("y", "b")]

    def test_generator(self) -> None:
        def gen() -> ...:
            yield "hello"
            yield "world"

        assert list(_iter_choices(gen())) == [(0, "hello"), (1, "world")]

    def test_empty(self) -> None:
        assert list(_iter_choices([])) == []

    @pytest.mark.parametrize("bad", [42, "abc", b"abc", None])
    def test_non_iterable_raises(self, bad: object) -> None:
        with pytest.raises(TypeError, match="Cannot iterate choices"):
            list(_iter_choices(bad))

    def test_is_keyed(self) -> None:
        assert _is_keyed({"a": "b"})
        assert not _is_keyed(["a"])


class TestKeyedExtraction:
    def test_dict_choices_report_keys(self) -> None:
        choices = {"atl": "Atlanta Falcons", "dal": "Dallas Cowboys"}
        assert process.extract_one("cowboys", choices) == ("Dallas Cowboys", 90, "dal")

    def test_dict_extract(self) -> None:
        choices = dict(zip("abc", TEAMS))
        results = process.extract("cowboys", choices, limit=1)
        assert results == [("Dallas Cowboys", 90, "b")]

    def test_string_choices_raise(self) -> None:
        with pytest.raises(TypeError, match="str"):
            process.extract_one("cowboys", "Dallas Cowboys")


class TestPandasIntegration:
    @pytest.fixture()
    def pd(self) -> ...:
        return pytest.importorskip("pandas")

    def test_series_keyed_by_index(self, pd: ...) -> None:
        s = pd.Series(TEAMS, index=["atl", "dal", "nyj"])
        assert process.extract_one("cowboys", s) == ("Dallas Cowboys", 90, "dal")

    def test_series_is_keyed(self, pd: ...) -> None:
        assert _is_keyed(pd.Series(TEAMS))


class TestPolarsIntegration:
    @pytest.fixture()
    def pl(self) -> ...:
        return pytest.importorskip("polars")

    def test_polars_series(self, pl: ...) -> None:
        s = pl.Series("team", TEAMS)
        assert list(_iter_choices(s)) == list(enumerate(TEAMS))

    def test_extract_from_polars(self, pl: ...) -> None:
        s = pl.Series("team", TEAMS)
        assert process.extract_one("cowboys", s) == ("Dallas Cowboys", 90)

    def test_polars_series_with_none(self, pl: ...) -> None:
        s = pl.Series("team", ["Dallas Cowboys", None])
        assert process.extract("cowboys", s, limit=None) == [
            ("Dallas Cowboys", 90),
            (None, 0),
        ]


class TestPyArrowIntegration:
    @pytest.fixture()
    def pa(self) -> ...:
        return pytest.importorskip("pyarrow")

    def test_array(self, pa: ...) -> None:
        arr = pa.array(TEAMS)
        assert process.extract_one("cowboys", arr) == ("Dallas Cowboys", 90)

    def test_chunked_array(self, pa: ...) -> None:
        arr = pa.chunked_array([TEAMS[:1], TEAMS[1:]])
        assert list(_iter_choices(arr)) == list(enumerate(TEAMS))


class TestCdistChoices:
    def test_mapping_values_become_columns(self) -> None:
        pytest.importorskip("numpy")
        matrix = process.cdist(["abc"], {"k1": "abc", "k2": "xyz"})
        assert matrix.tolist() == [[100, 0]]
