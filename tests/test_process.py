"""Tests for seqfuzz.process — extraction, dedupe and cdist."""

from __future__ import annotations

import logging

import pytest

from seqfuzz import fuzz, process
from seqfuzz.utils import default_process, full_process

TEAMS = ["Atlanta Falcons", "Dallas Cowboys", "New York Jets"]

GAMES = [
    "new york mets vs chicago cubs",
    "chicago cubs vs chicago white sox",
    "philladelphia phillies vs atlanta braves",
    "braves vs mets",
]


# ---------------------------------------------------------------------------
# extract_one
# ---------------------------------------------------------------------------
class TestExtractOne:
    def test_cowboys(self) -> None:
        result = process.extract_one("cowboys", TEAMS, full_process, fuzz.wratio, 0)
        assert result == ("Dallas Cowboys", 90)

    def test_defaults(self) -> None:
        assert process.extract_one("cowboys", TEAMS) == ("Dallas Cowboys", 90)

    def test_default_hooks_are_default_process_and_wratio(self) -> None:
        implicit = process.extract("cowboys", TEAMS, limit=None)
        explicit = process.extract(
            "cowboys", TEAMS, default_process, fuzz.WRatio, limit=None
        )
        assert implicit == explicit

    def test_none_processor_compares_raw_strings(self) -> None:
        exact = process.extract_one("Dallas Cowboys", TEAMS, None, fuzz.ratio)
        assert exact == ("Dallas Cowboys", 100)
        lowered = process.extract_one("dallas cowboys", TEAMS, None, fuzz.ratio)
        assert lowered is not None
        assert lowered[1] < 100

    def test_empty_choices(self) -> None:
        assert process.extract_one("cowboys", []) is None

    def test_cutoff_100_on_non_identical(self) -> None:
        assert process.extract_one("cowboys", TEAMS, score_cutoff=100) is None

    def test_cutoff_is_exclusive(self) -> None:
        assert process.extract_one("cowboys", TEAMS, score_cutoff=90) is None
        assert process.extract_one("cowboys", TEAMS, score_cutoff=89) == ("Dallas Cowboys", 90)

    def test_tie_goes_to_first_choice(self) -> None:
        # The first two games both score 86.
        result = process.extract_one("brave new cubs", GAMES)
        assert result == (GAMES[0], 86)

    @pytest.mark.parametrize(
        "query, expected",
        [
            ("new york mets at atlanta braves", GAMES[3]),
            ("philadelphia phillies at atlanta braves", GAMES[2]),
            ("atlanta braves at philadelphia phillies", GAMES[2]),
            ("chicago cubs vs new york mets", GAMES[0]),
        ],
    )
    def test_best_game(self, query: str, expected: str) -> None:
        result = process.extract_one(query, GAMES, full_process, fuzz.WRatio)
        assert result is not None
        assert result[0] == expected

    def test_custom_scorer_and_no_processor(self) -> None:
        result = process.extract_one("Jets", TEAMS, None, fuzz.partial_ratio)
        assert result == ("New York Jets", 100)

    def test_scorer_errors_propagate(self) -> None:
        def broken(q: str, c: str) -> int:
            raise RuntimeError("scorer failed")

        with pytest.raises(RuntimeError, match="scorer failed"):
            process.extract_one("x", ["y"], scorer=broken)

    def test_empty_query_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="seqfuzz.process"):
            assert process.extract_one("!!!", TEAMS) is None
        assert "empty string" in caplog.text


# ---------------------------------------------------------------------------
# extract / extract_bests / extract_without_order
# ---------------------------------------------------------------------------
class TestExtract:
    def test_sorted_descending(self) -> None:
        results = process.extract("cowboys", TEAMS, limit=None)
        scores = [score for _, score in results]
        assert scores == sorted(scores, reverse=True)
        assert results[0] == ("Dallas Cowboys", 90)
        assert len(results) == 3

    def test_stable_on_ties(self) -> None:
        results = process.extract("brave new cubs", GAMES, limit=2)
        assert results == [(GAMES[0], 86), (GAMES[1], 86)]

    def test_limit(self) -> None:
        assert len(process.extract("cowboys", TEAMS, limit=1)) == 1

    def test_negative_limit(self) -> None:
        assert process.extract("cowboys", TEAMS, limit=-1) == []

    def test_zero_limit(self) -> None:
        assert process.extract("cowboys", TEAMS, limit=0) == []

    def test_keeps_zero_scores(self) -> None:
        results = process.extract("abc", ["xyz"], scorer=fuzz.ratio)
        assert results == [("xyz", 0)]

    def test_generator_choices(self) -> None:
        results = process.extract("cowboys", (t for t in TEAMS), limit=1)
        assert results == [("Dallas Cowboys", 90)]

    def test_extract_bests_cutoff(self) -> None:
        results = process.extract_bests("brave new cubs", GAMES, score_cutoff=85, limit=None)
        assert [choice for choice, _ in results] == GAMES[:2]

    def test_extract_without_order_keeps_input_order(self) -> None:
        results = list(process.extract_without_order("cowboys", TEAMS))
        assert [choice for choice, _ in results] == TEAMS

    def test_query_processed_once(self) -> None:
        calls: list[str] = []

        def tracking(s: str) -> str:
            calls.append(s)
            return s.lower()

        process.extract("Query", ["a", "b", "c"], processor=tracking)
        assert calls.count("Query") == 1
        assert len(calls) == 4

    def test_none_choice_scores_zero(self) -> None:
        results = process.extract("abc", [None, "abc"], scorer=fuzz.ratio)
        assert results == [("abc", 100), (None, 0)]


# ---------------------------------------------------------------------------
# dedupe
# ---------------------------------------------------------------------------
class TestDedupe:
    DUPES = ["apple pie", "pie apple", "banana split", "Apple Pie!"]

    def test_keep_first(self) -> None:
        assert process.dedupe(self.DUPES) == ["apple pie", "banana split"]

    def test_keep_longest(self) -> None:
        assert process.dedupe(self.DUPES, keep="longest") == ["Apple Pie!", "banana split"]

    def test_exact_threshold(self) -> None:
        assert process.dedupe(["foo", "bar", "foo", "baz"], threshold=100) == [
            "foo",
            "bar",
            "baz",
        ]

    def test_no_duplicates(self) -> None:
        items = ["alpha", "omega"]
        assert process.dedupe(items) == items

    def test_empty(self) -> None:
        assert process.dedupe([]) == []

    def test_custom_scorer_and_processor(self) -> None:
        items = ["ABC", "abc", "xyz"]
        assert process.dedupe(items, 100, fuzz.ratio) == items
        assert process.dedupe(items, 100, fuzz.ratio, processor=str.lower) == ["ABC", "xyz"]


# ---------------------------------------------------------------------------
# cdist
# ---------------------------------------------------------------------------
class TestCdist:
    @pytest.fixture()
    def np(self) -> ...:
        return pytest.importorskip("numpy")

    def test_matrix(self, np: ...) -> None:
        matrix = process.cdist(["abc", "xyz"], ["abc", "xyz", "abz"])
        assert matrix.shape == (2, 3)
        assert matrix.dtype == np.int32
        assert matrix.tolist() == [[100, 0, 67], [0, 100, 33]]

    def test_dtype_and_scorer(self, np: ...) -> None:
        matrix = process.cdist(["hello"], ["say hello"], scorer=fuzz.partial_ratio, dtype=np.float64)
        assert matrix.dtype == np.float64
        assert matrix[0, 0] == 100.0

    def test_empty(self, np: ...) -> None:
        assert process.cdist([], ["abc"]).shape == (0, 1)
