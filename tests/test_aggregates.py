"""Tests for single-column statistics."""

import math

import pytest

from conftest import make_table
from sheetcalc.analytics.aggregates import (
    OPERATIONS, compute, extract_values, median, resolve_column, row_sum, sample_std,
)
from sheetcalc.data.loader import parse_csv
from sheetcalc.data.schemas import Operation
from sheetcalc.errors import (
    ColumnNotFoundError, ComputeError, NoNumericValuesError, UnsupportedOperationError,
)


@pytest.fixture
def one_to_four():
    return make_table(["V"], [["1"], ["2"], ["3"], ["4"]])


class TestExtractValues:
    def test_row_order_kept(self):
        table = make_table(["V"], [["3"], ["1"], ["2"]])
        assert extract_values(table, 0) == [3.0, 1.0, 2.0]

    def test_skips_blank_text_and_short_rows(self):
        table = make_table(["A", "B"], [["a", " 5 "], ["b"], ["c", ""], ["d", "N/A"], ["e", "-1"]])
        assert extract_values(table, 1) == [5.0, -1.0]

    def test_ignores_classification(self):
        """Text columns are still scanned; stray numbers are picked up."""
        table = make_table(["Notes"], [["ok"], ["12"], ["missing"]])
        assert extract_values(table, 0) == [12.0]


class TestOperations:
    @pytest.mark.parametrize("op, expected", [
        ("sum", 10.0),
        ("average", 2.5),
        ("median", 2.5),
        ("min", 1.0),
        ("max", 4.0),
        ("count", 4.0),
        ("std", math.sqrt(5 / 3)),
    ])
    def test_one_to_four(self, one_to_four, op, expected):
        assert compute(one_to_four, 0, op) == pytest.approx(expected)

    def test_std_value(self, one_to_four):
        assert compute(one_to_four, 0, "std") == pytest.approx(1.29099, abs=1e-5)

    def test_accepts_enum(self, one_to_four):
        assert compute(one_to_four, 0, Operation.SUM) == 10.0

    def test_every_operation_registered(self):
        assert set(OPERATIONS) == set(Operation)

    def test_median_odd(self):
        assert median([5.0, 1.0, 3.0]) == 3.0

    def test_median_unsorted_even(self):
        assert median([10.0, -2.0, 4.0, 0.0]) == 2.0

    def test_median_does_not_reorder_input(self):
        values = [3.0, 1.0, 2.0]
        median(values)
        assert values == [3.0, 1.0, 2.0]

    def test_negative_min_max(self):
        table = make_table(["V"], [["-5"], ["2"], ["-7.5"], ["0"]])
        assert compute(table, 0, "min") == -7.5
        assert compute(table, 0, "max") == 2.0

    def test_count_counts_operands_not_rows(self):
        table = make_table(["V"], [["1"], [""], ["x"], ["2"], []])
        assert compute(table, 0, "count") == 2.0


class TestDegenerateCases:
    def test_single_value_std_is_zero(self):
        table = make_table(["V"], [["5"]])
        assert compute(table, 0, "std") == 0.0

    @pytest.mark.parametrize("op", [op.value for op in Operation])
    def test_empty_operands_fail_for_every_operation(self, op):
        table = make_table(["V"], [["x"], [""], []])
        with pytest.raises(NoNumericValuesError):
            compute(table, 0, op)

    def test_empty_operands_win_over_unknown_operation(self):
        table = make_table(["V"], [["x"]])
        with pytest.raises(NoNumericValuesError):
            compute(table, 0, "mode")

    def test_unsupported_operation(self, one_to_four):
        with pytest.raises(UnsupportedOperationError):
            compute(one_to_four, 0, "mode")

    def test_operation_names_are_case_sensitive(self, one_to_four):
        with pytest.raises(UnsupportedOperationError):
            compute(one_to_four, 0, "SUM")

    @pytest.mark.parametrize("index", [-1, 1, 99])
    def test_index_outside_headers(self, one_to_four, index):
        with pytest.raises(ColumnNotFoundError):
            compute(one_to_four, index, "sum")

    def test_errors_share_base(self):
        for exc in (NoNumericValuesError, UnsupportedOperationError, ColumnNotFoundError):
            assert issubclass(exc, ComputeError)


class TestDeterminism:
    def test_sum_follows_row_order(self):
        values = [1e16, 1.0, -1e16, 1.0]
        naive = 0.0
        for v in values:
            naive += v
        assert row_sum(values) == naive

    def test_repeat_calls_identical(self):
        table = make_table(["V"], [[str(0.1 * i)] for i in range(1, 200)])
        for op in Operation:
            first = compute(table, 0, op)
            assert compute(table, 0, op) == first

    def test_std_matches_definition(self):
        values = [2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]
        mean = sum(values) / len(values)
        expected = math.sqrt(sum((v - mean) ** 2 for v in values) / (len(values) - 1))
        assert sample_std(values) == pytest.approx(expected)


class TestResolveColumn:
    def test_first_match_wins(self):
        table = make_table(["X", "Y", "X"], [["1", "2", "3"]])
        assert resolve_column(table, "X") == 0

    def test_exact_match_only(self):
        table = make_table(["Score"], [["1"]])
        with pytest.raises(ColumnNotFoundError):
            resolve_column(table, "score")

    def test_unknown(self):
        table = make_table(["A"], [])
        with pytest.raises(ColumnNotFoundError):
            resolve_column(table, "B")


class TestScoresExample:
    def test_score_statistics(self, scores_csv):
        table = parse_csv(scores_csv)
        index = resolve_column(table, "Score")
        assert compute(table, index, "sum") == 40.0
        assert compute(table, index, "count") == 2.0
        assert compute(table, index, "average") == 20.0
