"""Tests for display formatting and HTML rendering."""

import datetime as dt

import pytest

from conftest import make_table
from sheetcalc.api.pages import (
    display_page, format_file_size, format_number, format_timestamp, operation_label, results_page,
)
from sheetcalc.data.schemas import BatchResult, CalculationResult


class TestFormatFileSize:
    @pytest.mark.parametrize("size, expected", [
        (0, "0 B"),
        (1023, "1023 B"),
        (1024, "1.0 KB"),
        (1536, "1.5 KB"),
        (10 << 20, "10.0 MB"),
        (1024 ** 3 * 3, "3.0 GB"),
        (1024 ** 4, "1.0 TB"),
    ])
    def test_binary_units(self, size, expected):
        assert format_file_size(size) == expected


class TestFormatters:
    def test_number(self):
        assert format_number(40.0) == "40.00"
        assert format_number(1.290994) == "1.29"

    def test_timestamp(self):
        assert format_timestamp(dt.datetime(2006, 1, 2, 15, 4)) == "January 2, 2006 at 3:04 PM"
        assert format_timestamp(dt.datetime(2024, 11, 30, 0, 5)) == "November 30, 2024 at 12:05 AM"

    def test_operation_label(self):
        assert operation_label("average") == "Average"
        assert operation_label("std") == "Std"


class TestDisplayPage:
    def test_ragged_rows_padded(self):
        table = make_table(["A", "B", "C"], [["1"], ["1", "2", "3"]], numeric={0})
        html = display_page(table)
        assert "<tr><td class=\"numeric\">1</td><td></td><td></td></tr>" in html

    def test_numeric_checkboxes_ascending(self):
        table = make_table(["Z", "Y", "X"], [["1", "2", "3"]], numeric={2, 0})
        html = display_page(table)
        assert html.index('value="Z"') < html.index('value="X"')
        assert 'value="Y"' not in html

    def test_preview_limit(self, monkeypatch):
        monkeypatch.setattr("sheetcalc.api.pages.PREVIEW_ROWS", 2)
        table = make_table(["N"], [[str(i)] for i in range(5)], numeric={0})
        html = display_page(table)
        assert "Showing first 2 of 5 rows." in html
        assert ">4</td>" not in html


class TestResultsPage:
    def test_renders_results(self):
        table = make_table(["Score"], [["1"]]).with_metadata(filename="scores.csv")
        batch = BatchResult(operation="median", results=[CalculationResult("Score", 2.5)])
        html = results_page(batch, table, dt.datetime(2024, 1, 5, 9, 0))
        assert "<h1>Median</h1>" in html
        assert "2.50" in html
        assert "January 5, 2024 at 9:00 AM" in html
