"""Unit tests for utility functions (khaos.utils).

Tests cover:
- format_confidence / format_score
- Rich output helpers (print_summary_table, print_success, etc.)
"""

from __future__ import annotations

import pytest

from khaos.utils import (
    format_confidence,
    format_score,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


class TestFormatConfidence:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value, expected",
        [(1.0, "100%"), (0.773, "77%"), (0.0, "0%"), (-0.2, "0%"), (1.7, "100%")],
    )
    def test_values(self, value: float, expected: str):
        assert format_confidence(value) == expected


class TestFormatScore:
    @pytest.mark.unit
    def test_integer_score(self):
        assert format_score(23.0) == "23"

    @pytest.mark.unit
    def test_fractional_score(self):
        assert format_score(98.39) == "98.4"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestRichOutputHelpers:
    @pytest.mark.unit
    def test_print_summary_table(self, recording_console):
        print_summary_table({"Layer": "atom", "Confidence": "100%"}, title="Test Summary")
        output = recording_console.export_text()
        assert "Test Summary" in output
        assert "atom" in output

    @pytest.mark.unit
    def test_print_success(self, recording_console):
        print_success("All checks passed")
        assert "All checks passed" in recording_console.export_text()

    @pytest.mark.unit
    def test_print_error(self, recording_console):
        print_error("Something failed")
        assert "Something failed" in recording_console.export_text()

    @pytest.mark.unit
    def test_print_warning_escapes_markup(self, recording_console):
        print_warning("Layer [bold]x[/bold] ignored")
        assert "[bold]x[/bold]" in recording_console.export_text()
