"""
Tests for unit conversion.
"""

import pytest
from decimal import Decimal

from manuscript_docx.utils.units import (
    inches_to_twips,
    line_multiplier_to_twips,
    parse_percent,
    round_half_away,
    split_length,
    to_half_points,
    to_points,
    to_twips,
)


@pytest.mark.unit
class TestHalfPoints:
    """Font sizes in half-points."""

    def test_points(self):
        assert to_half_points("12pt") == 24

    def test_inches(self):
        assert to_half_points("1in") == 144

    def test_bare_number_is_points(self):
        assert to_half_points(11.5) == 23
        assert to_half_points("11.5") == 23

    def test_half_scale_halves_result(self):
        assert to_half_points("12pt", 0.5) == 12
        assert to_half_points("1in", 0.5) == 72

    def test_unparseable_defaults_to_12pt(self):
        assert to_half_points("large") == 24
        assert to_half_points(None) == 24
        assert to_half_points("") == 24

    def test_em_uses_base_font_size(self):
        # 1em at 16px = 12pt
        assert to_half_points("1em") == 24
        assert to_half_points("1rem", base_font_size=20) == 30


@pytest.mark.unit
class TestTwips:
    """Lengths in twips."""

    def test_inch(self):
        assert to_twips("1in") == 1440

    def test_pixels(self):
        assert to_twips("10px") == 150

    def test_millimeters_and_centimeters(self):
        assert to_twips("10mm") == 567
        assert to_twips("1cm") == 567

    def test_half_scale_halves_result(self):
        assert to_twips("1in", 0.5) == 720
        assert to_twips("10px", 0.5) == 75

    def test_unparseable_defaults_to_zero(self):
        assert to_twips("auto") == 0
        assert to_twips(True) == 0

    def test_whitespace_and_case(self):
        assert to_twips(" 0.5 IN ") == 720


@pytest.mark.unit
class TestHelpers:
    """Rounding and parsing helpers."""

    def test_round_half_away_from_zero(self):
        assert round_half_away(0.5) == 1
        assert round_half_away(1.5) == 2
        assert round_half_away(2.5) == 3
        assert round_half_away(-1.5) == -2

    def test_split_length(self):
        assert split_length("7.5pt") == (Decimal("7.5"), "pt")
        assert split_length(3) == (Decimal("3"), "")
        assert split_length("pt") is None

    def test_unknown_unit_treated_as_points(self):
        assert to_points("12ex") == Decimal("12")

    def test_inches_to_twips(self):
        assert inches_to_twips("1") == 1440
        assert inches_to_twips(1.25) == 1800
        assert inches_to_twips("abc") == 1440

    def test_line_multiplier(self):
        assert line_multiplier_to_twips(1.5) == 360
        assert line_multiplier_to_twips("2") == 480
        assert line_multiplier_to_twips("16pt") is None

    def test_parse_percent(self):
        assert parse_percent("85%") == Decimal("85")
        assert parse_percent("2") == Decimal("2")
        assert parse_percent("2pt") is None
