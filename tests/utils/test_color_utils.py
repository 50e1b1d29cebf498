"""
Tests for color normalization.
"""

import pytest

from manuscript_docx.utils.color_utils import normalize_color, rgb_to_hex


@pytest.mark.unit
class TestNormalizeColor:
    """CSS colors to Word hex."""

    def test_hash_hex(self):
        assert normalize_color("#1a2b3c") == "1A2B3C"

    def test_bare_hex(self):
        assert normalize_color("FF0000") == "FF0000"

    def test_short_hex(self):
        assert normalize_color("#abc") == "AABBCC"

    def test_rgb_function(self):
        assert normalize_color("rgb(255, 0, 128)") == "FF0080"
        assert normalize_color("rgba(0, 0, 0, 0.5)") == "000000"

    def test_named_colors(self):
        assert normalize_color("Red") == "FF0000"
        assert normalize_color("grey") == "808080"

    def test_auto(self):
        assert normalize_color("auto") == "auto"

    def test_invalid(self):
        assert normalize_color("var(--text-accent)") is None
        assert normalize_color("#12") is None
        assert normalize_color("rgb(300, 0, 0)") is None
        assert normalize_color(None) is None
        assert normalize_color(42) is None

    def test_rgb_to_hex(self):
        assert rgb_to_hex((0, 128, 255)) == "0080FF"
        assert rgb_to_hex((0, 0)) is None
