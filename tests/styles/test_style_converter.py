"""
Tests for StyleConverter.
"""

import pytest

from manuscript_docx.models.style import Alignment, LineRule
from manuscript_docx.styles import (
    DEFAULT_STYLES,
    StyleConverter,
    VariableContext,
    clean_font_stack,
    convert_styles,
    parse_scale_percent,
    resolve_variables,
)


def _style(result, style_id):
    return next(style for style in result.styles if style.id == style_id)


@pytest.mark.unit
class TestStyleConverter:
    """Style sheet conversion."""

    def test_body_lengths(self):
        result = convert_styles({
            "body": {"font-size": "18pt", "text-indent": "24pt", "margin-bottom": "7.5pt",
                     "text-align": "justify"},
        }, 100)

        body = _style(result, "BodyText")
        assert body.run.size == 36
        assert body.paragraph.indent.first_line == 480
        assert body.paragraph.spacing.after == 150
        assert body.paragraph.alignment is Alignment.JUSTIFIED

    def test_reserved_ids(self):
        result = convert_styles({
            "body": {"name": "Body"},
            "footnote": {"name": "Footnote"},
            "epigraph": {"name": "Epigraph"},
            "plain": {},
        })

        assert result.style_id_map == {
            "body": "BodyText",
            "footnote": "FootnoteText",
            "epigraph": "Epigraph",
            "plain": "plain",
        }
        assert _style(result, "BodyText").name == "Body"
        assert _style(result, "plain").name == "plain"

    def test_skips_metadata_lists_and_unknown_types(self):
        result = convert_styles({
            "scale": "100%",
            "footnote-symbol": "*",
            "bullet": {"type": "list"},
            "footnote-number": {"type": "pararaph"},
            "broken": "not a mapping",
            "body": {},
        })

        assert [style.id for style in result.styles] == ["BodyText"]
        assert set(result.style_id_map) == {"body"}

    def test_scale_halves_lengths(self):
        sheet = {"body": {"font-size": "12pt", "left-indent": "1in", "line-spacing": "20pt"}}
        full = _style(convert_styles(sheet, 100), "BodyText")
        half = _style(convert_styles(sheet, 50), "BodyText")

        assert half.run.size == full.run.size // 2 == 12
        assert half.paragraph.indent.left == 720
        assert half.paragraph.spacing.line == 200

    def test_sheet_scale_used_without_explicit_scale(self):
        result = convert_styles({"scale": "50%", "body": {"font-size": "12pt"}})
        assert _style(result, "BodyText").run.size == 12

    def test_explicit_percent_string_scale(self):
        result = convert_styles({"body": {"font-size": "12pt"}}, "50%")
        assert _style(result, "BodyText").run.size == 12

    @pytest.mark.parametrize("scale", [float("nan"), float("inf"), "big", -20, 0])
    def test_invalid_explicit_scale_uses_full_size(self, scale):
        result = convert_styles({"scale": "50%", "body": {"font-size": "12pt"}}, scale)
        assert _style(result, "BodyText").run.size == 24

    def test_line_spacing_rules(self):
        result = convert_styles({
            "exact": {"line-spacing": "16pt"},
            "multiple": {"line-height": 1.5},
            "string-multiple": {"line-height": "2"},
            "bogus": {"line-height": "normal"},
        })

        exact = _style(result, "exact").paragraph.spacing
        assert (exact.line, exact.line_rule) == (320, LineRule.EXACT)
        multiple = _style(result, "multiple").paragraph.spacing
        assert (multiple.line, multiple.line_rule) == (360, LineRule.AUTO)
        assert _style(result, "string-multiple").paragraph.spacing.line == 480
        assert _style(result, "bogus").paragraph.spacing.line is None

    def test_font_attributes_case_insensitive(self):
        result = convert_styles({
            "a": {"font-weight": "Bold"},
            "b": {"font-variant": "Italic"},
            "c": {"font-variant": "small-caps"},
            "d": {"capitalization": "small-caps", "font-variant": "Regular"},
        })

        assert _style(result, "a").run.bold
        assert _style(result, "b").run.italic
        assert _style(result, "c").run.small_caps
        assert _style(result, "d").run.small_caps
        assert not _style(result, "d").run.italic

    def test_colors(self):
        result = convert_styles({
            "a": {"color": "#336699"},
            "b": {"color": "navy-ish"},
            "c": {"color": "rgb(255, 0, 0)"},
        })

        assert _style(result, "a").run.color == "336699"
        assert _style(result, "b").run.color is None
        assert _style(result, "c").run.color == "FF0000"

    def test_indent_margin_plus_padding(self):
        result = convert_styles({
            "summed": {"margin-left": "10pt", "padding-left": "5pt", "margin-right": "1pt"},
            "explicit": {"left-indent": "1in", "margin-left": "10pt", "padding-left": "5pt"},
        })

        summed = _style(result, "summed").paragraph.indent
        assert summed.left == 300
        assert summed.right == 20
        assert _style(result, "explicit").paragraph.indent.left == 1440

    def test_negative_lengths_clamped(self):
        result = convert_styles({"body": {"text-indent": "-12pt", "font-size": "-3pt"}})
        body = _style(result, "BodyText")

        assert body.paragraph.indent.first_line == 0
        assert body.run.size == 0

    def test_following_style_and_based_on(self):
        result = convert_styles({
            "body": {"name": "Body"},
            "heading-1": {"name": "Heading 1", "following-style": "body-first", "based-on": "body"},
            "body-first": {"name": "Body First", "following-style": "body"},
            "orphan": {"following-style": "missing"},
        })

        heading = _style(result, "Heading 1")
        assert heading.next_style == "Body First"
        assert heading.based_on == "BodyText"
        assert _style(result, "Body First").next_style == "BodyText"
        assert _style(result, "orphan").next_style is None

    def test_character_spacing_percent_of_font_size(self):
        result = convert_styles({
            "h2": {"font-size": "11.5pt", "character-spacing": "2%"},
            "wide": {"character-spacing": "1pt"},
        })

        # 2% of 11.5pt = 0.23pt = 4.6 twips
        assert _style(result, "h2").run.character_spacing == 5
        assert _style(result, "wide").run.character_spacing == 20

    def test_document_defaults_and_fonts(self):
        result = convert_styles({"a": {"font-family": "Georgia"}, "b": {}}, global_font="Garamond")

        assert result.document_defaults.font == "Garamond"
        assert result.document_defaults.size == 24
        assert result.fonts == ["Garamond", "Georgia"]
        assert _style(result, "b").run.font == "Garamond"

    def test_em_uses_context_base_font_size(self):
        context = VariableContext(base_font_size=20)
        result = StyleConverter(context=context).convert_styles({"a": {"font-size": "1em"}})
        assert _style(result, "a").run.size == 30


@pytest.mark.unit
class TestFontResolution:
    """Font stacks and var() references."""

    def test_variable_with_invalid_first_token(self):
        context = VariableContext({"--font-text": '??, "Minion 3"'})
        result = convert_styles({"a": {"font-family": "var(--font-text)"}}, global_font="Arial",
                                context=context)
        assert _style(result, "a").run.font == "Minion 3"

    def test_plain_stack(self):
        result = convert_styles({"a": {"font-family": '"Times New Roman", Arial'}})
        assert _style(result, "a").run.font == "Times New Roman"

    def test_unresolved_variables_fall_back_to_global_font(self):
        result = convert_styles({"a": {"font-family": "var(--font-text-theme), var(--font-text-override)"}},
                                global_font="Minion 3")
        assert _style(result, "a").run.font == "Minion 3"

    def test_unresolved_variable_skips_to_next_token(self):
        result = convert_styles({"a": {"font-family": "var(--missing), Georgia"}})
        assert _style(result, "a").run.font == "Georgia"

    def test_nested_variables_and_fallback(self):
        context = VariableContext({"font-body": "var(--font-book)", "font-book": "Garamond"})

        assert resolve_variables("var(--font-body)", context) == "Garamond"
        assert resolve_variables("var(--nope, Baskerville)", context) == "Baskerville"
        assert resolve_variables("var(--nope, var(--font-book))", context) == "Garamond"

    def test_variable_cycle_is_dropped(self):
        context = VariableContext({"a": "var(--b)", "b": "var(--a)"})
        assert resolve_variables("var(--a)", context) == ""

    def test_clean_font_stack(self):
        assert clean_font_stack("'undefined', ??, 'EB Garamond', serif") == "EB Garamond"
        assert clean_font_stack(" , ??") is None
        assert clean_font_stack(None) is None


@pytest.mark.unit
class TestScaleAndDefaults:
    """Scale metadata and the built-in sheet."""

    def test_parse_scale_percent(self):
        assert parse_scale_percent("100%") == 100
        assert parse_scale_percent("85") == 85
        assert parse_scale_percent(1.0) == 100
        assert parse_scale_percent(0.5) == 50
        assert parse_scale_percent("abc") == 100
        assert parse_scale_percent(None) == 100

    def test_default_styles_convert(self):
        result = convert_styles(DEFAULT_STYLES, global_font="Minion 3")

        ids = [style.id for style in result.styles]
        assert "BodyText" in ids
        assert "FootnoteText" in ids
        assert "Bullet" not in ids
        assert "Footnote Number" not in ids

        body_first = _style(result, "Body First")
        assert body_first.next_style == "BodyText"
        assert body_first.run.size == 23
        assert body_first.paragraph.spacing.line == 320

        heading_2 = _style(result, "Heading 2")
        assert heading_2.run.small_caps
        assert heading_2.paragraph.keep_next
        assert _style(result, "Heading 1").run.italic
        assert _style(result, "Body").paragraph.indent.first_line == 432
