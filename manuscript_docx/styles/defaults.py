"""
Built-in manuscript style sheet.

Used when an export is run without a style sheet of its own. Font families
point at the ``--font-text-theme`` / ``--font-text-override`` variables so a
context can supply the book face; without one every style falls back to the
global font.
"""

from copy import deepcopy
from typing import Any, Dict

_TEXT_FONT = "var(--font-text-theme), var(--font-text-override)"

DEFAULT_STYLES: Dict[str, Any] = {
    "scale": "100%",
    "supertitle": {
        "name": "Supertitle",
        "type": "paragraph",
        "font-size": "11.5pt",
        "text-align": "center",
        "line-spacing": "14pt",
        "before-paragraph": "0pt",
        "after-paragraph": "18pt",
        "font-family": _TEXT_FONT,
        "font-variant": "Regular",
    },
    "title": {
        "name": "Title",
        "type": "paragraph",
        "font-size": "18pt",
        "text-align": "center",
        "line-spacing": "18pt",
        "before-paragraph": "0pt",
        "after-paragraph": "4pt",
        "font-family": _TEXT_FONT,
        "font-variant": "Regular",
    },
    "subtitle": {
        "name": "Subtitle",
        "type": "paragraph",
        "font-family": _TEXT_FONT,
        "font-variant": "Regular",
        "font-size": "14pt",
        "line-spacing": "18pt",
        "after-paragraph": "28pt",
        "text-align": "center",
    },
    "epigraph": {
        "name": "Epigraph",
        "type": "paragraph",
        "font-family": _TEXT_FONT,
        "font-variant": "Regular",
        "font-size": "11.5pt",
        "line-spacing": "16pt",
        "left-indent": "1in",
        "right-indent": "1in",
        "before-paragraph": "48pt",
        "after-paragraph": "56pt",
    },
    "body-first": {
        "name": "Body First",
        "type": "paragraph",
        "font-size": "11.5pt",
        "text-align": "left",
        "first-indent": "0in",
        "left-indent": "0in",
        "right-indent": "0in",
        "line-spacing": "16pt",
        "before-paragraph": "0pt",
        "after-paragraph": "0pt",
        "font-family": _TEXT_FONT,
        "font-variant": "Regular",
        "following-style": "body",
    },
    "body": {
        "name": "Body",
        "type": "paragraph",
        "font-size": "11.5pt",
        "text-align": "left",
        "first-indent": "0.3in",
        "left-indent": "0in",
        "right-indent": "0in",
        "line-spacing": "16pt",
        "before-paragraph": "0pt",
        "after-paragraph": "0pt",
        "font-family": _TEXT_FONT,
        "font-variant": "Regular",
    },
    "footnote": {
        "name": "Footnote",
        "type": "paragraph",
        "font-size": "7pt",
        "text-align": "left",
        "first-indent": "0in",
        "left-indent": "0in",
        "right-indent": "0in",
        "line-spacing": "9pt",
        "before-paragraph": "0pt",
        "after-paragraph": "0pt",
        "font-family": _TEXT_FONT,
        "font-variant": "Regular",
        "space-between-notes": "10pt",
        "format": "1, 2, 3, …",
        "numbering": "continuous",
    },
    # Character style for the footnote numeral; not a paragraph style
    "footnote-number": {
        "name": "Footnote Number",
        "type": "character",
        "font-weight": "bold",
        "font-family": _TEXT_FONT,
        "color": "var(--text-accent)",
        "font-size": "7pt",
        "line-spacing": "9pt",
    },
    "heading-1": {
        "name": "Heading 1",
        "type": "paragraph",
        "font-size": "11.5pt",
        "text-align": "left",
        "first-indent": "0in",
        "left-indent": "0in",
        "right-indent": "0in",
        "line-spacing": "28pt",
        "before-paragraph": "28pt",
        "after-paragraph": "14pt",
        "font-family": _TEXT_FONT,
        "font-variant": "Italic",
        "keep-with-next": True,
        "following-style": "body-first",
    },
    "heading-2": {
        "name": "Heading 2",
        "type": "paragraph",
        "font-size": "11.5pt",
        "text-align": "left",
        "first-indent": "0in",
        "left-indent": "0in",
        "right-indent": "0in",
        "line-spacing": "28pt",
        "before-paragraph": "28pt",
        "after-paragraph": "14pt",
        "font-family": _TEXT_FONT,
        "font-variant": "Regular",
        "capitalization": "small-caps",
        "character-spacing": "2%",
        "keep-with-next": True,
        "following-style": "body-first",
    },
    "heading-3": {
        "name": "Heading 3",
        "type": "paragraph",
        "font-size": "11.5pt",
        "text-align": "center",
        "first-indent": "0in",
        "left-indent": "0in",
        "right-indent": "0in",
        "line-spacing": "28pt",
        "before-paragraph": "28pt",
        "after-paragraph": "14pt",
        "font-family": _TEXT_FONT,
        "font-variant": "Regular",
        "keep-with-next": True,
        "following-style": "body-first",
    },
    "bullet": {
        "name": "Bullet",
        "type": "list",
        "defaults": {
            "list-type": "unordered",
            "marker": "•",
            "color": "inherit",
            "size": "100%",
            "align": "0pt",
            "marker-indent": "0in",
            "text-indent": "0.25in",
        },
    },
    "numbered": {
        "name": "Numbered",
        "type": "list",
        "defaults": {
            "list-type": "ordered",
            "marker": "decimal",
            "suffix": ".",
            "color": "inherit",
            "size": "100%",
            "align": "0pt",
            "marker-indent": "0in",
            "text-indent": "0.25in",
        },
    },
}


def get_default_styles() -> Dict[str, Any]:
    """Return a private copy of the built-in style sheet."""
    return deepcopy(DEFAULT_STYLES)
