"""
Pytest configuration for manuscript_docx
"""

import pytest
import logging
import sys
from pathlib import Path


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid handler leaks between tests."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests

    formatter = logging.Formatter(
        '%(name)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    import tempfile
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def sample_styles():
    """Small style sheet covering body, first paragraph, headings and footnotes."""
    return {
        "scale": "100%",
        "body": {
            "name": "Body",
            "type": "paragraph",
            "font-family": '"Times New Roman", serif',
            "font-size": "12pt",
            "text-indent": "0.3in",
            "line-spacing": "16pt",
            "text-align": "justify",
        },
        "body-first": {
            "name": "Body First",
            "font-family": "Georgia",
            "font-size": "12pt",
            "following-style": "body",
        },
        "heading-1": {
            "name": "Heading 1",
            "type": "heading",
            "font-size": "18pt",
            "font-weight": "bold",
            "before-paragraph": "24pt",
            "after-paragraph": "12pt",
            "keep-with-next": True,
            "following-style": "body-first",
        },
        "footnote": {
            "name": "Footnote",
            "type": "footnote",
            "font-size": "9pt",
        },
        "bullet": {
            "name": "Bullet",
            "type": "list",
        },
    }


@pytest.fixture
def sample_document():
    """Editor document tree with a heading, styled text, a break and footnotes."""
    return {
        "type": "doc",
        "content": [
            {
                "type": "heading",
                "attrs": {"level": 1},
                "content": [{"type": "text", "text": "Chapter One"}],
            },
            {
                "type": "paragraph",
                "attrs": {"class": "body-first"},
                "content": [
                    {"type": "text", "text": "It was "},
                    {"type": "text", "text": "dark", "marks": [{"type": "italic"}]},
                    {"type": "footnote", "attrs": {"id": "fn-a"}},
                    {"type": "hard_break"},
                    {"type": "text", "text": "and stormy & cold."},
                ],
            },
            {
                "type": "paragraph",
                "content": [
                    {"type": "text", "text": "Again"},
                    {"type": "footnote", "attrs": {"id": "fn-b"}},
                    {"type": "text", "text": " and again"},
                    {"type": "footnote", "attrs": {"id": "fn-a"}},
                ],
            },
            {"type": "bulletList", "content": []},
        ],
    }


@pytest.fixture
def sample_footnotes():
    """Footnote store data: plain text and a nested document."""
    return {
        "fn-a": "A plain footnote.",
        "fn-b": {
            "type": "doc",
            "content": [
                {"type": "paragraph", "content": [{"type": "text", "text": "Nested note"}]},
                {"type": "paragraph", "content": [{"type": "text", "text": "Second paragraph"}]},
            ],
        },
    }


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "e2e: marks tests as end-to-end tests"
    )
