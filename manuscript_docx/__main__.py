"""
Entry point for running manuscript_docx as a module.

Usage:
    python -m manuscript_docx export document.json --styles styles.yaml -o out.docx
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
