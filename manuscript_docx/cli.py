"""
Command-line interface for manuscript_docx.

Usage:
    manuscript-docx export document.json --styles styles.yaml --output book.docx
    manuscript-docx export document.json --footnotes notes.json --page-size A4 --validate
    manuscript-docx validate book.docx --json
    manuscript-docx version
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .exceptions import ConfigurationError, ManuscriptDocxError
from .utils.logger import VALID_LEVELS, setup_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="manuscript-docx",
        description="Export structured manuscripts to Word (.docx)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  manuscript-docx export chapter.json --styles styles.yaml -o chapter.docx
  manuscript-docx export chapter.json --footnotes notes.json --margins 1,1,1.25,1.25
  manuscript-docx export chapter.json --var font-text-theme="EB Garamond"
  manuscript-docx validate chapter.docx
  manuscript-docx version
        """,
    )
    parser.add_argument(
        "--log-level",
        choices=VALID_LEVELS,
        type=str.upper,
        default="WARNING",
        help="Log level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    export_parser = subparsers.add_parser("export", help="Export a document tree to DOCX")
    export_parser.add_argument("input", help="Document tree JSON file")
    export_parser.add_argument("--styles", help="Style sheet (YAML or JSON); built-in styles when omitted")
    export_parser.add_argument("--footnotes", help="Footnotes JSON (mapping or list of {id, content})")
    export_parser.add_argument(
        "--page-size",
        choices=["Letter", "A4", "Legal"],
        default="Letter",
        help="Page size (default: Letter)"
    )
    export_parser.add_argument(
        "--margins",
        help="Margins in inches: one value or top,bottom,left,right (default: 1)"
    )
    export_parser.add_argument("--scale", type=float, help="Scale in percent (default: style sheet scale or 100)")
    export_parser.add_argument("--font", default=None, help="Global font (default: Minion 3)")
    export_parser.add_argument(
        "--var",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Style variable for var(--NAME) references; may be repeated"
    )
    export_parser.add_argument("--base-font-size", type=float, help="Base font size in px for em/rem (default: 16)")
    export_parser.add_argument("-o", "--output", help="Output file (default: input name with .docx)")
    export_parser.add_argument("--validate", action="store_true", help="Validate the written package")

    validate_parser = subparsers.add_parser("validate", help="Validate a DOCX package")
    validate_parser.add_argument("input", help="DOCX file")
    validate_parser.add_argument("--json", action="store_true", help="Output as JSON")

    subparsers.add_parser("version", help="Show version information")

    return parser


def _parse_variables(pairs: List[str]) -> dict:
    variables = {}
    for pair in pairs:
        if "=" not in pair:
            raise ConfigurationError("Variables must look like NAME=VALUE", pair)
        name, value = pair.split("=", 1)
        variables[name.strip()] = value.strip()
    return variables


def _print_issues(issues) -> None:
    for issue in issues:
        print(f"   {issue}")


def cmd_export(args) -> int:
    """Handle export command."""
    from .api import export_to_file
    from .config import ExportSettings, load_json, load_style_config, parse_margins
    from .styles.converter import DEFAULT_GLOBAL_FONT, VariableContext
    from .validator import PackageValidator

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    output_path = Path(args.output) if args.output else input_path.with_suffix(".docx")

    document = load_json(input_path)
    style_config = load_style_config(args.styles) if args.styles else None
    footnotes = load_json(args.footnotes) if args.footnotes else None

    settings = ExportSettings(page_size=args.page_size, scale=args.scale)
    if args.margins:
        settings.margins.update(parse_margins(args.margins))

    context = None
    if args.var or args.base_font_size:
        context = VariableContext(_parse_variables(args.var))
        if args.base_font_size:
            context.base_font_size = args.base_font_size

    print(f"📄 Exporting: {input_path}")
    written = export_to_file(
        document,
        output_path,
        style_config=style_config,
        footnote_store=footnotes,
        settings=settings,
        global_font=args.font or DEFAULT_GLOBAL_FONT,
        context=context,
    )
    print(f"✅ Saved: {written}")

    if args.validate:
        validator = PackageValidator(written)
        issues = validator.validate()
        _print_issues(issues)
        if not validator.is_valid:
            print("❌ Package is not valid", file=sys.stderr)
            return 1
        print("✅ Package is valid")

    return 0


def cmd_validate(args) -> int:
    """Handle validate command."""
    from .validator import PackageValidator

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    validator = PackageValidator(input_path)
    issues = validator.validate()

    if args.json:
        print(json.dumps({
            "file": str(input_path),
            "valid": validator.is_valid,
            "issues": [issue.to_dict() for issue in issues],
        }, indent=2, ensure_ascii=False))
    else:
        print(f"📄 File: {input_path}")
        _print_issues(issues)
        print("✅ Package is valid" if validator.is_valid else "❌ Package is not valid")

    return 0 if validator.is_valid else 1


def cmd_version(args=None) -> int:
    """Handle version command."""
    from .version import __version__
    print(f"manuscript-docx v{__version__}")
    print("Manuscript to Word (.docx) exporter")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    commands = {
        "export": cmd_export,
        "validate": cmd_validate,
        "version": cmd_version,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return 2

    try:
        return command(args)
    except ManuscriptDocxError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
