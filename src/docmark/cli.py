"""Command-line interface for docmark.

Usage::

    docmark post.json                     # writes post.md
    docmark post.md                       # writes post.json (editor JSON)
    docmark post.md -t html --theme dark  # writes post.html
    docmark post.md --check               # list constructs that will be simplified
    docmark post.json --stats             # word count, reading time, ...
    docmark --list-themes                 # list available HTML themes
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from docmark import __version__
from docmark.checks import check_document, check_markdown
from docmark.codec import DocumentCodec
from docmark.content import content_stats
from docmark.html_renderer import HtmlRenderer
from docmark.nodes import DocumentNode
from docmark.themes import ThemeManager

logger = logging.getLogger(__name__)

_SUFFIXES = {"markdown": ".md", "json": ".json", "html": ".html"}
_HANDLER_NAME = "docmark-cli"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Send docmark log records to stderr; ``verbose`` enables DEBUG output.

    Only the ``docmark`` package logger is touched.  A handler added by an
    earlier call is replaced; handlers owned by anyone else are left alone.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    package_logger = logging.getLogger("docmark")
    package_logger.setLevel(level)
    for existing in list(package_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(existing)
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    package_logger.addHandler(handler)
    return package_logger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docmark",
        description="Convert editor documents (JSON) to Markdown and back.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Editor JSON (.json) or Markdown file.",
    )
    parser.add_argument(
        "-o", "--output",
        help="Output file path. Defaults to <input> with the target's suffix.",
    )
    parser.add_argument(
        "-t", "--to",
        choices=list(_SUFFIXES),
        help="Target format (default: markdown for JSON input, json otherwise).",
    )
    parser.add_argument(
        "--theme",
        default="default",
        choices=ThemeManager.PRESETS,
        help="HTML theme preset (default: %(default)s).",
    )
    parser.add_argument(
        "-e", "--encoding",
        default="utf-8",
        help="Input file encoding (default: %(default)s).",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print content statistics instead of converting.",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Print constructs the conversion will simplify and exit.",
    )
    parser.add_argument(
        "--list-themes",
        action="store_true",
        help="List available HTML theme presets and exit.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print progress information.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _load_document(raw: str) -> DocumentNode:
    data = json.loads(raw)
    node = DocumentNode.from_dict(data)
    if node is None:
        raise ValueError("JSON input must be an object with a 'type' field")
    return node


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.list_themes:
        print("Available themes:")
        for preset in ThemeManager.PRESETS:
            print(f"  - {preset}")
        return 0

    if not args.input:
        parser.error("the following argument is required: input")

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"Error: file not found: {input_path}", file=sys.stderr)
        return 1

    from_json = input_path.suffix.lower() == ".json"
    codec = DocumentCodec()

    try:
        raw = input_path.read_text(encoding=args.encoding)
        if from_json:
            document = _load_document(raw)
        else:
            document = codec.decode(raw)

        if args.check:
            findings = check_document(document) if from_json else check_markdown(raw)
            for finding in findings:
                print(f"{finding.kind}: {finding.message}")
            if not findings:
                print("No lossy constructs found.")
            return 0

        if args.stats:
            stats = content_stats(document)
            print(f"Words:        {stats.word_count}")
            print(f"Characters:   {stats.character_count}")
            print(f"Reading time: {stats.reading_time} min")
            print(f"Paragraphs:   {stats.paragraph_count}")
            print(f"Headings:     {stats.heading_count}")
            return 0

        target = args.to or ("markdown" if from_json else "json")
        if target == "markdown":
            output = codec.encode(document)
        elif target == "json":
            output = json.dumps(document.to_dict(), ensure_ascii=False, indent=2)
        else:
            output = HtmlRenderer(ThemeManager(args.theme)).render(document)
    except (OSError, ValueError) as exc:
        # json.JSONDecodeError and UnicodeDecodeError are ValueErrors.
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    output_path = Path(args.output) if args.output else input_path.with_suffix(_SUFFIXES[target])
    if output_path.resolve() == input_path.resolve():
        print(f"Error: output would overwrite input: {output_path}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Input:  {input_path}")
        print(f"Output: {output_path}")
        print(f"Format: {target}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(output, encoding="utf-8")
    logger.debug("Wrote %d characters to %s", len(output), output_path)

    if args.verbose:
        print(f"Done. {output_path.stat().st_size} bytes written.")
    else:
        print(f"Converted: {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
