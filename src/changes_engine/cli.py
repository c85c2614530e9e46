#!/usr/bin/env python3
"""
Changes Engine CLI

Command-line interface for reading Keep a Changelog files.

Usage:
    python -m changes_engine CHANGELOG.md
    python -m changes_engine CHANGELOG.md --spec      # print the rewritten text
    python -m changes_engine CHANGELOG.md --json      # print the parsed structure
    python -m changes_engine a/CHANGELOG.md b/CHANGELOG.md

Options:
    --spec               Print the generic-grammar text instead of a summary
    --json               Print the parsed changelog as JSON
    -v, --verbose        Enable debug logging
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .changes import Changes
from .keepachangelog import KeepAChangelogParser
from .spec_parser import ParseError


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="changes-engine",
        description=(
            "Keep a Changelog reader\n\n"
            "Recognizes Keep a Changelog markdown files and converts them\n"
            "into the generic Changes grammar or a parsed structure."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  changes-engine CHANGELOG.md\n"
            "  changes-engine CHANGELOG.md --spec\n"
            "  changes-engine CHANGELOG.md --json > changes.json\n"
        ),
    )

    parser.add_argument(
        "files",
        nargs="+",
        help="Changelog files to read",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--spec",
        action="store_true",
        help="Print the rewritten generic-grammar text",
    )
    output.add_argument(
        "--json",
        action="store_true",
        help="Print the parsed changelog as JSON",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    kac = KeepAChangelogParser()
    error_count = 0

    for file_name in args.files:
        try:
            document = Path(file_name).read_text(encoding="utf-8", errors="replace")
            if args.spec:
                text = kac.transform(document)
                if text is None:
                    raise ValueError("not a Keep a Changelog document")
                print(text)
                continue

            changes = kac.parse(document)
            if changes is None:
                raise ValueError("not a Keep a Changelog document")
        except (OSError, ValueError, ParseError) as e:
            print(f"[ERROR] {file_name}: {e}", file=sys.stderr)
            error_count += 1
            continue

        if args.json:
            print(json.dumps(changes.to_dict(), indent=2))
        else:
            _show_summary(file_name, changes)

    if error_count:
        sys.exit(1)


def _show_summary(file_name: str, changes: Changes):
    """Display the releases of a parsed changelog, newest first."""
    print(f"\n{file_name}")
    print("-" * 40)
    for release in reversed(changes.releases):
        count = sum(len(group.entries) for group in release.groups)
        print(f"  {release.version:<16} {release.date:<14} {count} entries")
    print()


if __name__ == "__main__":
    main()
