"""
Parser for changelog text in the generic line grammar.

The grammar is the one used by CPAN-style ``Changes`` files::

    Preamble text

    1.01 2024-02-01
      [Fixed]
      - Crash on empty input
        - nested detail

    1.00 2024-01-01
      - Initial release
"""

import logging
import re
from typing import Optional

from .changes import Changes, Entry, Group, Release

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Raised when changelog text cannot be parsed."""
    pass


class ChangesSpecParser:
    """
    Parses generic-grammar changelog text into a Changes object.

    Releases are returned oldest to newest whatever order the document
    lists them in.
    """

    VERSION_PATTERN = r"v?[0-9][0-9A-Za-z._+-]*"
    DATE_PATTERN = (
        r"\d{4}-\d{2}-\d{2}(?:[T ]\d{2}:\d{2}(?::\d{2})?(?:Z|[+-]\d{2}:?\d{2})?)?"
        r"|Unknown|Not Released"
    )

    PATTERNS = {
        "group": re.compile(r"^\s*\[(?P<name>[^\]]+)\]\s*$"),
        "entry": re.compile(r"^(?P<indent>\s*)[-*+]\s+(?P<text>.*)$"),
    }

    def __init__(self, version_like: Optional[re.Pattern] = None):
        """
        Initialize the parser.

        Args:
            version_like: Additional pattern accepted as a release version,
                on top of the usual numeric version tokens.
        """
        self.version_like = version_like
        self.release_pattern = self._build_release_pattern(version_like)

    def parse_string(self, text: str) -> Changes:
        """
        Parse changelog text.

        Args:
            text: The changelog in the generic grammar.

        Returns:
            Parsed Changes object.

        Raises:
            ParseError: If the text is empty or holds no release line.
        """
        if text is None or not text.strip():
            raise ParseError("Empty changelog content")

        preamble_lines: list[str] = []
        releases: list[Release] = []
        release: Optional[Release] = None
        group: Optional[Group] = None
        # Open entries as (indent width, entry), innermost last
        stack: list[tuple[int, Entry]] = []

        for raw_line in text.split("\n"):
            line = raw_line.rstrip("\r")

            match = self.release_pattern.match(line)
            if match:
                release = Release(
                    version=match.group("version"),
                    date=match.group("date"),
                    note=match.group("note") or None,
                )
                releases.append(release)
                group = None
                stack = []
                continue

            if release is None:
                preamble_lines.append(line)
                continue

            if not line.strip():
                continue

            match = self.PATTERNS["group"].match(line)
            if match:
                group = release.add_group(match.group("name").strip())
                stack = []
                continue

            if group is None:
                group = release.add_group("")

            match = self.PATTERNS["entry"].match(line)
            if match:
                width = len(match.group("indent"))
                while stack and stack[-1][0] >= width:
                    stack.pop()
                parent = stack[-1][1] if stack else group
                entry = parent.add_entry(match.group("text").strip())
                stack.append((width, entry))
                continue

            width = len(line) - len(line.lstrip())
            if stack and width > stack[-1][0]:
                entry = stack[-1][1]
                entry.text = f"{entry.text} {line.strip()}".strip()
                continue

            # Unmarked change text
            stack = [(width, group.add_entry(line.strip()))]

        if not releases:
            raise ParseError("No release line found in changelog content")

        if not self._is_ascending(releases):
            releases.reverse()

        logger.debug("Parsed %d release(s)", len(releases))
        return Changes(preamble="\n".join(preamble_lines).strip(), releases=releases)

    def _build_release_pattern(self, version_like: Optional[re.Pattern]) -> re.Pattern:
        """Compile the release line pattern, folding in any extra version pattern."""
        version = self.VERSION_PATTERN
        if version_like is not None:
            extra = version_like.pattern
            if version_like.flags & re.IGNORECASE:
                extra = f"(?i:{extra})"
            version = f"{extra}|{version}"
        return re.compile(
            rf"^(?P<version>{version})\s+(?P<date>{self.DATE_PATTERN})"
            rf"(?:\s+(?P<note>.*?))?\s*$"
        )

    @staticmethod
    def _is_ascending(releases: list[Release]) -> bool:
        """Whether the document already lists releases oldest first."""
        if len(releases) < 2:
            return True
        first, last = releases[0], releases[-1]
        if not (first.is_released() and last.is_released()):
            return False
        return first.date[:10] < last.date[:10]
