"""
Keep a Changelog support.

Recognizes changelogs written in the Keep a Changelog markdown dialect and
rewrites them, line by line, into the generic changelog grammar understood
by the spec parser.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Protocol, Union

from .changes import UNKNOWN_DATE, UNRELEASED_DATE, Changes
from .spec_parser import ChangesSpecParser

logger = logging.getLogger(__name__)


class SpecParser(Protocol):
    """Anything that turns generic-grammar text into a Changes object."""

    def parse_string(self, text: str) -> Optional[Changes]:
        ...


# Classified line shapes, one per kind of Keep a Changelog line


@dataclass(frozen=True)
class ReleaseHeading:
    """``## [1.0.0] - 2024-01-01``, ``## [1.0.0]`` or ``## [Unreleased]``."""
    version: str
    date: Optional[str] = None

    def is_unreleased(self) -> bool:
        return self.version.lower() == "unreleased"

    def render(self) -> Optional[str]:
        if self.is_unreleased():
            return f"Unreleased {UNRELEASED_DATE}"
        return f"{self.version} {self.date or UNKNOWN_DATE}"


@dataclass(frozen=True)
class CategoryHeading:
    """``### Added``"""
    name: str

    def render(self) -> Optional[str]:
        return f"[{self.name}]"


@dataclass(frozen=True)
class LinkReferenceDefinition:
    """``[1.0.0]: https://example.com/compare/v0.9.0...v1.0.0``, dropped from output."""

    def render(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class TitleLine:
    """``# Changelog``, kept as preamble text."""
    text: str

    def render(self) -> Optional[str]:
        return self.text


@dataclass(frozen=True)
class BulletLine:
    indent: str
    text: str

    def render(self) -> Optional[str]:
        return f"{self.indent}- {self.text}"


@dataclass(frozen=True)
class OpaqueLine:
    text: str

    def render(self) -> Optional[str]:
        return self.text


ClassifiedLine = Union[
    ReleaseHeading,
    CategoryHeading,
    LinkReferenceDefinition,
    TitleLine,
    BulletLine,
    OpaqueLine,
]


# Patterns in classification priority order
PATTERNS = {
    "link_reference": re.compile(r"^\s*\[[^\]]+\]:\s+\S+"),
    "release": re.compile(
        r"^\s*##\s+\[\s*([^\]\s][^\]]*?)\s*\]\s*(?:-\s*([0-9]{4}-[0-9]{2}-[0-9]{2}))?\s*$"
    ),
    "category": re.compile(r"^\s*###\s+(\S.*?)\s*$"),
    "title": re.compile(r"^\s*#\s+(\S.*?)\s*$"),
    "bullet": re.compile(r"^(\s*)[*-]\s+(.*)$"),
}

# Cheap gate: anything that looks like a release heading at all
RELEASE_GATE = re.compile(r"^\s*##\s+\[(?:Unreleased|[^\]]+)\]", re.IGNORECASE)

# A release line as it must appear after rewriting, starting at column 0
SPEC_RELEASE_LINE = re.compile(
    r"^(?:Unreleased|[0-9A-Za-z_.]+)[ \t]+(?:\d{4}-\d{2}-\d{2}|Unknown|Not Released)(?=\s|$)",
    re.MULTILINE,
)


def classify_line(line: str) -> ClassifiedLine:
    """
    Classify a single line of a Keep a Changelog document.

    Every line maps to exactly one shape; the first matching pattern wins.
    A trailing carriage return is ignored.
    """
    if line.endswith("\r"):
        line = line[:-1]

    if PATTERNS["link_reference"].match(line):
        return LinkReferenceDefinition()

    match = PATTERNS["release"].match(line)
    if match:
        return ReleaseHeading(version=match.group(1), date=match.group(2))

    match = PATTERNS["category"].match(line)
    if match:
        return CategoryHeading(name=match.group(1).strip())

    match = PATTERNS["title"].match(line)
    if match:
        return TitleLine(text=match.group(1))

    match = PATTERNS["bullet"].match(line)
    if match:
        return BulletLine(indent=match.group(1), text=match.group(2))

    return OpaqueLine(text=line)


def looks_like_keepachangelog(document: str) -> bool:
    """Check whether any line of the document resembles a release heading."""
    return any(RELEASE_GATE.match(line) for line in document.split("\n"))


def kac_to_spec(document: Optional[str]) -> Optional[str]:
    """
    Rewrite a Keep a Changelog document into the generic changelog grammar.

    Args:
        document: The full markdown text.

    Returns:
        The rewritten text, or None if the document is not recognized.
    """
    if document is None:
        return None

    if not looks_like_keepachangelog(document):
        logger.debug("Rejected: no release heading")
        return None

    output: list[str] = []
    saw_release = False

    for line in document.split("\n"):
        classified = classify_line(line)
        if isinstance(classified, ReleaseHeading):
            saw_release = True
        rendered = classified.render()
        if rendered is not None:
            output.append(rendered)

    if not saw_release:
        logger.debug("Rejected: no well-formed release heading")
        return None

    transformed = "\n".join(output)
    if not SPEC_RELEASE_LINE.search(transformed):
        logger.debug("Rejected: no release line survived the rewrite")
        return None

    return transformed


class KeepAChangelogParser:
    """
    Parses Keep a Changelog documents into Changes objects.

    The markdown is rewritten into the generic grammar and handed to a
    spec parser. Documents that do not look like Keep a Changelog give
    None rather than an error.
    """

    # Every version token the release-line check lets through
    VERSION_LIKE = re.compile(r"Unreleased|[0-9A-Za-z_.]\S*", re.IGNORECASE)

    def __init__(self, spec_parser: Optional[SpecParser] = None):
        """
        Initialize the parser.

        Args:
            spec_parser: Parser for the rewritten text. Defaults to a
                ChangesSpecParser that accepts "Unreleased" and any
                bracket label as a version.
        """
        self.spec_parser = spec_parser or ChangesSpecParser(
            version_like=self.VERSION_LIKE
        )

    def transform(self, document: Optional[str]) -> Optional[str]:
        """Rewrite the document without parsing it."""
        return kac_to_spec(document)

    def parse(self, document: Optional[str]) -> Optional[Changes]:
        """
        Parse a Keep a Changelog document.

        Args:
            document: The full markdown text.

        Returns:
            Whatever the spec parser returns, or None if the document
            is not recognized.

        Raises:
            ParseError: Propagated unchanged from the spec parser.
        """
        transformed = self.transform(document)
        if transformed is None:
            return None
        return self.spec_parser.parse_string(transformed)


def parse(document: Optional[str]) -> Optional[Changes]:
    """Parse a Keep a Changelog document with the default spec parser."""
    return KeepAChangelogParser().parse(document)
