"""
Core changelog data structures produced by the spec parser.
"""

import re
from dataclasses import dataclass, field
from typing import Optional


# Tokens the generic grammar accepts in place of a calendar date
UNKNOWN_DATE = "Unknown"
UNRELEASED_DATE = "Not Released"

CALENDAR_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}")


@dataclass
class Entry:
    """A single change line, optionally carrying nested sub-entries."""
    text: str
    entries: list["Entry"] = field(default_factory=list)

    def add_entry(self, text: str) -> "Entry":
        entry = Entry(text=text)
        self.entries.append(entry)
        return entry

    def to_dict(self) -> dict:
        data = {"text": self.text}
        if self.entries:
            data["entries"] = [entry.to_dict() for entry in self.entries]
        return data


@dataclass
class Group:
    """A named group of entries inside a release. The default group has no name."""
    name: str = ""
    entries: list[Entry] = field(default_factory=list)

    def add_entry(self, text: str) -> Entry:
        entry = Entry(text=text)
        self.entries.append(entry)
        return entry

    def is_default(self) -> bool:
        return self.name == ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "entries": [entry.to_dict() for entry in self.entries],
        }


@dataclass
class Release:
    """
    Represents a single release of the changelog.

    The date is either a YYYY-MM-DD timestamp or one of the placeholder
    tokens "Unknown" and "Not Released".
    """
    version: str
    date: str = UNKNOWN_DATE
    note: Optional[str] = None
    groups: list[Group] = field(default_factory=list)

    def __post_init__(self):
        if not self.version or not self.version.strip():
            raise ValueError("Release version cannot be empty")
        if not self.date or not self.date.strip():
            raise ValueError(f"Release {self.version} has an empty date")

    def is_released(self) -> bool:
        """Check whether the release carries a real calendar date."""
        return bool(CALENDAR_DATE.match(self.date))

    def find_group(self, name: str) -> Optional[Group]:
        for group in self.groups:
            if group.name == name:
                return group
        return None

    def add_group(self, name: str = "") -> Group:
        """Return the group with this name, creating it if needed."""
        group = self.find_group(name)
        if group is None:
            group = Group(name=name)
            self.groups.append(group)
        return group

    def entries(self) -> list[Entry]:
        """All top-level entries across every group, in document order."""
        return [entry for group in self.groups for entry in group.entries]

    def to_dict(self) -> dict:
        data = {
            "version": self.version,
            "date": self.date,
            "groups": [group.to_dict() for group in self.groups],
        }
        if self.note:
            data["note"] = self.note
        return data


@dataclass
class Changes:
    """
    A parsed changelog: free preamble text followed by releases.

    Releases are kept oldest to newest.
    """
    preamble: str = ""
    releases: list[Release] = field(default_factory=list)

    def find_release(self, version: str) -> Optional[Release]:
        for release in self.releases:
            if release.version == version:
                return release
        return None

    def latest_release(self) -> Optional[Release]:
        return self.releases[-1] if self.releases else None

    def versions(self) -> list[str]:
        return [release.version for release in self.releases]

    def serialize(self) -> str:
        """
        Render the changelog back into the generic line grammar.

        Releases are written newest first, the conventional layout of a
        Changes file.

        Returns:
            The changelog text, terminated by a newline.
        """
        lines = []
        if self.preamble:
            lines.extend(self.preamble.split("\n"))
            lines.append("")

        for release in reversed(self.releases):
            header = f"{release.version} {release.date}"
            if release.note:
                header += f" {release.note}"
            lines.append(header)

            for group in release.groups:
                indent = "  "
                if not group.is_default():
                    lines.append(f"  [{group.name}]")
                    indent = "    "
                for entry in group.entries:
                    _serialize_entry(entry, indent, lines)
            lines.append("")

        return "\n".join(lines).rstrip("\n") + "\n"

    def to_dict(self) -> dict:
        return {
            "preamble": self.preamble,
            "releases": [release.to_dict() for release in self.releases],
        }


def _serialize_entry(entry: Entry, indent: str, lines: list[str]) -> None:
    lines.append(f"{indent}- {entry.text}")
    for child in entry.entries:
        _serialize_entry(child, indent + "  ", lines)
