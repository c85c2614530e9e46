# Changes Engine Module
from .changes import Changes, Release, Group, Entry
from .spec_parser import ChangesSpecParser, ParseError
from .keepachangelog import KeepAChangelogParser, classify_line, kac_to_spec, parse

__version__ = "1.0.0"

__all__ = [
    "Changes",
    "Release",
    "Group",
    "Entry",
    "ChangesSpecParser",
    "ParseError",
    "KeepAChangelogParser",
    "classify_line",
    "kac_to_spec",
    "parse",
]
