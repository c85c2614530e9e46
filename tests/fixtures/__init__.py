# Test fixtures
from .sample_changelogs import (
    SAMPLE_KAC_CHANGELOG,
    SAMPLE_KAC_NESTED,
    SAMPLE_KAC_CRLF,
    SAMPLE_KAC_NO_DATE,
    SAMPLE_KAC_BAD_DATE,
    SAMPLE_TRADITIONAL_CHANGES,
    SAMPLE_PLAIN_MARKDOWN,
    create_sample_changes,
)

__all__ = [
    "SAMPLE_KAC_CHANGELOG",
    "SAMPLE_KAC_NESTED",
    "SAMPLE_KAC_CRLF",
    "SAMPLE_KAC_NO_DATE",
    "SAMPLE_KAC_BAD_DATE",
    "SAMPLE_TRADITIONAL_CHANGES",
    "SAMPLE_PLAIN_MARKDOWN",
    "create_sample_changes",
]
