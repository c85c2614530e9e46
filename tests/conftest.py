"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path
import pytest

# Add the project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.changes_engine.keepachangelog import KeepAChangelogParser
from src.changes_engine.spec_parser import ChangesSpecParser
from tests.fixtures.sample_changelogs import (
    SAMPLE_KAC_CHANGELOG,
    SAMPLE_KAC_NESTED,
    SAMPLE_TRADITIONAL_CHANGES,
    create_sample_changes,
)


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "integration: mark as integration test")


# ============================================================================
# Parser Fixtures
# ============================================================================


@pytest.fixture
def kac_parser():
    """Create a Keep a Changelog parser with the default spec parser."""
    return KeepAChangelogParser()


@pytest.fixture
def spec_parser():
    """Create a plain spec parser without extra version tokens."""
    return ChangesSpecParser()


class RecordingSpecParser:
    """Spec parser stand-in that records what it was handed."""

    def __init__(self, result=None, error=None):
        self.calls = []
        self.result = result
        self.error = error

    def parse_string(self, text):
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def recording_spec_parser():
    """Create a recording spec parser that returns a sentinel object."""
    return RecordingSpecParser(result=object())


# ============================================================================
# Content Fixtures
# ============================================================================


@pytest.fixture
def kac_content():
    """Sample Keep a Changelog document."""
    return SAMPLE_KAC_CHANGELOG


@pytest.fixture
def nested_kac_content():
    """Keep a Changelog document with nested bullets."""
    return SAMPLE_KAC_NESTED


@pytest.fixture
def traditional_content():
    """Traditional revision history document."""
    return SAMPLE_TRADITIONAL_CHANGES


@pytest.fixture
def sample_changes():
    """Create a small parsed changelog."""
    return create_sample_changes()


# ============================================================================
# Temporary File Fixtures
# ============================================================================


@pytest.fixture
def temp_changelog_file(tmp_path, kac_content):
    """Create a temporary Keep a Changelog file."""
    file_path = tmp_path / "CHANGELOG.md"
    file_path.write_text(kac_content)
    return file_path


@pytest.fixture
def temp_traditional_file(tmp_path, traditional_content):
    """Create a temporary traditional Changes file."""
    file_path = tmp_path / "Changes"
    file_path.write_text(traditional_content)
    return file_path
