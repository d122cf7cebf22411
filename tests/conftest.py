"""
Pytest configuration and shared fixtures for the test suite.

Provides sample combat log lines and helpers for writing temporary log
files used across the reader test modules.
"""

import pytest

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from combatlog.config.settings import ReaderSettings


@pytest.fixture
def sample_log_lines():
    """Sample combat log lines for testing."""
    return [
        "9/15/2025 21:30:21.462-4  COMBAT_LOG_VERSION,22,ADVANCED_LOG_ENABLED,1,BUILD_VERSION,11.2.0,PROJECT_ID,1",
        '9/15/2025 21:30:21.463-4  ZONE_CHANGE,2649,"Hallowfall",23',
        '9/15/2025 21:30:22.123-4  ENCOUNTER_START,2902,"Ulgrax the Devourer",16,20,2657',
        '9/15/2025 21:30:23.456-4  SPELL_DAMAGE,Player-1234,"Testplayer",0x512,0x0,Creature-5678,"Ulgrax the Devourer",0x10a28,0x0,1234,"Test Spell",0x1,5678',
        '9/15/2025 21:30:24.789-4  UNIT_DIED,nil,nil,0x0,0x0,Creature-5678,"Ulgrax the Devourer",0x10a28,0x0',
        '9/15/2025 21:30:25.000-4  ENCOUNTER_END,2902,"Ulgrax the Devourer",16,20,1,180000',
    ]


@pytest.fixture
def reader_settings():
    """Default reader settings, independent of the environment."""
    return ReaderSettings()


@pytest.fixture
def write_log(tmp_path):
    """Factory writing lines (or raw bytes) to a temporary combat log file."""

    def _write(lines=None, raw=None, name="WoWCombatLog.txt", terminator="\n"):
        path = tmp_path / name
        if raw is not None:
            path.write_bytes(raw)
        else:
            path.write_bytes("".join(line + terminator for line in lines).encode("utf-8"))
        return path

    return _write


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "cli: mark test as command-line interface related")


# Pytest collection configuration
def pytest_collection_modifyitems(config, items):
    """Modify collected test items with markers."""
    for item in items:
        if "test_cli" in item.fspath.basename:
            item.add_marker(pytest.mark.cli)

        if "test_reader" in item.fspath.basename:
            item.add_marker(pytest.mark.integration)
