"""
Unit Test Fixtures.

Fixtures for unit tests - ssh and the clock are always faked.
Unit tests should be fast and isolated, never spawning real processes.
"""

from unittest.mock import MagicMock

import pytest


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("sshstats.collector.cache.logger", mock_logger):
                # Test code that logs
                mock_logger.warning.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    return logger


# =============================================================================
# Clock Fixtures
# =============================================================================


class FakeClock:
    """Settable replacement for time.time."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    """A clock frozen at a fixed epoch time."""
    return FakeClock()
