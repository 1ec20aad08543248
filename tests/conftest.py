from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import pytest

from autoretry.reporting import BaseAssertionSink, RecordingReporter
from autoretry.utils.structured_logging import clear_activity_path

if TYPE_CHECKING:
    from collections.abc import Generator


class Counter:
    """Mutable counter shared by the action and success check of a test."""

    def __init__(self, value: int = 0) -> None:
        self.value = value

    def increment(self) -> None:
        self.value += 1


@pytest.fixture
def counter() -> Counter:
    """Create a counter starting at 0."""
    return Counter()


@pytest.fixture
def recording_reporter() -> RecordingReporter:
    """Create a reporter that records activities in memory."""
    return RecordingReporter()


@pytest.fixture
def mock_sink() -> Mock:
    """Create a mock assertion sink that never raises."""
    return Mock(spec=BaseAssertionSink)


@pytest.fixture(autouse=True)
def _clean_activity_path() -> Generator[None, None, None]:
    """Make sure no test leaks an activity path into the next one."""
    clear_activity_path()
    yield
    clear_activity_path()
