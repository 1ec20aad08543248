r"""Assertion sink implementations.

``RaisingAssertionSink`` turns a failed assertion into a
``RetryExhaustedError``, which pytest reports as a test failure.
``TestCaseAssertionSink`` routes the failure through a
``unittest.TestCase`` so it is recorded by unittest's own machinery.
"""

from __future__ import annotations

__all__ = ["RaisingAssertionSink", "TestCaseAssertionSink"]

import logging
from typing import TYPE_CHECKING

from autoretry.exceptions import RetryExhaustedError
from autoretry.reporting.base import BaseAssertionSink

if TYPE_CHECKING:
    import unittest

    from autoretry.core.location import SourceLocation

logger: logging.Logger = logging.getLogger(__name__)


class RaisingAssertionSink(BaseAssertionSink):
    """Assertion sink that raises ``RetryExhaustedError`` on failure.

    Example:
        ```pycon
        >>> from autoretry.reporting import RaisingAssertionSink
        >>> sink = RaisingAssertionSink()
        >>> sink.assert_true(True, "never raised")
        >>> sink.assert_true(False, "Auto Retry failed")
        Traceback (most recent call last):
            ...
        autoretry.exceptions.RetryExhaustedError: Auto Retry failed

        ```
    """

    def assert_true(
        self, condition: bool, message: str, location: SourceLocation | None = None
    ) -> None:
        if condition:
            return
        logger.error(f"{message} ({location})" if location is not None else message)
        raise RetryExhaustedError(message, location=location)


class TestCaseAssertionSink(BaseAssertionSink):
    """Assertion sink that fails a ``unittest.TestCase``.

    unittest has no way to attribute a failure to another line, so the
    location is appended to the message instead.

    Args:
        test_case: The test case whose ``assertTrue`` is called.
    """

    def __init__(self, test_case: unittest.TestCase) -> None:
        self.test_case = test_case

    def assert_true(
        self, condition: bool, message: str, location: SourceLocation | None = None
    ) -> None:
        if location is not None:
            message = f"{message} ({location})"
        self.test_case.assertTrue(condition, message)
