r"""unittest integration.

Mix ``AutoRetryMixin`` into a ``unittest.TestCase`` to call
``self.auto_retry(...)`` from test methods. An exhausted budget then
fails the test through ``TestCase.assertTrue``.

Example:
    ```python
    import unittest

    from autoretry.testing import AutoRetryMixin


    class LaunchTest(AutoRetryMixin, unittest.TestCase):
        def test_launch(self):
            self.auto_retry(
                action=app.launch,
                success_check=lambda: app.is_running,
                reset=app.terminate,
                description="Launch app",
            )
    ```
"""

from __future__ import annotations

__all__ = ["AutoRetryMixin"]

from typing import TYPE_CHECKING

from autoretry.auto_retry import auto_retry
from autoretry.core.config import DEFAULT_FAIL_ON_EXHAUSTION, DEFAULT_MAX_ATTEMPTS
from autoretry.reporting.sink import TestCaseAssertionSink

if TYPE_CHECKING:
    from collections.abc import Callable

    from autoretry.core.location import SourceLocation
    from autoretry.reporting.base import BaseReporter
    from autoretry.retry.controller import RetryOutcome


class AutoRetryMixin:
    """Adds ``auto_retry`` to a ``unittest.TestCase``.

    Attributes:
        auto_retry_reporter: Reporter used by every ``auto_retry`` call of
            the test case. ``None`` uses a ``LoggingReporter``.
    """

    auto_retry_reporter: BaseReporter | None = None

    def auto_retry(
        self,
        action: Callable[[], object],
        success_check: Callable[[], bool | None],
        reset: Callable[[], object] | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        description: str | None = None,
        fail_on_exhaustion: bool = DEFAULT_FAIL_ON_EXHAUSTION,
        source_location: SourceLocation | None = None,
    ) -> RetryOutcome:
        """Run ``action`` until ``success_check`` passes, failing the test
        if it never does and ``fail_on_exhaustion`` is true.

        See ``autoretry.auto_retry`` for the meaning of the arguments.
        """
        return auto_retry(
            action=action,
            success_check=success_check,
            reset=reset,
            max_attempts=max_attempts,
            description=description,
            fail_on_exhaustion=fail_on_exhaustion,
            source_location=source_location,
            reporter=self.auto_retry_reporter,
            assertion_sink=TestCaseAssertionSink(self),
            stacklevel=2,
        )
