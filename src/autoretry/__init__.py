r"""autoretry - Bounded retries for flaky, timing-sensitive actions.

This package runs an action, checks whether it worked, and retries it
(optionally running reset steps in between) until the check passes or a
retry budget is exhausted. It is meant for test automation steps whose
success depends on state that becomes true asynchronously, such as a UI
that has not finished loading.

Key Features:
    - Bounded retry budget with an optional reset step between attempts
    - Hard failure or informational outcome when the budget runs out
    - Every attempt, check and reset reported as a named activity
    - Failures attributed to the line that started the retry loop
    - unittest integration through ``autoretry.testing.AutoRetryMixin``
    - Opt-in structured JSON logging of activities

Example:
    ```pycon
    >>> from autoretry import auto_retry
    >>> state = {"loaded": False}
    >>> def load():
    ...     state["loaded"] = True
    ...
    >>> outcome = auto_retry(
    ...     action=load,
    ...     success_check=lambda: state["loaded"],
    ...     description="Load page",
    ... )
    >>> outcome.attempts_used
    0

    ```
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_FAIL_ON_EXHAUSTION",
    "DEFAULT_MAX_ATTEMPTS",
    "BaseAssertionSink",
    "BaseReporter",
    "LoggingReporter",
    "RaisingAssertionSink",
    "RecordingReporter",
    "RetryController",
    "RetryExhaustedError",
    "RetryOutcome",
    "RetryPolicy",
    "SourceLocation",
    "__version__",
    "auto_retry",
]

from importlib.metadata import PackageNotFoundError, version

from autoretry.auto_retry import auto_retry
from autoretry.core import (
    DEFAULT_FAIL_ON_EXHAUSTION,
    DEFAULT_MAX_ATTEMPTS,
    RetryPolicy,
    SourceLocation,
)
from autoretry.exceptions import RetryExhaustedError
from autoretry.reporting import (
    BaseAssertionSink,
    BaseReporter,
    LoggingReporter,
    RaisingAssertionSink,
    RecordingReporter,
)
from autoretry.retry import RetryController, RetryOutcome

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
