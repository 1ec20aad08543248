r"""Reporting boundary of the retry controller.

Public API:
    - BaseReporter: Interface for named activity reporting
    - BaseAssertionSink: Interface for the final hard-failure assertion
    - LoggingReporter: Reporter writing activities to ``logging``
    - RecordingReporter: Reporter keeping activities in memory
    - ActivityRecord: One activity seen by a RecordingReporter
    - RaisingAssertionSink: Sink raising RetryExhaustedError
    - TestCaseAssertionSink: Sink failing a unittest.TestCase
"""

from __future__ import annotations

__all__ = [
    "ActivityRecord",
    "BaseAssertionSink",
    "BaseReporter",
    "LoggingReporter",
    "RaisingAssertionSink",
    "RecordingReporter",
    "TestCaseAssertionSink",
]

from autoretry.reporting.base import BaseAssertionSink, BaseReporter
from autoretry.reporting.reporter import ActivityRecord, LoggingReporter, RecordingReporter
from autoretry.reporting.sink import RaisingAssertionSink, TestCaseAssertionSink
