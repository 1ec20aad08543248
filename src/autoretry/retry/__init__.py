r"""Retry package implementing the bounded retry loop.

Public API:
    - RetryController: Runs an action until its success check passes
    - RetryOutcome: Result of a retry loop
    - ActivityManager: Reports the phases of a retry loop
    - evaluate_success: Coerces a success check result to a boolean
"""

from __future__ import annotations

__all__ = ["ActivityManager", "RetryController", "RetryOutcome", "evaluate_success"]

from autoretry.retry.controller import RetryController, RetryOutcome, evaluate_success
from autoretry.retry.manager import ActivityManager
