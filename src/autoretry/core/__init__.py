r"""Core configuration shared by the retry controller.

This package contains the retry policy, its validation, and source
location capture used for failure attribution.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_FAIL_ON_EXHAUSTION",
    "DEFAULT_MAX_ATTEMPTS",
    "RetryPolicy",
    "SourceLocation",
    "capture_source_location",
    "validate_retry_params",
]

from autoretry.core.config import DEFAULT_FAIL_ON_EXHAUSTION, DEFAULT_MAX_ATTEMPTS, RetryPolicy
from autoretry.core.location import SourceLocation, capture_source_location
from autoretry.core.validation import validate_retry_params
