r"""Logging utilities shared by the reporters."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_activity_path",
    "get_activity_path",
    "log_structured",
    "pop_activity",
    "push_activity",
]

from autoretry.utils.structured_logging import (
    StructuredFormatter,
    clear_activity_path,
    get_activity_path,
    log_structured,
    pop_activity,
    push_activity,
)
