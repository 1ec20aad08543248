r"""Source location capture for failure attribution.

When a retried action finally gives up, the failure is attributed to the
line that started the retry loop rather than to the internals of this
package. ``capture_source_location`` walks the call stack to find that
line; callers may also build a ``SourceLocation`` explicitly.
"""

from __future__ import annotations

__all__ = ["SourceLocation", "capture_source_location"]

import inspect
from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """File and line a retry loop was started from.

    Attributes:
        file: Path of the source file.
        line: Line number (1-indexed).

    Example:
        ```pycon
        >>> from autoretry.core import SourceLocation
        >>> str(SourceLocation(file="tests/test_login.py", line=42))
        'tests/test_login.py:42'

        ```
    """

    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


def capture_source_location(stacklevel: int = 1) -> SourceLocation | None:
    """Capture the file and line of a caller.

    Args:
        stacklevel: How many frames to walk up from the function calling
            ``capture_source_location``. ``1`` returns the location of the
            direct caller of that function.

    Returns:
        The captured location, or ``None`` if the interpreter does not
        expose the requested frame.

    Raises:
        ValueError: If stacklevel is negative.

    Example:
        ```pycon
        >>> from autoretry.core import capture_source_location
        >>> def where():
        ...     return capture_source_location(stacklevel=0)
        ...
        >>> where().line > 0
        True

        ```
    """
    if stacklevel < 0:
        msg = f"stacklevel must be >= 0, got {stacklevel}"
        raise ValueError(msg)
    frame = inspect.currentframe()
    try:
        # skip this function's own frame
        for _ in range(stacklevel + 1):
            if frame is None:
                return None
            frame = frame.f_back
        if frame is None:
            return None
        return SourceLocation(file=frame.f_code.co_filename, line=frame.f_lineno)
    finally:
        del frame
