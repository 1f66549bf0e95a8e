"""Error boundary for CLI entry points.

Queries report their own errors inline; this only catches the predictable
failures of the CLI layer itself (unusable options, unreadable --args) and
prints them without a stack trace.
"""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

from svk_registry.output import user_output

# Other OSErrors keep their traceback
HANDLED_ERRORS = (FileNotFoundError, PermissionError, ValueError)

T = TypeVar("T", bound=Callable[..., Any])


def cli_error_boundary(func: T) -> T:
    """Print ``Error: <message>`` on stderr and exit 1 for well-known failures.

    Anything outside HANDLED_ERRORS propagates with its stack trace.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except HANDLED_ERRORS as e:
            user_output(f"Error: {e}")
            raise SystemExit(1) from None

    return wrapper  # type: ignore[return-value]
