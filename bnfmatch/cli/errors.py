"""
Error handling for the bnfmatch CLI.

Engine errors (``BnfError``) already carry a code and a hint; this module
adds CLI-specific errors for bad arguments and a single formatter used for
everything printed to stderr.
"""

import traceback
from typing import Any, Dict, Optional

from bnfmatch.errors import BnfError

# Maximum length for traceback output in CLI
_CLI_TRACE_LIMIT = 4000

EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2


class CLIError(Exception):
    """
    Base exception for CLI operations.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code
        hint: Optional suggestion for resolving the error
        context: Additional metadata about the error
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.hint = hint
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class CLIValidationError(CLIError):
    """Invalid command arguments or options."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_VALIDATION_ERROR')
        super().__init__(message, **kwargs)


def format_cli_error(
    exc: BaseException,
    *,
    verbose: bool = False,
    include_traceback: bool = False
) -> str:
    """
    Format an exception for CLI display.

    Examples:
        >>> print(format_cli_error(CLIValidationError("Invalid depth", hint="Use a positive number")))
        Error [CLI_VALIDATION_ERROR]: Invalid depth
        Hint: Use a positive number
    """
    lines = []

    if isinstance(exc, (CLIError, BnfError)):
        message = str(exc) if isinstance(exc, BnfError) else exc.message
        lines.append(f"Error [{exc.code}]: {message}")
        if exc.hint:
            lines.append(f"Hint: {exc.hint}")
        if verbose and isinstance(exc, BnfError) and exc.path:
            lines.append(f"  file: {exc.path}")
        if verbose and isinstance(exc, CLIError):
            for key, value in exc.context.items():
                lines.append(f"  {key}: {value}")
    else:
        lines.append(f"Error: {exc.__class__.__name__}: {exc}")

    if include_traceback:
        lines.append("\nTraceback:")
        lines.append(format_traceback_excerpt())

    return "\n".join(lines)


def format_traceback_excerpt() -> str:
    """Current exception traceback, truncated to the CLI trace limit."""
    trace = traceback.format_exc().strip()
    if len(trace) <= _CLI_TRACE_LIMIT:
        return trace
    return f"{trace[:_CLI_TRACE_LIMIT - 3]}..."
