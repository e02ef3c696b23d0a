"""
Dispatcher errors — the fatal, pre-execution failure kinds.

Every error here aborts the run before (or instead of) spawning any
child process. The core raises them; the dispatch use case turns them
into a result, and the CLI is the only place that prints the diagnostic
line and exits.

Diagnostic format::

    <ErrorKind>[ (<offending-variable-name>)]: <message>
"""

from __future__ import annotations

from pydantic import ValidationError


class DispatchError(Exception):
    """Base class for all dispatcher-level errors."""

    kind = "DispatchError"

    def __init__(self, message: str, env_var: str | None = None):
        super().__init__(message)
        self.message = message
        self.env_var = env_var

    def diagnostic(self) -> str:
        """Render the single-line diagnostic shown on stderr."""
        var = f" ({self.env_var})" if self.env_var else ""
        return f"{self.kind}{var}: {self.message}"


class InvocationError(DispatchError):
    """The package manager did not say how we were invoked."""

    kind = "InvocationError"


class TaskNotFound(DispatchError):
    """The requested task has no declared entry."""

    kind = "TaskNotFound"


class MalformedTask(DispatchError):
    """The declared entry is not an ordered list of valid variants."""

    kind = "MalformedTask"


class ConfigError(DispatchError):
    """Raised when the configuration file is missing or invalid."""

    kind = "ConfigError"


def summarize_validation_error(exc: ValidationError, default_loc: str = "value") -> str:
    """Flatten a Pydantic ValidationError into one diagnostic-friendly line."""
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or default_loc}: {err['msg']}"
        for err in exc.errors()
    )
