"""
Scripts configuration — the root of the declarative task table.

Loaded from the ``pkgscript`` section of package.json or from a
pkgscript.yml file. Task entries are kept raw here and validated when
a task is selected, so one broken task never blocks the others.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

# OS ids the "unix" platform alias expands to.
# Some older releases also listed "cygwin"; add it via unix_platforms if needed.
DEFAULT_UNIX_PLATFORMS: tuple[str, ...] = (
    "android",
    "darwin",
    "freebsd",
    "linux",
    "openbsd",
    "sunos",
)


class FailurePolicy(str, Enum):
    """What a failing variant does to the rest of the run."""

    IGNORE = "ignore"       # keep going, exit 0
    CONTINUE = "continue"   # keep going, exit with the first failing code
    ABORT = "abort"         # stop at the first failure, exit with its code


class ScriptsConfig(BaseModel):
    """The ``pkgscript`` configuration section."""

    scripts: dict[str, Any] = Field(default_factory=dict)
    posixlike: bool = False
    unix_platforms: list[str] = Field(default_factory=lambda: list(DEFAULT_UNIX_PLATFORMS))
    on_failure: FailurePolicy = FailurePolicy.IGNORE

    @field_validator("posixlike", mode="before")
    @classmethod
    def _present_means_true(cls, value: Any) -> bool:
        # only the flag's presence matters; booleans are kept as given
        return value if isinstance(value, bool) else True

    @field_validator("unix_platforms")
    @classmethod
    def _non_empty(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("unix_platforms must list at least one platform")
        return value

    def has_task(self, name: str) -> bool:
        return name in self.scripts

    @property
    def task_names(self) -> list[str]:
        """Declared task names, in declaration order."""
        return list(self.scripts.keys())
