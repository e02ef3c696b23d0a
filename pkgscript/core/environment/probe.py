"""
Environment probe — derive the Fact set from process state.

The probe is the only code that looks at ``os.environ``, ``sys.platform``
and ``platform.machine()``. Everything is read once and frozen into a
``Facts`` instance; the matcher and shell resolver only ever see that.

All inputs can be injected, so tests can describe a Windows host with a
Git Bash session while running on Linux.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from collections.abc import Iterable, Mapping
from pathlib import PurePosixPath, PureWindowsPath

from pkgscript.core.environment.constants import (
    _ARCH_MAP,
    _VERSIONED_PLATFORMS,
    COMSPEC_VARS,
    DEFAULT_POSIX_SHELL,
    DEFAULT_WINDOWS_SHELL,
    DEFAULT_WINDOWS_SHELL_PATH,
    EXECUTABLE_SUFFIX,
    POSIX_SESSION_TYPES,
    POSIX_TERMINAL_TYPES,
    SCRIPT_SHELL_VAR,
    SESSION_TYPE_VAR,
    TERMINAL_TYPE_VAR,
    WINDOWS,
)
from pkgscript.core.models.config import DEFAULT_UNIX_PLATFORMS
from pkgscript.core.models.facts import Facts

logger = logging.getLogger(__name__)


def normalize_platform(platform_id: str) -> str:
    """Map a ``sys.platform`` value to the package manager's platform id.

    Strips release suffixes (``freebsd14`` → ``freebsd``) and the legacy
    ``linux2`` spelling. Everything else is passed through.
    """
    value = platform_id.lower()
    if value.startswith("linux"):
        return "linux"
    for prefix in _VERSIONED_PLATFORMS:
        if value.startswith(prefix):
            return prefix
    return value


def normalize_arch(machine: str) -> str:
    """Map a ``platform.machine()`` value to the package manager's arch id."""
    key = machine.lower()
    return _ARCH_MAP.get(key, key)


def shell_name(shell_path: str, windows: bool) -> str:
    """File-name component of a shell path, without the executable suffix."""
    pure = PureWindowsPath(shell_path) if windows else PurePosixPath(shell_path)
    name = pure.name
    if name.lower().endswith(EXECUTABLE_SUFFIX):
        name = name[: -len(EXECUTABLE_SUFFIX)]
    return name


def is_posix_session(environ: Mapping[str, str]) -> bool:
    """Whether the terminal session is a POSIX compatibility layer.

    Checks the MSYS2 session-type marker (MSYSTEM) and the terminal-type
    marker (TERM). Says nothing about the host OS; callers AND it with
    ``is_windows``.
    """
    session = environ.get(SESSION_TYPE_VAR, "")
    if session.upper() in POSIX_SESSION_TYPES:
        return True
    return environ.get(TERMINAL_TYPE_VAR, "") in POSIX_TERMINAL_TYPES


def _comspec(environ: Mapping[str, str]) -> str | None:
    for name in COMSPEC_VARS:
        value = environ.get(name)
        if value:
            return value
    return None


def probe_environment(
    environ: Mapping[str, str] | None = None,
    platform_id: str | None = None,
    machine: str | None = None,
    unix_platforms: Iterable[str] | None = None,
) -> Facts:
    """Build the Fact set for this process.

    Args:
        environ: Environment mapping (default: ``os.environ``).
        platform_id: Raw platform id (default: ``sys.platform``).
        machine: Raw machine id (default: ``platform.machine()``).
        unix_platforms: OS ids the ``unix`` alias covers
            (default: ``DEFAULT_UNIX_PLATFORMS``).

    Returns:
        Frozen Facts.
    """
    if environ is None:
        environ = os.environ
    os_family = normalize_platform(platform_id if platform_id is not None else sys.platform)
    arch = normalize_arch(machine if machine is not None else platform.machine())
    unix_set = frozenset(unix_platforms if unix_platforms is not None else DEFAULT_UNIX_PLATFORMS)

    is_windows = os_family == WINDOWS
    configured_shell = environ.get(SCRIPT_SHELL_VAR) or ""

    if configured_shell:
        shell_id = shell_name(configured_shell, is_windows)
        shell_full_path = configured_shell
    elif is_windows:
        shell_id, shell_full_path = DEFAULT_WINDOWS_SHELL, DEFAULT_WINDOWS_SHELL_PATH
    else:
        shell_id, shell_full_path = DEFAULT_POSIX_SHELL, DEFAULT_POSIX_SHELL

    facts = Facts(
        os_family=os_family,
        arch=arch,
        shell_id=shell_id,
        shell_full_path=shell_full_path,
        comspec=_comspec(environ),
        is_windows=is_windows,
        is_windows_posix_shell=is_windows and is_posix_session(environ),
        is_unix=os_family in unix_set,
    )
    logger.debug(
        "Environment: os=%s arch=%s shell=%s (%s) unix=%s posix-on-windows=%s",
        facts.os_family, facts.arch, facts.shell_id, facts.shell_full_path,
        facts.is_unix, facts.is_windows_posix_shell,
    )
    return facts
