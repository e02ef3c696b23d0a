"""
Shell resolver — which interpreter runs a script, and how.

POSIX hosts run ``<script shell> -c <script>``. Windows is different:
cmd.exe only passes a compound command line through untouched with
``/d /s /c`` (no AutoRun, strip the outer quotes, run the rest), and
the arguments must reach it verbatim because cmd applies its own
quoting rules. Python's list-to-command-line escaping would mangle
them, so on Windows the spawn argument is a single pre-joined string.
"""

from __future__ import annotations

from dataclasses import dataclass

from pkgscript.core.environment.constants import DEFAULT_WINDOWS_SHELL_PATH, POWERSHELL_IDS
from pkgscript.core.models.facts import Facts

POSIX_FLAGS = "-c"
POWERSHELL_FLAGS = "/c"
CMD_FLAGS = "/d /s /c"


@dataclass(frozen=True)
class ShellInvocation:
    """Resolved shell command plus its flags."""

    command: str
    flags: str
    verbatim: bool = False

    def build(self, script: str) -> list[str] | str:
        """Spawn argument for ``subprocess.run``.

        A list on POSIX (normal argv handling), a single command line
        on Windows so no quote-escaping is applied.
        """
        if self.verbatim:
            command = self.command
            if " " in command and not command.startswith('"'):
                command = f'"{command}"'
            return f"{command} {self.flags} {script}"
        return [self.command, self.flags, script]


def needs_verbatim_argument_quoting(facts: Facts) -> bool:
    """Arguments must bypass host quote-escaping (Windows only)."""
    return facts.is_windows


def resolve_shell(facts: Facts) -> ShellInvocation:
    """Pick the shell binary and flags for the current platform."""
    if not facts.is_windows:
        return ShellInvocation(command=facts.shell_full_path, flags=POSIX_FLAGS)

    verbatim = needs_verbatim_argument_quoting(facts)
    if facts.shell_id.lower() in POWERSHELL_IDS:
        return ShellInvocation(
            command=facts.shell_full_path,
            flags=POWERSHELL_FLAGS,
            verbatim=verbatim,
        )
    return ShellInvocation(
        command=facts.comspec or DEFAULT_WINDOWS_SHELL_PATH,
        flags=CMD_FLAGS,
        verbatim=verbatim,
    )
