"""
Environment constants — platform, architecture, and shell vocabularies.

Pure data. No logic. No imports beyond stdlib.

Script configs are written for the package manager, so every id the
probe reports uses the package manager's names (``win32``, ``x64``),
not Python's (``AMD64``, ``x86_64``).
"""

from __future__ import annotations

# Platform ids reported by the package manager's runtime.
WINDOWS = "win32"

# sys.platform prefixes whose value carries a release suffix
# (freebsd14, openbsd7, sunos5, aix7…).
_VERSIONED_PLATFORMS: tuple[str, ...] = ("freebsd", "openbsd", "sunos", "aix", "netbsd")

# platform.machine() → package-manager arch id.
# Unknown machines pass through lowercased.
_ARCH_MAP: dict[str, str] = {
    "x86_64": "x64",
    "amd64": "x64",        # Windows reports AMD64
    "x64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",      # macOS and Windows on ARM
    "armv6l": "arm",
    "armv7l": "arm",
    "armv8l": "arm",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "ppc": "ppc",
    "ppc64": "ppc64",
    "ppc64le": "ppc64",
    "s390": "s390",
    "s390x": "s390x",
    "mips": "mips",
    "mipsel": "mipsel",
    "riscv64": "riscv64",
    "loongarch64": "loong64",
}

# ── Environment variables ───────────────────────────────────────

SCRIPT_SHELL_VAR = "npm_config_script_shell"
COMSPEC_VARS: tuple[str, ...] = ("ComSpec", "COMSPEC")
SESSION_TYPE_VAR = "MSYSTEM"
TERMINAL_TYPE_VAR = "TERM"

# MSYS2 / Git Bash session names that mean "POSIX shell on Windows".
POSIX_SESSION_TYPES: frozenset[str] = frozenset({
    "MINGW32",
    "MINGW64",
    "UCRT64",
    "CLANG64",
    "CLANG32",
    "CLANGARM64",
    "MSYS",
})
POSIX_TERMINAL_TYPES: frozenset[str] = frozenset({"cygwin"})

# ── Shell defaults ──────────────────────────────────────────────

DEFAULT_POSIX_SHELL = "sh"
DEFAULT_WINDOWS_SHELL = "cmd"
DEFAULT_WINDOWS_SHELL_PATH = "cmd.exe"
POWERSHELL_IDS: frozenset[str] = frozenset({"powershell", "pwsh"})
EXECUTABLE_SUFFIX = ".exe"
