"""
Fact set — the resolved description of the runtime environment.

Built once by the environment probe at process start and passed by
value into the matcher and the shell resolver. Frozen: nothing reads
ambient state after this point.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Facts(BaseModel):
    """Runtime facts used for variant matching and shell resolution."""

    model_config = ConfigDict(frozen=True)

    os_family: str                      # package-manager platform id (linux, darwin, win32…)
    arch: str                           # package-manager arch id (x64, arm64…)
    shell_id: str                       # configured script shell, file name without .exe
    shell_full_path: str                # configured script shell as given
    comspec: str | None = None          # Windows command-interpreter override
    is_windows: bool = False
    is_windows_posix_shell: bool = False
    is_unix: bool = False
