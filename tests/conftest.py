"""
Shared test fixtures and configuration.
"""

import json
import subprocess
from pathlib import Path

import pytest

from pkgscript.core.environment.probe import probe_environment
from pkgscript.core.models.facts import Facts


@pytest.fixture
def linux_facts() -> Facts:
    """Linux x64 host with the default sh script shell."""
    return probe_environment(environ={}, platform_id="linux", machine="x86_64")


@pytest.fixture
def windows_facts() -> Facts:
    """Windows x64 host in a plain cmd session."""
    return probe_environment(
        environ={"ComSpec": r"C:\Windows\system32\cmd.exe"},
        platform_id="win32",
        machine="AMD64",
    )


@pytest.fixture
def git_bash_facts() -> Facts:
    """Windows x64 host inside a Git Bash (MINGW64) session."""
    return probe_environment(
        environ={"MSYSTEM": "MINGW64"},
        platform_id="win32",
        machine="AMD64",
    )


class SpawnRecorder:
    """Stand-in for subprocess.run that records calls instead of spawning."""

    def __init__(self):
        self.calls: list[dict] = []
        self.return_codes: list[int] = []

    def __call__(self, args, **kwargs):
        self.calls.append({"args": args, **kwargs})
        code = self.return_codes.pop(0) if self.return_codes else 0
        return subprocess.CompletedProcess(args, code)

    @property
    def scripts(self) -> list[str]:
        """Script text of each call, whatever shape the argument had."""
        out = []
        for call in self.calls:
            args = call["args"]
            out.append(args[-1] if isinstance(args, list) else args)
        return out


@pytest.fixture
def spawns(monkeypatch) -> SpawnRecorder:
    """Record child spawns made by the executor."""
    recorder = SpawnRecorder()
    monkeypatch.setattr("pkgscript.core.engine.executor.subprocess.run", recorder)
    return recorder


@pytest.fixture
def package_json(tmp_path: Path):
    """Write a package.json with the given pkgscript section."""
    def _write(section: dict, directory: Path | None = None) -> Path:
        target = (directory or tmp_path) / "package.json"
        target.write_text(json.dumps({"name": "demo", "version": "1.0.0", "pkgscript": section}))
        return target

    return _write
