"""
Executor — run the matched variants, one after another.

Each variant gets a header line, a child process that inherits our
stdin/stdout/stderr and working directory, and a blank separator line.
Children run strictly in declaration order; the next one starts only
after the previous one exited.

What a failing child does to the run is the failure policy's call:

    ignore    → log it, keep going, exit 0
    continue  → keep going, exit with the first failing code
    abort     → stop here, exit with this code
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from collections.abc import Callable
from dataclasses import dataclass, field

import click

from pkgscript.core.engine.shell import resolve_shell
from pkgscript.core.models.config import FailurePolicy
from pkgscript.core.models.facts import Facts
from pkgscript.core.models.variant import ScriptVariant

logger = logging.getLogger(__name__)

# Exit code reported when the shell itself could not be started
SPAWN_FAILED_EXIT_CODE = 127

# Exit code base for a child killed by signal N (128 + N)
SIGNAL_EXIT_BASE = 128


@dataclass
class VariantRun:
    """Outcome of one spawned variant."""

    variant: ScriptVariant
    return_code: int | None = None
    duration_ms: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.return_code == 0

    @property
    def exit_code(self) -> int:
        """Code this run contributes to the process exit status."""
        if self.return_code is None:
            return SPAWN_FAILED_EXIT_CODE
        if self.return_code < 0:
            # killed by a signal: report it the way a shell does
            return SIGNAL_EXIT_BASE - self.return_code
        return self.return_code


@dataclass
class ExecutionReport:
    """Result of running a task's matched variants."""

    task: str = ""
    policy: FailurePolicy = FailurePolicy.IGNORE
    runs: list[VariantRun] = field(default_factory=list)
    skipped: int = 0

    @property
    def total(self) -> int:
        return len(self.runs)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.runs if not r.ok)

    @property
    def exit_code(self) -> int:
        """Process exit status under the active failure policy."""
        if self.policy is FailurePolicy.IGNORE:
            return 0
        for run in self.runs:
            if not run.ok:
                return run.exit_code
        return 0

    def to_dict(self) -> dict:
        return {
            "task": self.task,
            "policy": self.policy.value,
            "total": self.total,
            "failed": self.failed,
            "skipped": self.skipped,
            "exit_code": self.exit_code,
            "runs": [
                {
                    "script": r.variant.script,
                    "return_code": r.return_code,
                    "duration_ms": r.duration_ms,
                    "error": r.error,
                }
                for r in self.runs
            ],
        }


def format_header(task_name: str, variant: ScriptVariant) -> str:
    """Header line naming the task and the variant's declared tags."""
    tags = "  ".join(f"{label}: {value}" for label, value in variant.declared_tags())
    return f"> {task_name}  {tags}" if tags else f"> {task_name}"


def _spawn(variant: ScriptVariant, facts: Facts, cwd: str) -> VariantRun:
    """Run one variant synchronously. Never raises on child failure."""
    invocation = resolve_shell(facts)
    args = invocation.build(variant.script)
    logger.debug("Spawning %r (cwd=%s)", args, cwd)

    start = time.monotonic()
    try:
        completed = subprocess.run(args, cwd=cwd, check=False)
    except OSError as e:
        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.warning("Could not start %s: %s", invocation.command, e)
        return VariantRun(variant=variant, duration_ms=elapsed_ms, error=str(e))

    elapsed_ms = int((time.monotonic() - start) * 1000)
    if completed.returncode != 0:
        logger.warning("Script exited with code %d: %s", completed.returncode, variant.script)
    return VariantRun(variant=variant, return_code=completed.returncode, duration_ms=elapsed_ms)


def run_variants(
    variants: list[ScriptVariant],
    task_name: str,
    facts: Facts,
    policy: FailurePolicy = FailurePolicy.IGNORE,
    echo: Callable[[str], None] | None = None,
    cwd: str | None = None,
) -> ExecutionReport:
    """Execute matched variants sequentially, in declaration order.

    Args:
        variants: Matched variants, in the order they were declared.
        task_name: Task name, shown in each header line.
        facts: Runtime facts used to resolve the shell.
        policy: What a failing child does to the rest of the run.
        echo: Line writer for headers/separators (default: styled click.echo).
        cwd: Working directory for the children (default: current).

    Returns:
        ExecutionReport with one VariantRun per spawned variant.
    """
    styled = echo is None
    if echo is None:
        echo = click.echo
    if cwd is None:
        cwd = os.getcwd()

    report = ExecutionReport(task=task_name, policy=policy)

    for index, variant in enumerate(variants):
        header = format_header(task_name, variant)
        echo(click.style(header, fg="black", bg="cyan", bold=True) if styled else header)
        run = _spawn(variant, facts, cwd)
        report.runs.append(run)
        echo("")

        if not run.ok and policy is FailurePolicy.ABORT:
            report.skipped = len(variants) - index - 1
            logger.info("Aborting %s: %d variant(s) not run", task_name, report.skipped)
            break

    return report

