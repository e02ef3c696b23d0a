"""
Dispatch use case — run one task from start to finish.

This is the top-level orchestrator: it reads the invocation, loads the
config, probes the environment, selects the matching variants, and runs
them. The full vertical slice from "npm run build" to finished children.

Dispatcher errors never escape: they come back in ``DispatchResult.error``
and the caller decides how to report them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

from pkgscript.core.config.invocation import read_invocation
from pkgscript.core.config.loader import load_config
from pkgscript.core.engine.executor import ExecutionReport, run_variants
from pkgscript.core.engine.selector import select_variants
from pkgscript.core.environment.probe import probe_environment
from pkgscript.core.errors import DispatchError
from pkgscript.core.models.config import FailurePolicy
from pkgscript.core.models.facts import Facts
from pkgscript.core.models.invocation import Invocation

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """Result of dispatching a task."""

    invocation: Invocation | None = None
    facts: Facts | None = None
    report: ExecutionReport | None = None
    variants_matched: int = 0
    error: DispatchError | None = None

    @property
    def exit_code(self) -> int:
        if self.error is not None:
            return 1
        if self.report is None:
            return 0
        return self.report.exit_code

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error.diagnostic()
            return result

        result["task"] = self.invocation.task if self.invocation else ""
        result["args"] = list(self.invocation.args) if self.invocation else []
        result["source"] = self.invocation.source if self.invocation else ""
        result["variants_matched"] = self.variants_matched
        if self.report:
            result["report"] = self.report.to_dict()
        return result


def dispatch_task(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
    facts: Facts | None = None,
    policy: FailurePolicy | None = None,
    echo: Callable[[str], None] | None = None,
) -> DispatchResult:
    """Select and run the variants of the invoked task.

    Args:
        config_path: Optional explicit config path (default: search upward).
        environ: Environment mapping (default: ``os.environ``).
        facts: Pre-built facts (default: probed from ``environ``).
        policy: Failure policy override (default: the config's ``on_failure``).
        echo: Line writer for headers (default: styled click output).

    Returns:
        DispatchResult with the execution report, or the error that stopped us.
    """
    result = DispatchResult()

    try:
        # Invocation first: outside a package manager nothing else matters
        result.invocation = read_invocation(environ)
        config = load_config(config_path)

        if facts is None:
            facts = probe_environment(environ, unix_platforms=config.unix_platforms)
        result.facts = facts

        if config.posixlike:
            logger.debug("Config prefers POSIX semantics (posixlike: true)")

        variants = select_variants(config, result.invocation.task, facts)
    except DispatchError as e:
        logger.debug("Dispatch stopped: %s", e.diagnostic())
        result.error = e
        return result

    result.variants_matched = len(variants)
    if not variants:
        logger.info("Nothing to run for %s on %s/%s", result.invocation.task, facts.os_family, facts.arch)

    result.report = run_variants(
        variants,
        result.invocation.task,
        facts,
        policy=policy or config.on_failure,
        echo=echo,
    )
    return result
