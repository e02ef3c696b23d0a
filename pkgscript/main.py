"""
pkgscript — CLI entrypoint.

Meant to be called by a package manager, from package.json::

    "scripts": {"build": "pkgscript"},
    "pkgscript": {
        "scripts": {
            "build": [
                {"platform": "posixlike", "script": "make"},
                {"platform": "win32", "script": "nmake"}
            ]
        }
    }

``npm run build`` then runs only the variants that fit the current
platform, CPU architecture, and script shell.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from pkgscript import __version__
from pkgscript.core.models.config import FailurePolicy
from pkgscript.core.observability.logging_config import (
    LOG_FILE_LEVEL_VAR,
    LOG_FILE_VAR,
    resolve_level,
    setup_logging,
)


@click.command()
@click.version_option(version=__version__, prog_name="pkgscript")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to package.json or pkgscript.yml (default: auto-detect).",
)
@click.option(
    "--on-failure",
    "on_failure",
    type=click.Choice([p.value for p in FailurePolicy]),
    default=None,
    help="What a failing script does to the run (default: from config, else 'ignore').",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Print a JSON summary after the run.")
def cli(
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    on_failure: str | None,
    as_json: bool,
) -> None:
    """pkgscript — run the platform-specific variants of a package script.

    The task name comes from the package manager (npm_config_argv or
    npm_lifecycle_event); running outside a package manager is an error.
    """
    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(LOG_FILE_VAR),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_VAR),
    )

    from pkgscript.core.use_cases.dispatch import dispatch_task

    result = dispatch_task(
        config_path=Path(config_path) if config_path else None,
        policy=FailurePolicy(on_failure) if on_failure else None,
    )

    if result.error:
        click.secho(result.error.diagnostic(), fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))

    sys.exit(result.exit_code)


if __name__ == "__main__":
    cli()
