"""
Invocation reader — which task did the package manager ask for?

npm (and yarn v1) describe the command line in ``npm_config_argv``::

    {"remain": [], "cooked": ["run", "build"], "original": ["run", "build"]}

``npm test`` / ``npm start`` style shortcuts arrive without the leading
"run", so it is added back before reading the task name. Newer package
managers drop ``npm_config_argv`` but still export the running script's
name as ``npm_lifecycle_event``, which is used as a fallback.

There is no standalone mode: without either variable we refuse to run.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping

from pkgscript.core.errors import InvocationError
from pkgscript.core.models.invocation import Invocation

logger = logging.getLogger(__name__)

ARGV_VAR = "npm_config_argv"
LIFECYCLE_EVENT_VAR = "npm_lifecycle_event"

_RUN_COMMANDS = ("run", "run-script")


def read_invocation(environ: Mapping[str, str] | None = None) -> Invocation:
    """Resolve the task name and trailing arguments from the environment.

    Raises:
        InvocationError: If the package manager left no usable signal.
    """
    if environ is None:
        environ = os.environ

    raw = environ.get(ARGV_VAR)
    if raw:
        return _from_argv(raw)

    event = environ.get(LIFECYCLE_EVENT_VAR)
    if event:
        logger.debug("No %s; using %s=%s", ARGV_VAR, LIFECYCLE_EVENT_VAR, event)
        return Invocation(task=event, source=LIFECYCLE_EVENT_VAR)

    raise InvocationError(
        "Execution from outside of package manager is not allowed.",
        env_var=ARGV_VAR,
    )


def _from_argv(raw: str) -> Invocation:
    try:
        argv = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvocationError(f"Cannot parse package manager arguments: {e}", env_var=ARGV_VAR) from e

    cooked = argv.get("cooked") if isinstance(argv, dict) else None
    if not isinstance(cooked, list) or not all(isinstance(a, str) for a in cooked):
        raise InvocationError("Expected a 'cooked' argument list.", env_var=ARGV_VAR)

    cooked = list(cooked)
    if not cooked or cooked[0] not in _RUN_COMMANDS:
        cooked.insert(0, "run")

    if len(cooked) < 2:
        raise InvocationError("No task name in package manager arguments.", env_var=ARGV_VAR)

    invocation = Invocation(task=cooked[1], args=cooked[2:], source=ARGV_VAR)
    logger.debug("Invocation: task=%s args=%s", invocation.task, invocation.args)
    return invocation
