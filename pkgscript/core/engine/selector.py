"""
Variant selector — pick the variants of a task that apply here.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pkgscript.core.engine.matcher import variant_matches
from pkgscript.core.errors import MalformedTask, TaskNotFound, summarize_validation_error
from pkgscript.core.models.config import ScriptsConfig
from pkgscript.core.models.facts import Facts
from pkgscript.core.models.variant import ScriptVariant

logger = logging.getLogger(__name__)


def _type_label(value: Any) -> str:
    """Human name of a config value's type, in config-file vocabulary."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (int, float)):
        return "number"
    return type(value).__name__


def parse_task(task_name: str, entry: Any) -> list[ScriptVariant]:
    """Validate a raw task entry into its ordered variants.

    Raises:
        MalformedTask: If the entry is not a non-empty list of valid variants.
    """
    if not isinstance(entry, list):
        raise MalformedTask(
            f"Expected a list of variants for {task_name} but found {_type_label(entry)}."
        )
    if not entry:
        raise MalformedTask(f"Task {task_name} declares no variants.")

    variants: list[ScriptVariant] = []
    for index, raw in enumerate(entry):
        if not isinstance(raw, dict):
            raise MalformedTask(
                f"Variant {index} of {task_name} must be an object, found {_type_label(raw)}."
            )
        try:
            variants.append(ScriptVariant.model_validate(raw))
        except ValidationError as e:
            raise MalformedTask(
                f"Variant {index} of {task_name} is invalid: "
                f"{summarize_validation_error(e, default_loc='variant')}"
            ) from e
    return variants


def select_variants(
    config: ScriptsConfig,
    task_name: str,
    facts: Facts,
) -> list[ScriptVariant]:
    """Return the task's variants that match the facts, in declared order.

    An empty list is a valid answer and means "run nothing".

    Raises:
        TaskNotFound: If the task is not declared.
        MalformedTask: If the declared entry is not a list of variants.
    """
    if not config.has_task(task_name):
        logger.debug("Declared tasks: %s", ", ".join(config.task_names) or "(none)")
        raise TaskNotFound(f"No script defined for {task_name}")

    variants = parse_task(task_name, config.scripts[task_name])
    selected = [v for v in variants if variant_matches(v, facts)]

    logger.info(
        "Task %s: %d/%d variants match (os=%s arch=%s shell=%s)",
        task_name, len(selected), len(variants),
        facts.os_family, facts.arch, facts.shell_id,
    )
    return selected
