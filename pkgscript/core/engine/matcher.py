"""
Constraint matcher — does a variant apply to this environment?

Each of the three dimensions (platform, arch, shell) is checked on its
own; a variant matches only when all three pass. The platform
dimension also accepts two alias tags:

    unix       → the host OS is in the configured POSIX family
    posixlike  → unix, or a POSIX shell session on a Windows host

Aliases are OR'd with the literal check, never instead of it, so a
config that lists "unix" next to "win32" still matches on Windows.
"""

from __future__ import annotations

from collections.abc import Mapping

from pkgscript.core.models.facts import Facts
from pkgscript.core.models.variant import Constraint, ScriptVariant, normalize_constraint

UNIX_ALIAS = "unix"
POSIXLIKE_ALIAS = "posixlike"


def platform_aliases(facts: Facts) -> dict[str, bool]:
    """Evaluate the platform alias predicates against the facts."""
    return {
        UNIX_ALIAS: facts.is_unix,
        POSIXLIKE_ALIAS: facts.is_unix or facts.is_windows_posix_shell,
    }


def matches(
    constraint: Constraint,
    fact_value: str,
    aliases: Mapping[str, bool] | None = None,
) -> bool:
    """Check one declared constraint against one fact value.

    Args:
        constraint: The declared field (tag, list of tags, or None).
        fact_value: The runtime value for that dimension.
        aliases: Alias tag → predicate result. An alias tag that is
            declared and whose predicate holds also counts as a match.

    Returns:
        True if the constraint admits the fact value.
    """
    allowed = normalize_constraint(constraint)
    if allowed is None:
        return True
    if fact_value in allowed:
        return True
    if aliases:
        return any(aliases.get(tag, False) for tag in allowed)
    return False


def variant_matches(variant: ScriptVariant, facts: Facts) -> bool:
    """AND of the platform, arch, and shell checks."""
    return (
        matches(variant.platform, facts.os_family, platform_aliases(facts))
        and matches(variant.arch, facts.arch)
        and matches(variant.shell, facts.shell_id)
    )
