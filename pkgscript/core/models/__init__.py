"""
Domain models — Pydantic types for the dispatcher.

All models are re-exported here for convenient access:

    from pkgscript.core.models import Facts, ScriptVariant, ScriptsConfig, Invocation
"""

from pkgscript.core.models.config import DEFAULT_UNIX_PLATFORMS, FailurePolicy, ScriptsConfig
from pkgscript.core.models.facts import Facts
from pkgscript.core.models.invocation import Invocation
from pkgscript.core.models.variant import Constraint, ScriptVariant, normalize_constraint

__all__ = [
    # config.py
    "DEFAULT_UNIX_PLATFORMS",
    "FailurePolicy",
    "ScriptsConfig",
    # facts.py
    "Facts",
    # invocation.py
    "Invocation",
    # variant.py
    "Constraint",
    "ScriptVariant",
    "normalize_constraint",
]
