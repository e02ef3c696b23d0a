"""Environment probing — the runtime Fact set."""

from pkgscript.core.environment.probe import probe_environment

__all__ = ["probe_environment"]
