"""
Script variant model — one script body guarded by optional constraints.

A task is an ordered list of variants. Each variant may restrict itself
to some platforms, CPU architectures, or invoking shells; a field left
out matches anything in that dimension.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

# A declared constraint: one tag, a list of tags, or nothing at all
Constraint = str | list[str] | None


def normalize_constraint(value: Constraint) -> frozenset[str] | None:
    """Collapse the three declared shapes into "allowed set or universal".

    Returns None for an absent constraint (matches everything), otherwise
    the set of allowed tags.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return frozenset((value,))
    return frozenset(value)


class ScriptVariant(BaseModel):
    """A concrete script body plus its platform/arch/shell constraints."""

    platform: Constraint = None
    arch: Constraint = None
    shell: Constraint = None
    script: str

    @field_validator("platform", "arch", "shell")
    @classmethod
    def _check_tag_list(cls, value: Constraint) -> Constraint:
        if isinstance(value, list):
            if not value:
                raise ValueError("constraint list must not be empty")
            if len(set(value)) != len(value):
                raise ValueError(f"constraint list has duplicate tags: {value}")
        return value

    def declared_tags(self) -> list[tuple[str, str]]:
        """Declared constraints as (label, value) pairs, for display."""
        tags = []
        for label, value in (("os", self.platform), ("arch", self.arch), ("shell", self.shell)):
            if value is None:
                continue
            text = value if isinstance(value, str) else ",".join(value)
            tags.append((label, text))
        return tags
