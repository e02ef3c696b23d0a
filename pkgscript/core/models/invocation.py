"""
Invocation model — which task the package manager asked us to run.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Invocation(BaseModel):
    """The task name and trailing arguments of this run."""

    model_config = ConfigDict(frozen=True)

    task: str
    args: list[str] = Field(default_factory=list)
    source: str = ""    # environment variable the task came from
