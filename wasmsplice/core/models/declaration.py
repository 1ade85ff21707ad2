"""
Module declaration model — the annotated Rust module being spliced.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModuleDeclaration(BaseModel):
    """A named module and its body, extracted once per pipeline run.

    ``body`` is the dedented text between the module's braces; it becomes
    the sub-project's source entry. ``source`` is the declaration exactly
    as written, re-emitted unchanged by the embedder.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    body: str = ""
    source: str = ""
