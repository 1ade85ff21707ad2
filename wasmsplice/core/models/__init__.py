"""
Domain models — Pydantic types for the splice pipeline.

All models are re-exported here for convenient access:

    from wasmsplice.core.models import ModuleDeclaration, DependencySpec, SpliceConfig
"""

from wasmsplice.core.models.config import (
    EMBEDDING_CONVENTIONS,
    EmbeddingConvention,
    LayoutSettings,
    SpliceConfig,
    ToolchainSettings,
)
from wasmsplice.core.models.declaration import ModuleDeclaration
from wasmsplice.core.models.manifest import DependencySpec, ManifestDocument
from wasmsplice.core.models.project import (
    Artifact,
    BuildResult,
    EmbedResult,
    ProjectHandle,
    WorkingProject,
)
from wasmsplice.core.models.tokens import Group, Ident, Lit, Punct, TokenTree

__all__ = [
    # config.py
    "EMBEDDING_CONVENTIONS",
    # project.py
    "Artifact",
    "BuildResult",
    # manifest.py
    "DependencySpec",
    "EmbedResult",
    "EmbeddingConvention",
    # tokens.py
    "Group",
    "Ident",
    "LayoutSettings",
    "Lit",
    "ManifestDocument",
    # declaration.py
    "ModuleDeclaration",
    "ProjectHandle",
    "Punct",
    "SpliceConfig",
    "TokenTree",
    "ToolchainSettings",
    "WorkingProject",
]
