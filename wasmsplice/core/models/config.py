"""
Splice configuration — loaded from wasmsplice.yml.

Every field has a default, so a project without a config file still
gets the canonical wasm-pack behavior.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

PayloadMode = Literal["auto", "inline", "file"]
EmbeddingName = Literal["exported", "internal"]
LoaderFormat = Literal["text", "bytes"]
Placement = Literal["inside", "alongside"]


class EmbeddingConvention(BaseModel):
    """Visibility and constant names used for the embedded artifacts."""

    visibility: str = "pub"
    wasm_name: str = "wasm"
    loader_name: str = "loader"

    @property
    def prefix(self) -> str:
        return f"{self.visibility} " if self.visibility else ""


EMBEDDING_CONVENTIONS: dict[str, EmbeddingConvention] = {
    "exported": EmbeddingConvention(visibility="pub", wasm_name="wasm", loader_name="loader"),
    "internal": EmbeddingConvention(visibility="", wasm_name="wasm", loader_name="js_loader"),
}


class ToolchainSettings(BaseModel):
    """External commands used to scaffold and build sub-projects."""

    name: str = "wasm-pack"
    scaffold_command: list[str] = Field(default_factory=lambda: ["cargo", "new", "--lib"])
    build_command: list[str] = Field(
        default_factory=lambda: ["wasm-pack", "build", "--target", "web"]
    )
    timeout: int | None = None      # seconds; None blocks until the tool exits


class LayoutSettings(BaseModel):
    """File layout of a sub-project and the manifest values it must carry."""

    manifest_file: str = "Cargo.toml"
    source_entry: str = "src/lib.rs"
    output_dir: str = "pkg"
    binary_suffix: str = "_bg.wasm"
    loader_suffix: str = ".js"
    crate_type: str = "cdylib"
    bindgen_dependency: str = "wasm-bindgen"
    bindgen_version: str = "*"


class SpliceConfig(BaseModel):
    """Root configuration for a splice run."""

    staging_dir: str = ".wasmsplice"
    attribute: str = "wasmsplice"
    payload_mode: PayloadMode = "auto"
    embedding: EmbeddingName = "exported"
    loader_format: LoaderFormat = "text"
    placement: Placement = "inside"
    check_exit_status: bool = True

    toolchain: ToolchainSettings = Field(default_factory=ToolchainSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)

    @property
    def convention(self) -> EmbeddingConvention:
        return EMBEDDING_CONVENTIONS[self.embedding]
