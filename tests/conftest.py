"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from wasmsplice.adapters.mock import MockToolchain
from wasmsplice.core.engine.pipeline import SplicePipeline
from wasmsplice.core.models.config import SpliceConfig


@pytest.fixture(autouse=True)
def _isolate_root_env(monkeypatch):
    """Keep the caller's environment from choosing a project root."""
    monkeypatch.delenv("WASMSPLICE_PROJECT_ROOT", raising=False)
    monkeypatch.delenv("CARGO_MANIFEST_DIR", raising=False)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """An empty enclosing project root."""
    root = tmp_path / "app"
    root.mkdir()
    return root


@pytest.fixture
def mock_toolchain() -> MockToolchain:
    return MockToolchain()


@pytest.fixture
def config() -> SpliceConfig:
    return SpliceConfig()


@pytest.fixture
def pipeline(workspace: Path, mock_toolchain: MockToolchain, config: SpliceConfig) -> SplicePipeline:
    return SplicePipeline(workspace, mock_toolchain, config)
