"""
Tests for the toolchain adapters — mock, registry, shell runner, wasm-pack.
"""

import sys
from pathlib import Path

from wasmsplice.adapters.mock import WASM_MAGIC, MockToolchain
from wasmsplice.adapters.registry import ToolchainRegistry, default_registry
from wasmsplice.adapters.shell import run_command
from wasmsplice.adapters.toolchains import WasmPackToolchain
from wasmsplice.core.models.config import SpliceConfig, ToolchainSettings
from wasmsplice.core.models.project import ProjectHandle

# ── MockToolchain ───────────────────────────────────────────────────


class TestMockToolchain:
    def test_scaffold_creates_crate(self, tmp_path: Path):
        toolchain = MockToolchain()
        handle = toolchain.scaffold("demo", tmp_path)
        assert handle.root == tmp_path / "demo"
        assert handle.scaffold.ok
        assert 'name = "demo"' in (handle.root / "Cargo.toml").read_text()
        assert (handle.root / "src" / "lib.rs").is_file()

    def test_scaffold_existing_directory(self, tmp_path: Path):
        toolchain = MockToolchain()
        toolchain.scaffold("demo", tmp_path)
        handle = toolchain.scaffold("demo", tmp_path)
        assert handle.scaffold.launched
        assert handle.scaffold.exit_status == 101
        assert "already exists" in handle.scaffold.stderr

    def test_build_derives_binary_from_source(self, tmp_path: Path):
        toolchain = MockToolchain()
        handle = toolchain.scaffold("demo", tmp_path)
        (handle.root / "src" / "lib.rs").write_text("abc")
        result = toolchain.build(handle)
        assert result.ok
        assert (handle.root / "pkg" / "demo_bg.wasm").read_bytes() == WASM_MAGIC + b"abc"
        assert (handle.root / "pkg" / "demo.js").is_file()

    def test_launch_error(self, tmp_path: Path):
        toolchain = MockToolchain(launch_error="Command not found: cargo")
        handle = toolchain.scaffold("demo", tmp_path)
        assert not handle.scaffold.launched
        assert not (tmp_path / "demo").exists()

    def test_call_log(self, tmp_path: Path):
        toolchain = MockToolchain()
        handle = toolchain.scaffold("a", tmp_path)
        toolchain.build(handle)
        assert toolchain.call_log == [("scaffold", "a"), ("build", "a")]
        toolchain.reset()
        assert toolchain.call_count == 0

    def test_repr(self):
        assert repr(MockToolchain()) == "<MockToolchain name='mock'>"


# ── Registry ────────────────────────────────────────────────────────


class TestToolchainRegistry:
    def test_register_and_get(self):
        registry = ToolchainRegistry()
        toolchain = MockToolchain(toolchain_name="custom")
        registry.register(toolchain)
        assert registry.get("custom") is toolchain
        assert registry.list_toolchains() == ["custom"]

    def test_get_unknown(self):
        assert ToolchainRegistry().get("nope") is None

    def test_unregister(self):
        registry = ToolchainRegistry()
        registry.register(MockToolchain(toolchain_name="custom"))
        registry.unregister("custom")
        assert registry.get("custom") is None

    def test_mock_mode_resolves_any_name(self):
        registry = ToolchainRegistry(mock_mode=True)
        toolchain = registry.get("wasm-pack")
        assert isinstance(toolchain, MockToolchain)
        assert registry.get("other") is toolchain

    def test_set_mock_mode_with_custom_mock(self):
        registry = ToolchainRegistry()
        mock = MockToolchain(build_exit_status=2)
        registry.set_mock_mode(True, mock)
        assert registry.mock_mode
        assert registry.get("wasm-pack") is mock

    def test_status(self):
        registry = ToolchainRegistry()
        registry.register(MockToolchain(toolchain_name="up"))
        registry.register(MockToolchain(toolchain_name="down", available=False))
        status = registry.toolchain_status()
        assert status["up"]["available"] is True
        assert status["down"]["available"] is False
        assert status["up"]["type"] == "MockToolchain"

    def test_default_registry(self):
        registry = default_registry(SpliceConfig())
        assert isinstance(registry.get("wasm-pack"), WasmPackToolchain)

    def test_default_registry_mock_mode(self):
        registry = default_registry(SpliceConfig(), mock_mode=True)
        assert isinstance(registry.get("wasm-pack"), MockToolchain)


# ── Shell runner ────────────────────────────────────────────────────


class TestRunCommand:
    def test_captures_output_and_status(self, tmp_path: Path):
        script = "import sys; print('out'); sys.stderr.write('err'); sys.exit(3)"
        result = run_command([sys.executable, "-c", script], cwd=tmp_path)
        assert result.launched
        assert result.exit_status == 3
        assert result.stdout.strip() == "out"
        assert result.stderr == "err"
        assert not result.ok

    def test_runs_in_given_directory(self, tmp_path: Path):
        script = "import os; print(os.getcwd())"
        result = run_command([sys.executable, "-c", script], cwd=tmp_path)
        assert Path(result.stdout.strip()).resolve() == tmp_path.resolve()

    def test_command_not_found(self, tmp_path: Path):
        result = run_command(["definitely-not-a-real-tool-xyz"], cwd=tmp_path)
        assert not result.launched
        assert result.exit_status is None
        assert "Command not found" in result.error

    def test_timeout(self, tmp_path: Path):
        script = "import time; time.sleep(5)"
        result = run_command([sys.executable, "-c", script], cwd=tmp_path, timeout=1)
        assert not result.launched
        assert "timed out" in result.error


# ── wasm-pack ───────────────────────────────────────────────────────


class TestWasmPackToolchain:
    def _missing(self) -> WasmPackToolchain:
        return WasmPackToolchain(
            ToolchainSettings(
                scaffold_command=["no-such-cargo-xyz", "new", "--lib"],
                build_command=["no-such-wasm-pack-xyz", "build"],
            )
        )

    def test_executables(self):
        assert WasmPackToolchain().executables() == ["cargo", "wasm-pack"]

    def test_not_available(self):
        assert self._missing().is_available() is False

    def test_scaffold_reports_launch_failure(self, tmp_path: Path):
        handle = self._missing().scaffold("demo", tmp_path)
        assert handle.root == tmp_path / "demo"
        assert handle.scaffold.command == "no-such-cargo-xyz new --lib demo"
        assert not handle.scaffold.launched

    def test_build_reports_launch_failure(self, tmp_path: Path):
        result = self._missing().build(ProjectHandle(name="demo", root=tmp_path))
        assert result.command == "no-such-wasm-pack-xyz build"
        assert "Command not found" in result.error

    def test_scaffold_uses_configured_command(self, tmp_path: Path):
        settings = ToolchainSettings(
            scaffold_command=[sys.executable, "-c", "import os, sys; os.mkdir(sys.argv[1])"],
            build_command=[sys.executable, "-c", "pass"],
        )
        toolchain = WasmPackToolchain(settings)
        handle = toolchain.scaffold("demo", tmp_path)
        assert handle.scaffold.ok
        assert (tmp_path / "demo").is_dir()
        assert toolchain.build(handle).ok

    def test_version_missing_tool(self):
        assert self._missing().version() is None
