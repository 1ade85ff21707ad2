"""
Tests for configuration loading, project-root resolution and config check.
"""

from pathlib import Path

import pytest

from wasmsplice.core.config.loader import (
    ConfigError,
    find_config_file,
    load_config,
    resolve_project_root,
)
from wasmsplice.core.errors import MissingEnvironmentError
from wasmsplice.core.use_cases.config_check import check_config


def _write(path: Path, text: str) -> Path:
    path.write_text(text)
    return path


class TestLoadConfig:
    def test_defaults_without_file(self):
        config = load_config(None)
        assert config.staging_dir == ".wasmsplice"
        assert config.toolchain.build_command == ["wasm-pack", "build", "--target", "web"]
        assert config.layout.crate_type == "cdylib"

    def test_missing_file_gives_defaults(self, tmp_path: Path):
        assert load_config(tmp_path / "wasmsplice.yml").attribute == "wasmsplice"

    def test_flat_file(self, tmp_path: Path):
        path = _write(
            tmp_path / "wasmsplice.yml",
            "staging_dir: build/wasm\nembedding: internal\ntoolchain:\n  timeout: 120\n",
        )
        config = load_config(path)
        assert config.staging_dir == "build/wasm"
        assert config.convention.loader_name == "js_loader"
        assert config.toolchain.timeout == 120
        assert config.toolchain.scaffold_command == ["cargo", "new", "--lib"]

    def test_wrapped_file(self, tmp_path: Path):
        path = _write(tmp_path / "wasmsplice.yml", "wasmsplice:\n  placement: alongside\n")
        assert load_config(path).placement == "alongside"

    def test_empty_file(self, tmp_path: Path):
        path = _write(tmp_path / "wasmsplice.yml", "")
        assert load_config(path).embedding == "exported"

    def test_invalid_yaml(self, tmp_path: Path):
        path = _write(tmp_path / "wasmsplice.yml", "staging_dir: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = _write(tmp_path / "wasmsplice.yml", "- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_invalid_value(self, tmp_path: Path):
        path = _write(tmp_path / "wasmsplice.yml", "loader_format: base64\n")
        with pytest.raises(ConfigError, match="Invalid splice configuration"):
            load_config(path)


class TestFindConfigFile:
    def test_walks_up(self, tmp_path: Path):
        config = _write(tmp_path / "wasmsplice.yml", "")
        nested = tmp_path / "src" / "bin"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == config.resolve()

    def test_sibling_not_found(self, tmp_path: Path):
        (tmp_path / "other").mkdir()
        _write(tmp_path / "other" / "wasmsplice.yml", "")
        start = tmp_path / "empty"
        start.mkdir()
        found = find_config_file(start)
        assert found is None or not found.is_relative_to(tmp_path.resolve())


class TestResolveProjectRoot:
    def test_explicit_wins(self, tmp_path: Path):
        other = tmp_path / "other"
        other.mkdir()
        env = {"WASMSPLICE_PROJECT_ROOT": str(tmp_path)}
        assert resolve_project_root(other, environ=env) == other.resolve()

    def test_env_order(self, tmp_path: Path):
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()
        env = {"WASMSPLICE_PROJECT_ROOT": str(first), "CARGO_MANIFEST_DIR": str(second)}
        assert resolve_project_root(environ=env) == first.resolve()
        assert resolve_project_root(environ={"CARGO_MANIFEST_DIR": str(second)}) == second.resolve()

    def test_config_directory_fallback(self, tmp_path: Path):
        config = _write(tmp_path / "wasmsplice.yml", "")
        assert resolve_project_root(config_path=config, environ={}) == tmp_path.resolve()

    def test_missing(self):
        with pytest.raises(MissingEnvironmentError, match="Cannot determine the project root"):
            resolve_project_root(environ={})

    def test_reads_process_environment(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("CARGO_MANIFEST_DIR", str(tmp_path))
        assert resolve_project_root() == tmp_path.resolve()

    def test_not_a_directory(self, tmp_path: Path):
        with pytest.raises(MissingEnvironmentError, match="not a directory"):
            resolve_project_root(tmp_path / "absent", environ={})


class TestCheckConfig:
    def test_valid(self, tmp_path: Path):
        path = _write(tmp_path / "wasmsplice.yml", "staging_dir: .wasm\n")
        result = check_config(path, check_tools=False)
        assert result.valid
        assert result.errors == []
        assert result.to_dict()["staging_dir"] == ".wasm"

    def test_searches_from_start_dir(self, tmp_path: Path, monkeypatch):
        root = tmp_path / "app"
        (root / "src").mkdir(parents=True)
        _write(root / "wasmsplice.yml", "embedding: internal\n")
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        monkeypatch.chdir(elsewhere)
        result = check_config(check_tools=False, start_dir=root / "src")
        assert result.config_path == (root / "wasmsplice.yml").resolve()
        assert result.config.embedding == "internal"

    def test_missing_explicit_file(self, tmp_path: Path):
        result = check_config(tmp_path / "nope.yml", check_tools=False)
        assert not result.valid
        assert "not found" in result.errors[0]

    def test_invalid_yaml(self, tmp_path: Path):
        path = _write(tmp_path / "wasmsplice.yml", "a: [\n")
        result = check_config(path, check_tools=False)
        assert not result.valid

    def test_semantic_errors(self, tmp_path: Path):
        path = _write(
            tmp_path / "wasmsplice.yml",
            "staging_dir: ''\nattribute: 'not an ident'\ntoolchain:\n  build_command: []\n",
        )
        result = check_config(path, check_tools=False)
        assert not result.valid
        assert len(result.errors) == 3

    def test_warnings(self, tmp_path: Path):
        path = _write(
            tmp_path / "wasmsplice.yml",
            "staging_dir: /tmp/wasm\ncheck_exit_status: false\n",
        )
        result = check_config(path, check_tools=False)
        assert result.valid
        assert len(result.warnings) == 2

    def test_missing_tools_warn(self, tmp_path: Path):
        path = _write(
            tmp_path / "wasmsplice.yml",
            "toolchain:\n  scaffold_command: [no-such-cargo-xyz, new]\n"
            "  build_command: [no-such-wasm-pack-xyz, build]\n",
        )
        result = check_config(path)
        assert result.valid
        assert any("no-such-cargo-xyz" in w for w in result.warnings)
