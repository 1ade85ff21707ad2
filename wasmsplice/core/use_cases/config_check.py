"""
Config check use case — validate wasmsplice.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from wasmsplice.adapters.toolchains.wasm_pack import WasmPackToolchain
from wasmsplice.core.config.loader import ConfigError, find_config_file, load_config
from wasmsplice.core.models.config import SpliceConfig


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: SpliceConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "toolchain": self.config.toolchain.name if self.config else None,
            "staging_dir": self.config.staging_dir if self.config else None,
        }


def check_config(
    config_path: Path | None = None,
    check_tools: bool = True,
    start_dir: Path | None = None,
) -> ConfigCheckResult:
    """Validate splice configuration and report issues.

    Args:
        config_path: Optional explicit path to wasmsplice.yml.
        check_tools: Warn when the configured executables are not on PATH.
        start_dir: Where to start looking for wasmsplice.yml (default: cwd).

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file(start_dir)

    if config_path is None:
        result.warnings.append("No wasmsplice.yml found; using defaults.")
    elif not config_path.exists():
        result.errors.append(f"Config file not found: {config_path}")
        return result

    result.config_path = config_path

    try:
        config = load_config(config_path)
        result.config = config
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    # Semantic checks
    if Path(config.staging_dir).is_absolute():
        result.warnings.append(
            f"staging_dir is absolute ({config.staging_dir}); it is normally "
            "relative to the project root."
        )

    if not config.staging_dir.strip():
        result.errors.append("staging_dir must not be empty.")

    if not config.toolchain.scaffold_command:
        result.errors.append("toolchain.scaffold_command must not be empty.")

    if not config.toolchain.build_command:
        result.errors.append("toolchain.build_command must not be empty.")

    if not config.attribute.isidentifier():
        result.errors.append(f"attribute '{config.attribute}' is not a valid identifier.")

    if not config.check_exit_status:
        result.warnings.append(
            "check_exit_status is off: failed builds surface only as missing artifacts."
        )

    if check_tools and not result.errors:
        toolchain = WasmPackToolchain(config.toolchain)
        if not toolchain.is_available():
            result.warnings.append(
                f"Toolchain executables not found on PATH: {', '.join(toolchain.executables())}"
            )

    result.valid = len(result.errors) == 0
    return result
