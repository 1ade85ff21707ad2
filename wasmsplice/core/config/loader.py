"""
Configuration loader — reads wasmsplice.yml and resolves the project root.

The config file is optional: a project without one runs on defaults.
The project root, however, is required before any filesystem activity.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from wasmsplice.core.errors import MissingEnvironmentError
from wasmsplice.core.models.config import SpliceConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "wasmsplice.yml"

# Environment variables consulted for the project root, in order
ROOT_ENV_VARS = ("WASMSPLICE_PROJECT_ROOT", "CARGO_MANIFEST_DIR")


class ConfigError(Exception):
    """Raised when wasmsplice.yml is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for wasmsplice.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to wasmsplice.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> SpliceConfig:
    """Load and validate splice configuration.

    Args:
        path: Path to wasmsplice.yml. None or a missing file → defaults.

    Raises:
        ConfigError: If the file exists but is invalid.
    """
    if path is None or not path.exists():
        logger.debug("No %s — using defaults", CONFIG_FILE)
        return SpliceConfig()

    if not path.is_file():
        raise ConfigError(f"Config path is not a file: {path}")

    logger.debug("Loading splice config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return SpliceConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "wasmsplice" key or be flat
    if isinstance(data.get("wasmsplice"), dict):
        data = data["wasmsplice"]

    try:
        config = SpliceConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid splice configuration: {e}") from e

    logger.info("Loaded config from %s (toolchain=%s)", path, config.toolchain.name)
    return config


def resolve_project_root(
    explicit: Path | str | None = None,
    config_path: Path | None = None,
    environ: dict[str, str] | None = None,
) -> Path:
    """Determine the enclosing project root.

    Precedence: explicit argument > WASMSPLICE_PROJECT_ROOT >
    CARGO_MANIFEST_DIR > directory holding the config file.

    Raises:
        MissingEnvironmentError: None of the above is available.
    """
    env = os.environ if environ is None else environ

    if explicit:
        root = Path(explicit)
    else:
        root = None
        for var in ROOT_ENV_VARS:
            value = env.get(var)
            if value:
                root = Path(value)
                logger.debug("Project root from %s", var)
                break
        if root is None and config_path is not None:
            root = config_path.parent

    if root is None:
        raise MissingEnvironmentError(
            "Cannot determine the project root: pass --project-root, set "
            f"{' or '.join(ROOT_ENV_VARS)}, or add a {CONFIG_FILE}."
        )

    root = root.resolve()
    if not root.is_dir():
        raise MissingEnvironmentError(f"Project root is not a directory: {root}")
    return root
