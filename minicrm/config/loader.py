"""Layered TOML configuration for minicrm.

Settings come from two files in the config directory: ``default.toml``,
which must exist, and an optional ``<environment>.toml`` layered on top.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIR_ENV = "MINICRM_CONFIG_DIR"
ENVIRONMENT_ENV = "MINICRM_ENV"
DEFAULT_ENVIRONMENT = "development"

# minicrm/config/loader.py -> <project root>/config
PROJECT_CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"


def get_config_dir() -> Path:
    """Return the directory holding minicrm's TOML files.

    MINICRM_CONFIG_DIR wins when set; otherwise the ``config/`` directory
    shipped next to the ``minicrm`` package is used.

    Raises:
        FileNotFoundError: If MINICRM_CONFIG_DIR names a missing directory
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if not override:
        return PROJECT_CONFIG_DIR

    path = Path(override).expanduser()
    if not path.is_dir():
        raise FileNotFoundError(f"{CONFIG_DIR_ENV} points at a missing directory: {override}")
    return path


def get_environment() -> str:
    """Return the active environment name, lower-cased."""
    return os.environ.get(ENVIRONMENT_ENV, "").strip().lower() or DEFAULT_ENVIRONMENT


def load_toml(file_path: Path) -> dict[str, Any]:
    """Parse one TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")
    return tomllib.loads(file_path.read_text(encoding="utf-8"))


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Layer ``override`` onto ``base`` without mutating either.

    Tables present in both are merged key by key; anything else in
    ``override`` replaces the value in ``base``.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def config_layers(config_dir: Path, environment: str) -> list[Path]:
    """Files to load for an environment, lowest precedence first.

    Raises:
        FileNotFoundError: If ``default.toml`` is missing
    """
    default_path = config_dir / "default.toml"
    if not default_path.is_file():
        raise FileNotFoundError(
            f"Default configuration file not found: {default_path}. "
            f"Add it or set {CONFIG_DIR_ENV}."
        )

    layers = [default_path]
    env_path = config_dir / f"{environment}.toml"
    if environment != "default" and env_path.is_file():
        layers.append(env_path)
    return layers


def load_config(
    environment: str | None = None,
    config_dir: Path | None = None,
) -> dict[str, Any]:
    """Load and merge the configuration layers into one dict."""
    config_dir = config_dir or get_config_dir()
    environment = environment or get_environment()

    config: dict[str, Any] = {}
    for path in config_layers(config_dir, environment):
        config = deep_merge(config, load_toml(path))
    return config
