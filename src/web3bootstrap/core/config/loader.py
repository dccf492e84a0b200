"""
Configuration loader — reads bootstrap.yml into a BootstrapConfig.

The file is optional.  When none is found the defaults apply: lenient
policy, ask before Docker, append to ``~/.zprofile``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from web3bootstrap.core.data.recipes import default_registry, select_steps
from web3bootstrap.core.models.config import BootstrapConfig
from web3bootstrap.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE = "bootstrap.yml"


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for bootstrap.yml from ``start_dir`` (default: cwd) upward.

    Returns:
        Path to bootstrap.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config(path: Path | None = None, *, search: bool = True) -> BootstrapConfig:
    """Load and validate bootstrap configuration.

    Args:
        path: Explicit path to bootstrap.yml.  If None and ``search`` is
            set, searches upward from the cwd; if nothing is found the
            defaults are returned.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None and search:
        path = find_config_file()

    if path is None:
        logger.debug("No %s found, using defaults", CONFIG_FILE)
        return BootstrapConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading bootstrap config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Allow everything to be nested under a "bootstrap" key
    if isinstance(data.get("bootstrap"), dict):
        data = data["bootstrap"]

    try:
        config = BootstrapConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid bootstrap configuration: {e}") from e

    # Unknown step names are configuration errors, not silent no-ops
    select_steps(default_registry(), only=config.only, skip=config.skip)

    logger.info("Loaded bootstrap config from %s (policy=%s)", path, config.policy.value)
    return config
