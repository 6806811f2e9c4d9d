"""
Load a GameConfig from YAML.

Only keys that name a GameConfig field are applied; anything else is logged
and skipped. `demo_roles` is checked against the role set on load, so a typo
fails here rather than halfway through seating the demo table.
"""

import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .game_config import GameConfig, default_config
from ..core.roles import parse_role

logger = logging.getLogger(__name__)


def _parse_demo_roles(value: Any, source: str) -> List[str]:
    if not isinstance(value, list):
        raise ValueError(f"{source}: demo_roles must be a list of role names")
    try:
        return [parse_role(name).value for name in value]
    except ValueError as e:
        raise ValueError(f"{source}: {e}") from None


def _settings_from(raw: Dict[str, Any], source: str) -> Dict[str, Any]:
    """The subset of `raw` that GameConfig understands, validated."""
    known = {f.name for f in fields(GameConfig)}
    settings = {}
    for key, value in raw.items():
        if key not in known:
            logger.warning("Ignoring unknown config key '%s' in %s", key, source)
            continue
        settings[key] = value

    if "demo_roles" in settings:
        settings["demo_roles"] = _parse_demo_roles(settings["demo_roles"], source)
    return settings


def load_config_from_yaml(config_path: str) -> GameConfig:
    """
    Build a fresh GameConfig from a YAML file; missing keys keep their defaults.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not a mapping or names an unknown role
        yaml.YAMLError: If the YAML is malformed
    """
    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with path.open() as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{config_path}: expected a mapping of settings, got {type(raw).__name__}")

    return GameConfig(**_settings_from(raw, config_path))


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """The YAML config at `config_path`, or the shared defaults when no path is given."""
    if config_path is None:
        return default_config
    return load_config_from_yaml(config_path)
