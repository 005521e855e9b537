"""Configuration loading and merging."""

from __future__ import annotations

import copy
import logging
from typing import Any

import yaml

from worldchat.config.schema import BroadcastConfig

logger = logging.getLogger(__name__)

# Options may be written flat, as in a server .conf file
# (``World_Chat.Enable: 1``), or nested under a ``World_Chat`` section.
OPTION_PREFIX = "World_Chat."
SECTION_NAMES = ("World_Chat", "world_chat")


def load_config(path: str | None = None) -> BroadcastConfig:
    """Load a world chat configuration from a YAML file.

    Parameters
    ----------
    path:
        Path to a YAML configuration file.  If *None* or the file does
        not exist, a default :class:`BroadcastConfig` is returned.

    Returns
    -------
    BroadcastConfig
        Parsed configuration.  Individual malformed options fall back to
        their defaults.
    """
    if path is None:
        logger.debug("No config path provided, using defaults")
        return BroadcastConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning("Config file not found: %s -- using defaults", path)
        return BroadcastConfig()
    except yaml.YAMLError as exc:
        logger.error("Failed to parse YAML config %s: %s", path, exc)
        return BroadcastConfig()

    if data is None:
        return BroadcastConfig()
    if not isinstance(data, dict):
        logger.warning("Config file %s did not produce a dict, using defaults", path)
        return BroadcastConfig()

    return BroadcastConfig.model_validate(extract_options(data))


def extract_options(data: dict[str, Any]) -> dict[str, Any]:
    """Collect world chat options from a parsed config document.

    Flat ``World_Chat.<Option>`` keys win over a nested section; any other
    top-level keys are passed through unchanged.
    """
    options: dict[str, Any] = {}
    for key, value in data.items():
        if key in SECTION_NAMES and isinstance(value, dict):
            options.update(value)
        elif isinstance(key, str) and key.startswith(OPTION_PREFIX):
            continue
        else:
            options[key] = value

    for key, value in data.items():
        if isinstance(key, str) and key.startswith(OPTION_PREFIX):
            options[key[len(OPTION_PREFIX):]] = value
    return options


def merge_configs(base: BroadcastConfig, overrides: dict[str, Any]) -> BroadcastConfig:
    """Apply *overrides* on top of *base* and return a new snapshot.

    Overrides may use either field names or option aliases.
    """
    merged = _deep_merge(base.model_dump(), _to_field_names(overrides))
    return BroadcastConfig.model_validate(merged)


def _to_field_names(overrides: dict[str, Any]) -> dict[str, Any]:
    """Translate option aliases in *overrides* to field names."""
    aliases = {
        info.alias: name
        for name, info in BroadcastConfig.model_fields.items()
        if info.alias
    }
    return {aliases.get(key, key): value for key, value in extract_options(overrides).items()}


def _deep_merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge *overrides* into a copy of *base*."""
    result = copy.deepcopy(base)
    for key, value in overrides.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result
