"""Configuration loading and validation."""

from worldchat.config.schema import DEFAULT_ANNOUNCE_TEXT, BroadcastConfig
from worldchat.config.loader import extract_options, load_config, merge_configs
from worldchat.config.store import ConfigStore

__all__ = [
    "DEFAULT_ANNOUNCE_TEXT",
    "BroadcastConfig",
    "ConfigStore",
    "extract_options",
    "load_config",
    "merge_configs",
]
