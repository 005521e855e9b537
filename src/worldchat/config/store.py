"""Process-wide holder for the current configuration snapshot."""

from __future__ import annotations

import logging
import threading

from worldchat.config.loader import load_config
from worldchat.config.schema import BroadcastConfig

logger = logging.getLogger(__name__)


class ConfigStore:
    """Holds the active :class:`BroadcastConfig` and swaps it atomically.

    Snapshots are frozen, so a reader that took :meth:`snapshot` keeps a
    consistent view even if :meth:`replace` runs concurrently.
    """

    def __init__(self, config: BroadcastConfig | None = None, path: str | None = None) -> None:
        self._lock = threading.Lock()
        self._config = config if config is not None else BroadcastConfig()
        self.path = path

    def snapshot(self) -> BroadcastConfig:
        """Return the current configuration."""
        with self._lock:
            return self._config

    def replace(self, config: BroadcastConfig) -> BroadcastConfig:
        """Install *config* as the current snapshot and return the previous one."""
        with self._lock:
            previous, self._config = self._config, config
        logger.debug("Configuration replaced: %s", config.model_dump())
        return previous

    def reload(self) -> BroadcastConfig:
        """Re-read :attr:`path` and install the result."""
        config = load_config(self.path)
        self.replace(config)
        logger.info(
            "World chat config loaded: enabled=%s channel=%s cross=%s announce=%s",
            config.enabled,
            config.channel_label,
            config.cross_affiliation,
            config.announce_on_join,
        )
        return config
