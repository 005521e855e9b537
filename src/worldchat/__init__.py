"""Cross-faction world chat relay with delayed login announcements."""

__version__ = "0.1.0"
