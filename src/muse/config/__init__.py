"""Configuration management."""

from __future__ import annotations

from muse.config.settings import Settings, default_config_path

__all__ = ["Settings", "default_config_path"]
