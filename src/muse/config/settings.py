"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import IO, Optional, Union

import yaml

from muse.errors import ConfigError
from muse.logconfig import get_logger
from muse.persistence import write_bytes
from muse.shell import ShellExpander

logger = get_logger(__name__)


def default_config_path() -> Path:
    """Return the default settings file location (unexpanded)."""
    return Path("~/.config/muse/config.yaml")


def default_data_dir() -> Path:
    """Return the default data directory (unexpanded)."""
    return Path("~/.local/share/muse")


def default_weight_csv_file() -> Path:
    """Return the default weight log file name."""
    return Path("weight.csv")


def _path_field(data: dict, key: str) -> Optional[Path]:
    """Read an optional path-valued key from parsed YAML."""
    if key not in data or data[key] is None:
        return None
    value = data[key]
    if not isinstance(value, str) or not value:
        raise ConfigError(f"'{key}' must be a non-empty path string, got {value!r}")
    return Path(value)


@dataclass
class Settings:
    """Main application settings.

    Paths are stored as written; call expand_paths() to resolve a leading
    `~` before using them.
    """

    data_dir: Path = field(default_factory=default_data_dir)
    weight_csv_file: Path = field(default_factory=default_weight_csv_file)

    @classmethod
    def load(cls, source: Union[IO[bytes], IO[str], bytes, str]) -> "Settings":
        """Parse settings from YAML.

        Missing keys keep their defaults and unknown keys are ignored.

        Args:
            source: Stream or raw YAML content

        Returns:
            Settings instance

        Raises:
            ConfigError: If the YAML is malformed or has invalid values
        """
        try:
            data = yaml.safe_load(source)
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid settings YAML: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"settings must be a mapping, got {type(data).__name__}")

        settings = cls()

        data_dir = _path_field(data, "data_dir")
        if data_dir is not None:
            settings.data_dir = data_dir

        weight_csv_file = _path_field(data, "weight_csv_file")
        if weight_csv_file is not None:
            settings.weight_csv_file = weight_csv_file

        return settings

    @classmethod
    def from_file(cls, config_path: Path) -> "Settings":
        """Load settings from a YAML file, or return defaults if it is missing."""
        if not config_path.exists():
            logger.debug("no settings file, using defaults", path=str(config_path))
            return cls()

        with open(config_path, "rb") as f:
            settings = cls.load(f)
        logger.debug("loaded settings", path=str(config_path))
        return settings

    def expand_paths(self, expander: ShellExpander) -> "Settings":
        """Return settings with a leading `~` expanded in each path.

        A field is only replaced when the expander produced a new path.

        Raises:
            EnvironmentLookupError: If a path needs the home directory and
                it is not set
        """
        settings = replace(self)

        expansion = expander.tilde(self.data_dir)
        if expansion.expanded:
            settings.data_dir = Path(expansion.path)
            logger.debug("expanded data_dir", path=str(settings.data_dir))

        expansion = expander.tilde(self.weight_csv_file)
        if expansion.expanded:
            settings.weight_csv_file = Path(expansion.path)
            logger.debug("expanded weight_csv_file", path=str(settings.weight_csv_file))

        return settings

    @property
    def weight_log_path(self) -> Path:
        """Full path of the weight log (an absolute weight_csv_file wins)."""
        return self.data_dir / self.weight_csv_file

    def to_dict(self) -> dict:
        """Return the settings as plain strings, e.g. for YAML or JSON."""
        return {
            "data_dir": str(self.data_dir),
            "weight_csv_file": str(self.weight_csv_file),
        }

    def save(self, config_path: Path) -> None:
        """Save current settings to a YAML file."""
        text = yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)
        write_bytes(text.encode("utf-8"), config_path)
