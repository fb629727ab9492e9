"""
Configuration system for the lint ratchet.

Supports YAML and JSON configuration files for choosing the baseline file,
the scanned extensions, the suppression attributes and the override variable.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional, List, Mapping
from dataclasses import dataclass, field, asdict

import yaml

from lintratchet.exceptions import ConfigError


# Default configuration file names to search for
CONFIG_FILE_NAMES = [
    ".lintratchet.yaml",
    ".lintratchet.yml",
    ".lintratchet.json",
]

# Environment variable that overrides the baseline path
BASELINE_ENV = "LINTRATCHET_BASELINE"


@dataclass
class RatchetConfig:
    """
    Main configuration for the lint ratchet.

    Example YAML config:

    ```yaml
    ratchet:
      baseline: .therug.yaml
      extensions:
        - ".rs"
      suppression_attributes:
        - allow
      override_env: UPDATE_ANYWAY
    ```
    """
    baseline: str = ".therug.yaml"
    extensions: List[str] = field(default_factory=lambda: [".rs"])
    suppression_attributes: List[str] = field(default_factory=lambda: ["allow"])
    override_env: str = "UPDATE_ANYWAY"

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a dictionary."""
        return asdict(self)

    def override_requested(self, environ: Optional[Mapping[str, str]] = None) -> bool:
        """True when the override variable is exactly ``"1"``."""
        environ = os.environ if environ is None else environ
        return environ.get(self.override_env) == "1"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RatchetConfig":
        """Create config from a dictionary."""
        data = dict(data)

        # Map some common alternative names
        if "baseline_path" in data:
            data["baseline"] = data.pop("baseline_path")
        if "attributes" in data:
            data["suppression_attributes"] = data.pop("attributes")

        for key in ("extensions", "suppression_attributes"):
            if key in data and isinstance(data[key], str):
                data[key] = [data[key]]

        # Filter to only known fields
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}

        return cls(**filtered_data)


def load_config(path: str) -> Dict[str, Any]:
    """
    Load configuration from a file.

    Supports YAML and JSON formats.
    """
    path = Path(path)

    if not path.exists():
        raise ConfigError(str(path), "file not found")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(str(path), f"cannot be read: {e}") from e

    try:
        if path.suffix == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(str(path), f"cannot be parsed: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(str(path), "expected a mapping at the top level")
    return data


def find_config(start_path: str = ".") -> Optional[str]:
    """
    Find a configuration file by searching up the directory tree.

    Returns the path to the first config file found, or None.
    """
    current = Path(start_path).resolve()

    while True:
        for name in CONFIG_FILE_NAMES:
            config_path = current / name
            if config_path.exists():
                return str(config_path)
        if current == current.parent:
            return None
        current = current.parent


def load_ratchet_config(
    path: Optional[str] = None,
    start_dir: str = ".",
    environ: Optional[Mapping[str, str]] = None,
) -> RatchetConfig:
    """
    Load a RatchetConfig from a file or create a default one.

    If path is None, searches for a config file starting from start_dir.
    The ``LINTRATCHET_BASELINE`` environment variable takes precedence over
    the baseline named in the file.
    """
    if path is None:
        path = find_config(start_dir)

    if path is None:
        config = RatchetConfig()
    else:
        data = load_config(path)

        # Handle nested 'ratchet' section
        if "ratchet" in data:
            section = data.pop("ratchet")
            if not isinstance(section, dict):
                raise ConfigError(str(path), "'ratchet' must be a mapping")
            data.update(section)

        try:
            config = RatchetConfig.from_dict(data)
        except TypeError as e:
            raise ConfigError(str(path), str(e)) from e

    environ = os.environ if environ is None else environ
    if environ.get(BASELINE_ENV):
        config.baseline = environ[BASELINE_ENV]

    return config


def create_default_config() -> str:
    """
    Create a default configuration file content.
    """
    config = {"ratchet": RatchetConfig().to_dict()}
    return yaml.safe_dump(config, default_flow_style=False, sort_keys=False)
