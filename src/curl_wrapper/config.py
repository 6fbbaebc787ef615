"""Configuration loader for request defaults.

Loads defaults from YAML files with priority resolution:
1. User config: ~/.config/curl_wrapper/config.yaml (highest priority)
2. Project config: .curl_wrapper/config.yaml in current directory
3. Built-in defaults (fallback)
"""

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Lazy import yaml to avoid startup cost
_yaml = None


def _get_yaml():
    """Lazy-load PyYAML."""
    global _yaml
    if _yaml is None:
        import yaml
        _yaml = yaml
    return _yaml


CONFIG_FILENAME = "config.yaml"


def default_config_locations() -> list[Path]:
    """Config directories in priority order, highest first."""
    return [
        Path.home() / ".config" / "curl_wrapper",  # User overrides
        Path.cwd() / ".curl_wrapper",               # Project config
    ]


@dataclass
class CurlConfig:
    """Defaults applied to every new request builder."""
    curl_path: str = "curl"
    timeout: float = 300  # 5 minute timeout
    proxy: Optional[str] = None
    interface: Optional[str] = None
    redirects: bool = False
    compressed: bool = False
    headers: list[str] = field(default_factory=list)

    def merged(self, data: dict) -> "CurlConfig":
        """Return a copy with known keys from ``data`` applied."""
        known = {f.name for f in fields(self)}
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values["headers"] = list(self.headers)
        for key, value in data.items():
            if key not in known:
                logger.debug("Ignoring unknown config key %r", key)
                continue
            if key == "headers":
                if isinstance(value, str):
                    value = [value]
                value = [str(h) for h in (value or [])]
            values[key] = value
        return CurlConfig(**values)


def _read_config_file(path: Path) -> Optional[dict]:
    """Read one YAML config file. Returns None if missing or unusable."""
    if not path.is_file():
        return None

    yaml = _get_yaml()

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return None

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError:
        logger.warning("Ignoring malformed config file %s", path)
        return None

    if not isinstance(data, dict):
        return None
    return data


def load_config(locations: Optional[list[Path]] = None) -> CurlConfig:
    """Load request defaults from config files.

    Lower-priority files are applied first so that higher-priority files
    override only the keys they set.

    Args:
        locations: Config directories in priority order, highest first.
            Defaults to the user and project directories.
    """
    if locations is None:
        locations = default_config_locations()

    config = CurlConfig()
    for config_dir in reversed(locations):
        data = _read_config_file(config_dir / CONFIG_FILENAME)
        if data:
            logger.debug("Loaded config from %s", config_dir / CONFIG_FILENAME)
            config = config.merged(data)
    return config
