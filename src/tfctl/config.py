"""tfctl.yaml loading, caching and namespaced lookups.

Lookups take a dotted key. When a namespace is active (the running command,
e.g. ``sq``) ``<namespace>.<key>`` is tried before the bare ``<key>``, so a
config file can hold both global and per-command defaults::

    color: true
    sq:
      color: false
      chop: true
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError

CONFIG_FILE = "tfctl.yaml"
CONFIG_ENV = "TFCTL_CONFIG"

_MISSING = object()


class Config(BaseModel):
    """Parsed tfctl.yaml plus the namespace lookups are scoped to."""

    source: Optional[Path] = None
    namespace: str = ""
    data: Dict[str, Any] = Field(default_factory=dict)

    def _walk(self, key: str) -> Any:
        current: Any = self.data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return _MISSING
            current = current[part]
        return current

    def candidates(self, key: str) -> List[str]:
        if self.namespace:
            return [f"{self.namespace}.{key}", key]
        return [key]

    def get(self, key: str, default: Any = None) -> Any:
        """Return the first value found among the candidate keys."""
        for candidate in self.candidates(key):
            value = self._walk(candidate)
            if value is not _MISSING:
                return value
        return default

    def get_string(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self.get(key)
        if value is None:
            return default
        if not isinstance(value, str):
            raise ConfigError(f"config value {key!r} is not a string")
        return value

    def get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        value = self.get(key)
        if value is None:
            return default
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"config value {key!r} is not an int")
        return int(value)

    def get_bool(self, key: str, default: Optional[bool] = None) -> Optional[bool]:
        value = self.get(key)
        if value is None:
            return default
        if not isinstance(value, bool):
            raise ConfigError(f"config value {key!r} is not a boolean")
        return value


def resolve_config_path(cli_path: Optional[Path] = None) -> Optional[Path]:
    """
    Resolve the tfctl.yaml path with precedence:
    1. explicit path (CLI --config)
    2. TFCTL_CONFIG env var
    3. $XDG_CONFIG_HOME, $APPDATA, $HOME (first existing tfctl.yaml)
    """
    if cli_path:
        return cli_path

    env = os.getenv(CONFIG_ENV)
    if env:
        return Path(env).expanduser()

    for var in ("XDG_CONFIG_HOME", "APPDATA", "HOME"):
        base = os.getenv(var)
        if not base:
            continue
        candidate = Path(base) / CONFIG_FILE
        if candidate.is_file():
            return candidate

    return None


def load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping, raising ConfigError on unreadable content."""
    yaml = YAML(typ="safe", pure=True)
    try:
        data = yaml.load(path.read_text(encoding="utf-8"))
    except (OSError, YAMLError) as e:
        raise ConfigError(f"failed to load {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping")
    return data


_CONFIG: Config | None = None


def reset() -> None:
    """Reset cached config (primarily for tests)."""

    global _CONFIG
    _CONFIG = None


def use(path: Path | str | None = None) -> Config:
    """Load config from ``path`` (or fallback locations) and cache it."""

    target = Path(path) if path is not None else None
    resolved = resolve_config_path(target)

    if resolved is None or not resolved.exists():
        config_obj = Config(source=resolved)
    else:
        config_obj = Config(source=resolved, data=load_yaml(resolved))

    global _CONFIG
    _CONFIG = config_obj
    return config_obj


def require() -> Config:
    """Return the cached config, loading it if necessary."""

    if _CONFIG is None:
        return use(None)
    return _CONFIG


def set_namespace(namespace: str) -> Config:
    """Scope subsequent lookups to a command namespace."""

    cfg = require()
    cfg.namespace = namespace
    return cfg


def get_string(key: str, default: Optional[str] = None) -> Optional[str]:
    return require().get_string(key, default)


__all__ = [
    "CONFIG_ENV",
    "CONFIG_FILE",
    "Config",
    "get_string",
    "load_yaml",
    "require",
    "reset",
    "resolve_config_path",
    "set_namespace",
    "use",
]
