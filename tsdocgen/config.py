"""Configuration loading for tsdocgen (.tsdocgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".tsdocgen.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class TsDocGenConfig:
    """Settings for a documentation run, rooted at the project directory."""

    root: Path
    input: str = "jsDoc.json"
    packages_dir: str = "packages"
    # Only components whose key contains this text are written; "" selects all.
    component_filter: str = "mdc-drawer"
    module_prefix: str = "MDC"

    @property
    def input_path(self) -> Path:
        return self.root / self.input

    @property
    def packages_path(self) -> Path:
        return self.root / self.packages_dir


def load_config(config_path: Path) -> TsDocGenConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return TsDocGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = TsDocGenConfig(root=root)
    input_name = _as_str(data.get("input"))
    if input_name:
        config.input = input_name
    packages_dir = _as_str(data.get("packages_dir"))
    if packages_dir:
        config.packages_dir = packages_dir
    if "component_filter" in data:
        component_filter = _as_str(data.get("component_filter"))
        config.component_filter = component_filter or ""
    module_prefix = _as_str(data.get("module_prefix"))
    if module_prefix:
        config.module_prefix = module_prefix
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


__all__ = ["CONFIG_FILENAME", "ConfigError", "TsDocGenConfig", "load_config"]
