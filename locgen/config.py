"""Configuration loading for locgen (.locgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .emitter import DEFAULT_INTERFACE, DEFAULT_NAMESPACE

CONFIG_FILENAME = ".locgen.yml"
DEFAULT_OUT = "src/locales.d.ts"
DEFAULT_LISTEN_PATH = "src/i18n"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class DeclarationConfig:
    """Names used in the generated declaration blocks."""

    namespace: str = DEFAULT_NAMESPACE
    interface: str = DEFAULT_INTERFACE


@dataclass
class WatchConfig:
    """Polling settings for watch mode, in seconds."""

    interval: float = 0.5
    debounce: float = 0.3


@dataclass
class LocgenConfig:
    """Represents the settings defined in .locgen.yml."""

    root: Path
    sources: List[str] = field(default_factory=list)
    out: Optional[Path] = None
    listen_path: Optional[Path] = None
    declaration: DeclarationConfig = field(default_factory=DeclarationConfig)
    strict: bool = False
    max_workers: Optional[int] = None
    watch: WatchConfig = field(default_factory=WatchConfig)

    @property
    def output_path(self) -> Path:
        return self.out if self.out is not None else self.root / DEFAULT_OUT

    @property
    def watch_path(self) -> Path:
        return self.listen_path if self.listen_path is not None else self.root / DEFAULT_LISTEN_PATH


def load_config(config_path: Path) -> LocgenConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return LocgenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    declaration = DeclarationConfig()
    declaration_data = _as_dict(data.get("declaration"))
    if declaration_data:
        declaration.namespace = _as_str(declaration_data.get("namespace")) or DEFAULT_NAMESPACE
        declaration.interface = _as_str(declaration_data.get("interface")) or DEFAULT_INTERFACE

    watch = WatchConfig()
    watch_data = _as_dict(data.get("watch"))
    if watch_data:
        interval = _as_float(watch_data.get("interval"))
        debounce = _as_float(watch_data.get("debounce"))
        if interval is not None:
            if interval <= 0:
                raise ConfigError("watch.interval must be positive")
            watch.interval = interval
        if debounce is not None:
            if debounce < 0:
                raise ConfigError("watch.debounce must not be negative")
            watch.debounce = debounce

    out = _as_str(data.get("out"))
    listen_path = _as_str(data.get("listen_path"))
    max_workers = _as_int(data.get("max_workers"))
    if max_workers is not None and max_workers < 1:
        raise ConfigError("max_workers must be at least 1")

    return LocgenConfig(
        root=root,
        sources=_as_str_list(data.get("sources")),
        out=root / out if out else None,
        listen_path=root / listen_path if listen_path else None,
        declaration=declaration,
        strict=_as_bool(data.get("strict")) or False,
        max_workers=max_workers,
        watch=watch,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DeclarationConfig",
    "LocgenConfig",
    "WatchConfig",
    "load_config",
]
