"""Locale sources backed by JSON / YAML files on disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable

import yaml

from ..logging import get_logger
from ..models import ShapeTree
from .base import LocaleEntry, SourceAdapter, SourceError, normalize_tree

LOCALE_SUFFIXES = (".json", ".yml", ".yaml")

_LOGGER = get_logger("sources.files")


class DirectorySource(SourceAdapter):
    """Reads one client's locales from a directory.

    Layouts::

        i18n/en.json              -> entry "en"
        i18n/fr/common.yml        -> entry "fr" with {"common": {...}}
        i18n/fr/admin/users.json  -> entry "fr" with {"admin": {"users": {...}}}
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path).expanduser().resolve()

    @property
    def identity(self) -> str:
        return str(self.path)

    def entries(self) -> Iterable[LocaleEntry]:
        if not self.path.is_dir():
            raise SourceError(f"Locale directory not found: {self.path}")
        for child in _visible_children(self.path):
            if child.is_dir():
                yield child.name, _read_namespace_dir(child)
            elif child.suffix.lower() in LOCALE_SUFFIXES:
                yield child.stem, read_locale_file(child)


def read_locale_file(path: Path) -> ShapeTree:
    """Load a JSON or YAML locale file into a shape tree."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}

    try:
        if path.suffix.lower() == ".json":
            data: Any = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SourceError(f"Failed to parse {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SourceError(f"{path} must contain a mapping at the root")
    _LOGGER.debug("Loaded %s (%d top-level keys)", path, len(data))
    return normalize_tree(data)


def _read_namespace_dir(directory: Path) -> ShapeTree:
    tree: Dict[str, Any] = {}
    for child in _visible_children(directory):
        if child.is_dir():
            tree[child.name] = _read_namespace_dir(child)
        elif child.suffix.lower() in LOCALE_SUFFIXES:
            tree[child.stem] = read_locale_file(child)
    return tree


def _visible_children(directory: Path) -> Iterable[Path]:
    return sorted(
        (child for child in directory.iterdir() if not child.name.startswith(".")),
        key=lambda child: child.name,
    )
