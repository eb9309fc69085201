"""Locale source adapters and resolution of source specs."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from ..logging import get_logger
from .base import LocaleEntry, SourceAdapter, SourceError, normalize_tree, template_from_callable
from .files import DirectorySource, read_locale_file
from .mapping import MappingSource
from .module import CatalogSource, discover_catalogs, load_module_sources, split_spec

_LOGGER = get_logger("sources")


def resolve_source(spec: str, base_dir: Path, *, fresh: bool = False) -> List[SourceAdapter]:
    """Turn one source spec into the client sources it provides.

    A directory is a single client. A ``.py`` file or ``package.module[:attr]``
    spec yields one client per catalog the module exports.
    """
    target, _ = split_spec(spec)
    candidate = Path(target).expanduser()
    if not candidate.is_absolute():
        candidate = base_dir / candidate
    if candidate.is_dir():
        return [DirectorySource(candidate)]
    if candidate.suffix == ".py":
        return load_module_sources(spec, base_dir, fresh=fresh)
    if candidate.exists():
        raise SourceError(f"Unsupported locale source: {candidate}")
    if "/" in target or "\\" in target:
        raise SourceError(f"Locale source not found: {candidate}")
    return load_module_sources(spec, base_dir, fresh=fresh)


def resolve_sources(
    specs: Sequence[str], base_dir: Path, *, fresh: bool = False
) -> List[SourceAdapter]:
    """Resolve every spec in order; fails when nothing usable was found."""
    sources: List[SourceAdapter] = []
    for spec in specs:
        resolved = resolve_source(spec, base_dir, fresh=fresh)
        _LOGGER.debug("Source %s provided %d client(s)", spec, len(resolved))
        sources.extend(resolved)
    if not sources:
        raise SourceError("No locale sources configured")
    return sources


__all__ = [
    "CatalogSource",
    "DirectorySource",
    "LocaleEntry",
    "MappingSource",
    "SourceAdapter",
    "SourceError",
    "discover_catalogs",
    "load_module_sources",
    "normalize_tree",
    "read_locale_file",
    "resolve_source",
    "resolve_sources",
    "template_from_callable",
]
