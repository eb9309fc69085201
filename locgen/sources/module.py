"""Locale sources discovered inside Python modules.

A module exposes its clients as module-level objects. Every public attribute
is searched (including inside lists, tuples and dicts) for catalogs:

* :class:`SourceAdapter` instances are used unchanged;
* any other object with a ``locales`` mapping is wrapped in
  :class:`CatalogSource`.

The search stops descending once an object is recognised as a catalog.
"""

from __future__ import annotations

import importlib
import importlib.util
import sys
import types
from collections.abc import Mapping
from itertools import count
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Set

from ..logging import get_logger
from ..models import ShapeTree
from .base import LocaleEntry, SourceAdapter, SourceError, normalize_tree

_LOGGER = get_logger("sources.module")
_MODULE_COUNTER = count(1)


class CatalogSource(SourceAdapter):
    """Adapts a runtime catalog object with a ``locales`` mapping.

    Each locale value may carry its raw templates in ``contents`` (a sequence
    or mapping of items holding a ``data`` tree, as an attribute or as a record
    key), in ``data`` directly, or only compiled messages in ``content``.
    Compiled messages are callables and go through the positional-placeholder
    fallback.
    """

    def __init__(self, catalog: Any, *, name: str) -> None:
        self.catalog = catalog
        self._name = name

    @property
    def identity(self) -> str:
        return self._name

    def entries(self) -> Iterable[LocaleEntry]:
        locales = getattr(self.catalog, "locales", None)
        if not isinstance(locales, Mapping):
            return
        for locale_id, locale in locales.items():
            for tree in _locale_trees(locale):
                yield str(locale_id), tree


def is_catalog(obj: Any) -> bool:
    """Return True when ``obj`` looks like a locale catalog."""
    if isinstance(obj, SourceAdapter):
        return True
    if isinstance(obj, (type, types.ModuleType)):
        return False
    return isinstance(getattr(obj, "locales", None), Mapping)


def discover_catalogs(obj: Any, *, origin: str) -> List[SourceAdapter]:
    """Return a source for every catalog reachable from ``obj``.

    Modules are searched through their public attributes, anything else from
    the object itself.
    """
    if isinstance(obj, types.ModuleType):
        roots = [(f":{attr}", value) for attr, value in _public_attributes(obj)]
    else:
        roots = [("", obj)]
    sources: List[SourceAdapter] = []
    visited: Set[int] = set()
    for root_path, value in roots:
        for path, catalog in _search(value, root_path, visited):
            if isinstance(catalog, SourceAdapter):
                sources.append(catalog)
            else:
                sources.append(CatalogSource(catalog, name=f"{origin}{path}"))
    return sources


def split_spec(spec: str) -> tuple[str, str]:
    """Split ``target:attr``; a colon inside a path (drive letters) is not a separator."""
    target, separator, attr = spec.rpartition(":")
    if not separator or "/" in attr or "\\" in attr:
        return spec, ""
    return target, attr


def load_module(spec: str, base_dir: Path, *, fresh: bool = False) -> Any:
    """Import ``spec`` (a ``.py`` path or ``package.module[:attr]``) and return the object."""
    target, attr = split_spec(spec)
    if _looks_like_path(target):
        module = _load_from_path(_resolve_path(target, base_dir))
    else:
        module = _import_dotted(target, fresh=fresh)
    if not attr:
        return module
    try:
        return getattr(module, attr)
    except AttributeError as exc:
        raise SourceError(f"Module {target} has no attribute {attr!r}") from exc


def load_module_sources(spec: str, base_dir: Path, *, fresh: bool = False) -> List[SourceAdapter]:
    """Load ``spec`` and return the catalogs it exports."""
    loaded = load_module(spec, base_dir, fresh=fresh)
    if isinstance(loaded, SourceAdapter):
        found: List[SourceAdapter] = [loaded]
    elif is_catalog(loaded):
        found = [CatalogSource(loaded, name=spec)]
    else:
        found = discover_catalogs(loaded, origin=spec)
    if not found:
        if isinstance(loaded, types.ModuleType):
            exports = ", ".join(name for name, _ in _public_attributes(loaded)) or "(none)"
        else:
            exports = type(loaded).__name__
        raise SourceError(
            f"No locale catalogs found in {spec}. Export your catalogs from the module. "
            f"Available exports: {exports}"
        )
    _LOGGER.debug("Discovered %d catalog(s) in %s", len(found), spec)
    return found


def _locale_trees(locale: Any) -> Iterator[ShapeTree]:
    contents = getattr(locale, "contents", None)
    if contents is not None:
        items = contents.values() if isinstance(contents, Mapping) else contents
        for item in items:
            data = _record_data(item)
            if isinstance(data, Mapping):
                yield normalize_tree(data)
        return

    for attr in ("data", "content"):
        data = getattr(locale, attr, None)
        if isinstance(data, Mapping):
            yield normalize_tree(data)
            return

    if isinstance(locale, Mapping):
        yield normalize_tree(locale)
        return
    _LOGGER.debug("Locale %r carries no readable templates; skipping", locale)


def _record_data(item: Any) -> Any:
    if isinstance(item, Mapping):
        data = item.get("data")
        return data if isinstance(data, Mapping) else item
    return getattr(item, "data", item)


def _search(obj: Any, path: str, visited: Set[int]) -> Iterator[tuple[str, Any]]:
    if obj is None or isinstance(obj, (str, bytes, int, float, bool)):
        return
    if id(obj) in visited:
        return
    visited.add(id(obj))

    if is_catalog(obj):
        yield path, obj
        return
    if isinstance(obj, (list, tuple)):
        for index, item in enumerate(obj):
            yield from _search(item, f"{path}[{index}]", visited)
    elif isinstance(obj, Mapping):
        for key, item in obj.items():
            yield from _search(item, f"{path}.{key}", visited)


def _public_attributes(module: Any) -> List[tuple[str, Any]]:
    names = getattr(module, "__all__", None)
    if names is None:
        names = [name for name in vars(module) if not name.startswith("_")]
    return [(name, getattr(module, name)) for name in names if hasattr(module, name)]


def _looks_like_path(spec: str) -> bool:
    return spec.endswith(".py") or "/" in spec or "\\" in spec


def _resolve_path(target: str, base_dir: Path) -> Path:
    path = Path(target).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path.resolve()


def _load_from_path(path: Path) -> types.ModuleType:
    if not path.is_file():
        raise SourceError(f"Locale module not found: {path}")
    # Registered only while executing so class decorators can find the module.
    module_name = f"_locgen_source_{path.stem}_{next(_MODULE_COUNTER)}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise SourceError(f"Cannot import {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise SourceError(f"Error importing {path}: {exc}") from exc
    finally:
        sys.modules.pop(module_name, None)
    return module


def _import_dotted(name: str, *, fresh: bool) -> types.ModuleType:
    try:
        if fresh and name in sys.modules:
            return importlib.reload(sys.modules[name])
        return importlib.import_module(name)
    except ImportError as exc:
        raise SourceError(f"Cannot import module {name}: {exc}") from exc
    except Exception as exc:
        raise SourceError(f"Error importing {name}: {exc}") from exc


__all__ = [
    "CatalogSource",
    "discover_catalogs",
    "is_catalog",
    "load_module",
    "load_module_sources",
    "split_spec",
]
