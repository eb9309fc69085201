"""In-memory locale source."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from .base import LocaleEntry, SourceAdapter, normalize_tree


class MappingSource(SourceAdapter):
    """Serves locale trees held in a plain mapping of locale id to tree."""

    def __init__(self, locales: Mapping[str, Mapping[str, Any]], *, name: str = "memory") -> None:
        self._locales = locales
        self._name = name

    @property
    def identity(self) -> str:
        return self._name

    def entries(self) -> Iterable[LocaleEntry]:
        for locale_id, data in self._locales.items():
            yield str(locale_id), normalize_tree(data)
