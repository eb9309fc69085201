"""Adapter contract for locale sources."""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Callable, Iterable, Tuple

from ..logging import get_logger
from ..merge import merge_trees
from ..models import ShapeTree
from ..placeholders import build_positional_template

_LOGGER = get_logger("sources")

LocaleEntry = Tuple[str, ShapeTree]


class SourceError(RuntimeError):
    """Raised when a locale source cannot be located or read."""


class SourceAdapter(ABC):
    """Contract for providers of locale entries belonging to one client."""

    @property
    @abstractmethod
    def identity(self) -> str:
        """Stable identifier used for caching and log output."""

    @abstractmethod
    def entries(self) -> Iterable[LocaleEntry]:
        """Yield ``(identifier, tree)`` pairs whose leaves are raw templates."""

    def shape(self) -> ShapeTree:
        """Return the structural union of every entry, later entries winning."""
        return merge_trees(tree for _, tree in self.entries())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.identity!r})"


def normalize_tree(data: Mapping[str, Any]) -> ShapeTree:
    """Return a plain-dict copy of ``data`` with template strings as leaves."""
    tree: ShapeTree = {}
    for key, value in data.items():
        normalized = normalize_value(value)
        if normalized is None:
            _LOGGER.debug("Dropping key %s with unsupported value %r", key, type(value).__name__)
            continue
        tree[str(key)] = normalized
    return tree


def normalize_value(value: Any) -> Any:
    """Normalize a single locale value; returns None for values that carry no shape."""
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return normalize_tree(value)
    if callable(value):
        return template_from_callable(value)
    return None


def template_from_callable(func: Callable[..., Any]) -> str:
    """Rebuild a best-effort template for an already-compiled message.

    The template text is not recoverable, so the result holds one generic
    placeholder per required positional parameter.
    """
    return build_positional_template(_required_positional_count(func))


def _required_positional_count(func: Callable[..., Any]) -> int:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        _LOGGER.debug("Cannot inspect %r; treating it as taking no arguments", func)
        return 0
    count = 0
    for parameter in signature.parameters.values():
        if parameter.kind not in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            break
        if parameter.default is not inspect.Parameter.empty:
            break
        count += 1
    return count


__all__ = [
    "LocaleEntry",
    "SourceAdapter",
    "SourceError",
    "normalize_tree",
    "normalize_value",
    "template_from_callable",
]
