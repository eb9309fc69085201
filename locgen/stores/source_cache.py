"""Short-lived cache of resolved locale sources."""

from __future__ import annotations

from typing import Callable, Dict, List

from ..sources import SourceAdapter


class SourceCache:
    """Keeps resolved sources keyed by their spec until explicitly invalidated.

    Watch mode holds one cache for its lifetime and clears it whenever the
    watched files change, so modules are imported afresh on the next run.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, List[SourceAdapter]] = {}
        self._stale: bool = False

    def get_or_load(
        self, key: str, loader: Callable[[str, bool], List[SourceAdapter]]
    ) -> List[SourceAdapter]:
        """Return cached sources for ``key`` or load them with ``loader(key, fresh)``."""
        cached = self._entries.get(key)
        if cached is not None:
            return cached
        loaded = loader(key, self._stale)
        self._entries[key] = loaded
        return loaded

    def invalidate(self, key: str | None = None) -> None:
        """Forget ``key``, or every entry when no key is given."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)
        self._stale = True


__all__ = ["SourceCache"]
