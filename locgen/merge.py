"""Deep merge of locale shape trees.

Scalars follow last-write-wins: a later leaf replaces whatever was stored at
its key, including a whole previously merged branch, and a later branch
replaces a leaf. Key positions are fixed by their first insertion.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, List, MutableMapping, Optional, Tuple

from .models import MergeConflict, MergeReport, ShapeTree


def merge_into(
    target: MutableMapping[str, Any],
    incoming: Mapping[str, Any],
    conflicts: Optional[List[MergeConflict]] = None,
    *,
    _path: Tuple[str, ...] = (),
) -> None:
    """Merge ``incoming`` into ``target`` in place.

    When ``conflicts`` is given, every key whose value switches between a
    branch and a leaf is recorded there; the merge result is the same either
    way.
    """
    for key, value in incoming.items():
        path = _path + (key,)
        if isinstance(value, Mapping):
            existing = target.get(key)
            if not isinstance(existing, MutableMapping):
                if conflicts is not None and key in target:
                    conflicts.append(MergeConflict(path=path, previous="leaf", incoming="branch"))
                target[key] = {}
            merge_into(target[key], value, conflicts, _path=path)
        else:
            if conflicts is not None and isinstance(target.get(key), Mapping):
                conflicts.append(MergeConflict(path=path, previous="branch", incoming="leaf"))
            target[key] = value


def merge_trees(trees: Iterable[Mapping[str, Any]]) -> ShapeTree:
    """Fold ``trees`` left to right into a fresh tree; later trees win."""
    merged: ShapeTree = {}
    for tree in trees:
        merge_into(merged, tree)
    return merged


def merge_trees_with_report(trees: Iterable[Mapping[str, Any]]) -> MergeReport:
    """Like :func:`merge_trees` but also collect branch/leaf conflicts."""
    report = MergeReport(tree={})
    for tree in trees:
        merge_into(report.tree, tree, report.conflicts)
    return report


__all__ = ["merge_into", "merge_trees", "merge_trees_with_report"]
