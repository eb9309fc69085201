"""Per-client generation of localization declarations.

Each source is one client: its locale entries are merged into a single shape
tree and rendered into its own ``declare global`` block. Clients are never
merged with each other.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .emitter import DEFAULT_INTERFACE, DEFAULT_NAMESPACE, render_declaration
from .logging import get_logger
from .merge import merge_trees_with_report
from .models import ClientDeclaration, MergeConflict, MergeReport
from .signatures import is_identifier_name
from .sources import SourceAdapter

_LOGGER = get_logger("generator")


class MergeConflictError(RuntimeError):
    """Raised in strict mode when locale entries disagree on a key's shape."""

    def __init__(self, message: str, conflicts: Sequence[MergeConflict]) -> None:
        super().__init__(message)
        self.conflicts = list(conflicts)


@dataclass
class GenerationConfig:
    """Resolved inputs for one generation run."""

    sources: List[SourceAdapter]
    output_path: Optional[Path] = None
    namespace: str = DEFAULT_NAMESPACE
    interface: str = DEFAULT_INTERFACE
    strict: bool = False
    max_workers: Optional[int] = None

    def __post_init__(self) -> None:
        if not all(is_identifier_name(part) for part in self.namespace.split(".")):
            raise ValueError(f"Invalid namespace name: {self.namespace!r}")
        if not is_identifier_name(self.interface):
            raise ValueError(f"Invalid interface name: {self.interface!r}")


def create_generation_config(
    sources: Union[SourceAdapter, Sequence[SourceAdapter]],
    output_path: Optional[Path] = None,
    **options: object,
) -> GenerationConfig:
    """Build a config from one source or a list of them."""
    if isinstance(sources, SourceAdapter):
        source_list = [sources]
    else:
        source_list = list(sources)
    return GenerationConfig(sources=source_list, output_path=output_path, **options)  # type: ignore[arg-type]


def merge_source(source: SourceAdapter, *, strict: bool = False) -> MergeReport:
    """Merge every locale entry of ``source`` into one shape tree."""
    entries = list(source.entries())
    report = merge_trees_with_report(tree for _, tree in entries)
    _LOGGER.debug(
        "Merged %d locale entr%s for %s",
        len(entries),
        "y" if len(entries) == 1 else "ies",
        source.identity,
    )
    if report.conflicts:
        details = "; ".join(conflict.describe() for conflict in report.conflicts)
        if strict:
            raise MergeConflictError(
                f"Conflicting locale shapes in {source.identity}: {details}",
                report.conflicts,
            )
        _LOGGER.debug("Overwrote conflicting keys in %s: %s", source.identity, details)
    return report


def generate_client_declarations(config: GenerationConfig) -> List[ClientDeclaration]:
    """Render one declaration block per source, in source order."""
    tagged = len(config.sources) > 1

    def _render(indexed: tuple[int, SourceAdapter]) -> ClientDeclaration:
        index, source = indexed
        report = merge_source(source, strict=config.strict)
        client_index = index if tagged else None
        text = render_declaration(
            report.tree,
            client_index=client_index,
            namespace=config.namespace,
            interface=config.interface,
        )
        return ClientDeclaration(
            index=client_index,
            text=text,
            metadata={
                "source": source.identity,
                "keys": len(report.tree),
                "conflicts": len(report.conflicts),
            },
        )

    indexed_sources = list(enumerate(config.sources))
    if config.max_workers and config.max_workers > 1 and len(indexed_sources) > 1:
        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            # map() yields in submission order, so client order is preserved.
            return list(pool.map(_render, indexed_sources))
    return [_render(item) for item in indexed_sources]


def generate_declarations(config: GenerationConfig) -> str:
    """Return the full declaration text for every client in ``config``."""
    declarations = generate_client_declarations(config)
    return "\n\n".join(declaration.text for declaration in declarations)


__all__ = [
    "GenerationConfig",
    "MergeConflictError",
    "create_generation_config",
    "generate_client_declarations",
    "generate_declarations",
    "merge_source",
]
