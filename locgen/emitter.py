"""Rendering of merged shape trees into TypeScript declaration blocks."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List, Optional

from .logging import get_logger
from .signatures import generate_signature, property_key

DEFAULT_NAMESPACE = "Tessen"
DEFAULT_INTERFACE = "Localization"
EXPORT_MARKER = "export { };"

# Interface members start inside `declare global`, `namespace` and `interface`.
_BASE_DEPTH = 3
_INDENT = "  "

_LOGGER = get_logger("emitter")


def render_body(tree: Mapping[str, Any], depth: int = 0) -> List[str]:
    """Return the interface member lines for ``tree``."""
    lines: List[str] = []
    indent = _INDENT * (depth + _BASE_DEPTH)
    for key, value in tree.items():
        name = property_key(str(key))
        if isinstance(value, str):
            lines.append(f"{indent}{name}: {generate_signature(value)};")
        elif isinstance(value, Mapping):
            lines.append(f"{indent}{name}: {{")
            lines.extend(render_body(value, depth + 1))
            lines.append(f"{indent}}};")
        else:
            _LOGGER.debug("Skipping %s: unsupported value type %s", key, type(value).__name__)
    return lines


def render_declaration(
    tree: Mapping[str, Any],
    *,
    client_index: Optional[int] = None,
    namespace: str = DEFAULT_NAMESPACE,
    interface: str = DEFAULT_INTERFACE,
) -> str:
    """Wrap the rendered body of ``tree`` in a global declaration block.

    ``client_index`` is zero-based; when given, the block is annotated with
    ``// Client <n>`` so several clients can share one file.
    """
    suffix = f" // Client {client_index + 1}" if client_index is not None else ""
    lines = [
        f"declare global {{{suffix}",
        f"{_INDENT}namespace {namespace} {{",
        f"{_INDENT * 2}interface {interface} {{",
        *render_body(tree),
        f"{_INDENT * 2}}}",
        f"{_INDENT}}}",
        "}",
        "",
        EXPORT_MARKER,
    ]
    return "\n".join(lines)


__all__ = [
    "DEFAULT_INTERFACE",
    "DEFAULT_NAMESPACE",
    "EXPORT_MARKER",
    "render_body",
    "render_declaration",
]
