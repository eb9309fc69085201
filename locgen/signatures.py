"""Callable signature rendering for localization entries."""

from __future__ import annotations

import json
from typing import List, Sequence, Set

from .models import STRING_KIND, Parameter
from .placeholders import extract_parameters

RETURN_KIND = STRING_KIND

# Words that cannot name a parameter in strict-mode TypeScript.
_RESERVED_WORDS = frozenset(
    {
        "arguments",
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "enum",
        "eval",
        "export",
        "extends",
        "false",
        "finally",
        "for",
        "function",
        "if",
        "implements",
        "import",
        "in",
        "instanceof",
        "interface",
        "let",
        "new",
        "null",
        "package",
        "private",
        "protected",
        "public",
        "return",
        "static",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
        "yield",
    }
)


def is_identifier_name(name: str) -> bool:
    """Return True when ``name`` is lexically a TypeScript identifier."""
    return bool(name) and name.replace("$", "_").isidentifier()


def safe_identifier(name: str) -> str:
    """Return ``name`` rewritten into a usable parameter identifier."""
    if is_identifier_name(name) and name not in _RESERVED_WORDS:
        return name
    cleaned = "".join(char if _is_identifier_char(char) else "_" for char in name)
    if not cleaned or not is_identifier_name(cleaned[0]) or cleaned in _RESERVED_WORDS:
        cleaned = f"_{cleaned}"
    return cleaned


def property_key(key: str) -> str:
    """Return ``key`` as a property name, quoting it when it is not an identifier."""
    if is_identifier_name(key):
        return key
    return json.dumps(key, ensure_ascii=False)


def render_signature(parameters: Sequence[Parameter]) -> str:
    """Render ``parameters`` as an arrow-function type returning a string."""
    if not parameters:
        return f"() => {RETURN_KIND}"
    names = _unique_identifiers(parameter.name for parameter in parameters)
    rendered = [f"{name}: {parameter.kind}" for name, parameter in zip(names, parameters)]
    return f"({', '.join(rendered)}) => {RETURN_KIND}"


def generate_signature(template: str) -> str:
    """Parse ``template`` and render its signature."""
    return render_signature(extract_parameters(template))


def _is_identifier_char(char: str) -> bool:
    return char == "$" or f"a{char}".isidentifier()


def _unique_identifiers(names) -> List[str]:
    result: List[str] = []
    used: Set[str] = set()
    for name in names:
        candidate = safe_identifier(name)
        base = candidate
        suffix = 2
        while candidate in used:
            candidate = f"{base}_{suffix}"
            suffix += 1
        used.add(candidate)
        result.append(candidate)
    return result


__all__ = [
    "generate_signature",
    "is_identifier_name",
    "property_key",
    "render_signature",
    "safe_identifier",
]
