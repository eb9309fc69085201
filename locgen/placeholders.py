"""Placeholder parsing for localization templates.

Templates reference their arguments positionally, optionally with a label::

    "{0} is now a {1}"            -> _0, _1
    "{0:user} is now a {1:role}"  -> user, role

Parameters keep the order in which they first appear in the template so the
generated signature matches how the string reads.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Set

from .models import STRING_KIND, Parameter

PLACEHOLDER_PATTERN = re.compile(r"\{(\d+)(?::([^}]+))?\}")


def _iter_placeholder_names(template: str) -> Iterator[str]:
    """Yield the parameter name of every placeholder occurrence, duplicates included."""
    for match in PLACEHOLDER_PATTERN.finditer(template):
        index, label = match.group(1), match.group(2)
        yield label if label else f"_{index}"


def extract_parameters(template: str) -> List[Parameter]:
    """Return the distinct parameters of ``template`` in first-seen order."""
    parameters: List[Parameter] = []
    seen: Set[str] = set()
    for name in _iter_placeholder_names(template):
        if name in seen:
            continue
        seen.add(name)
        parameters.append(Parameter(name=name, kind=STRING_KIND))
    return parameters


def build_positional_template(count: int) -> str:
    """Return a template with ``count`` generic placeholders joined by spaces."""
    return " ".join(f"{{{index}}}" for index in range(count))


__all__ = [
    "PLACEHOLDER_PATTERN",
    "build_positional_template",
    "extract_parameters",
]
