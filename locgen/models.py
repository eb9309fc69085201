"""Core data models shared across locgen components."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

ShapeNode = Union[str, Dict[str, "ShapeNode"]]
ShapeTree = Dict[str, ShapeNode]

STRING_KIND = "string"


@dataclass(frozen=True)
class Parameter:
    """One distinct placeholder of a template, as it appears in a signature."""

    name: str
    kind: str = STRING_KIND


@dataclass(frozen=True)
class MergeConflict:
    """A key whose value changed between branch and leaf while merging."""

    path: Tuple[str, ...]
    previous: str
    incoming: str

    def describe(self) -> str:
        dotted = ".".join(self.path)
        return f"{dotted}: {self.previous} replaced by {self.incoming}"


@dataclass
class MergeReport:
    """Merged tree plus the structural conflicts overwritten along the way."""

    tree: ShapeTree
    conflicts: List[MergeConflict] = field(default_factory=list)


@dataclass
class ClientDeclaration:
    """Rendered declaration block for one client."""

    index: Optional[int]
    text: str
    metadata: Dict[str, Any] = field(default_factory=dict)
