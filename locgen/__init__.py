"""Generate TypeScript declarations for localization catalogs."""

from .emitter import render_body, render_declaration
from .generator import (
    GenerationConfig,
    MergeConflictError,
    create_generation_config,
    generate_client_declarations,
    generate_declarations,
)
from .merge import merge_into, merge_trees, merge_trees_with_report
from .models import ClientDeclaration, MergeConflict, MergeReport, Parameter
from .placeholders import extract_parameters
from .signatures import generate_signature, render_signature
from .sources import DirectorySource, MappingSource, SourceAdapter, SourceError

__version__ = "0.1.0"

__all__ = [
    "ClientDeclaration",
    "DirectorySource",
    "GenerationConfig",
    "MappingSource",
    "MergeConflict",
    "MergeConflictError",
    "MergeReport",
    "Parameter",
    "SourceAdapter",
    "SourceError",
    "create_generation_config",
    "extract_parameters",
    "generate_client_declarations",
    "generate_declarations",
    "generate_signature",
    "merge_into",
    "merge_trees",
    "merge_trees_with_report",
    "render_body",
    "render_declaration",
    "render_signature",
]
