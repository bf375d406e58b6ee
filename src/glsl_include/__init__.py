"""Shader include expansion with source maps.

This package expands #include directives in shader sources against a set of
in-memory virtual files and maps every expanded line back to its origin.
"""

from glsl_include.context import Context, ContextState
from glsl_include.diagnostics import (
    ContextClosedError,
    CyclicIncludeError,
    Diagnostic,
    DiagnosticKind,
    IncludeError,
    MissingIncludeError,
    render,
)
from glsl_include.expander import Expander, ExpansionResult, expand
from glsl_include.settings import ExpanderSettings
from glsl_include.source_map import SourceMap, SourceMapEntry
from glsl_include.virtual_file_store import VirtualFileStore

__all__ = [
    "Context",
    "ContextClosedError",
    "ContextState",
    "CyclicIncludeError",
    "Diagnostic",
    "DiagnosticKind",
    "Expander",
    "ExpanderSettings",
    "ExpansionResult",
    "IncludeError",
    "MissingIncludeError",
    "SourceMap",
    "SourceMapEntry",
    "VirtualFileStore",
    "expand",
    "render",
]
