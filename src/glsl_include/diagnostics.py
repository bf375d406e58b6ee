"""Diagnostics for failed include expansions.

This module provides the Diagnostic dataclass describing why an expansion
stopped, the `render` function turning it into a message, and the exception
types the expander raises to carry it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lsprotocol import types

DIAGNOSTIC_SOURCE = "glsl-include"


class DiagnosticKind(Enum):
    """The ways an expansion can fail."""

    MISSING_INCLUDE = "missing-include"
    CYCLIC_INCLUDE = "cyclic-include"


@dataclass(frozen=True)
class Diagnostic:
    """Describes a failed expansion.

    Attributes:
        kind: What went wrong
        file: The name inside the offending include directive
        referenced_from_file: File containing the directive, None for the root source
        referenced_from_line: Line of the directive within that file (1-indexed)
        include_stack: Names being expanded when the failure occurred, outermost first
    """

    kind: DiagnosticKind
    file: str
    referenced_from_file: str | None
    referenced_from_line: int
    include_stack: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        """The rendered message."""
        return render(self)

    def to_lsp_diagnostic(self) -> types.Diagnostic:
        """Convert this diagnostic to an LSP Diagnostic on the directive's line.

        Returns:
            An LSP Diagnostic with error severity.
        """
        from lsprotocol import types

        line = max(self.referenced_from_line - 1, 0)
        return types.Diagnostic(
            range=types.Range(
                start=types.Position(line=line, character=0),
                end=types.Position(line=line + 1, character=0),
            ),
            message=render(self),
            severity=types.DiagnosticSeverity.Error,
            code=self.kind.value,
            source=DIAGNOSTIC_SOURCE,
        )


def _describe_origin(diagnostic: Diagnostic) -> str:
    if diagnostic.referenced_from_file is None:
        return "the root source"
    return f'file "{diagnostic.referenced_from_file}"'


def render(diagnostic: Diagnostic) -> str:
    """Render a diagnostic as a human-readable message.

    The result depends only on the diagnostic's fields.

    Args:
        diagnostic: The diagnostic to render.

    Returns:
        The message text.
    """
    origin = _describe_origin(diagnostic)

    if diagnostic.kind is DiagnosticKind.CYCLIC_INCLUDE:
        chain = " -> ".join((*diagnostic.include_stack, diagnostic.file))
        return (
            f'Detected recursive include of file "{diagnostic.file}" in {origin}, '
            f"line {diagnostic.referenced_from_line}, include stack: {chain}"
        )

    return (
        f'Could not find file "{diagnostic.file}", included from {origin}, '
        f"line {diagnostic.referenced_from_line}\n"
        "help: call register_include with the file name and contents"
    )


class IncludeError(Exception):
    """Raised when an expansion fails. Carries the Diagnostic."""

    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(render(diagnostic))
        self.diagnostic = diagnostic

    @staticmethod
    def from_diagnostic(diagnostic: Diagnostic) -> IncludeError:
        """Build the exception subclass matching the diagnostic's kind."""
        if diagnostic.kind is DiagnosticKind.CYCLIC_INCLUDE:
            return CyclicIncludeError(diagnostic)
        return MissingIncludeError(diagnostic)


class MissingIncludeError(IncludeError):
    """An include directive names a file that was never registered."""


class CyclicIncludeError(IncludeError):
    """An include directive re-enters a file already being expanded."""


class ContextClosedError(RuntimeError):
    """Raised when a Context is used after it was closed."""
