"""Include expansion for shader sources.

This module provides the Expander class, which flattens a root source and the
virtual files it includes into a single text while building a SourceMap.

Expansion works line by line. Literal lines are copied to the output with a
source map entry pointing at their own file and line. An include directive
line is replaced by the expanded content of the named file and produces no
output line of its own. Output lines are joined with "\\n" and no terminator is
added after the last line, so the output ends in "\\n" only when its last line
is blank, and a single blank output line is the empty string. `ExpansionResult.lines`
holds the emitted lines and always has one line per source map entry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import NoReturn

from glsl_include.diagnostics import Diagnostic, DiagnosticKind, IncludeError
from glsl_include.include_directive_parser import IncludeDirectiveParser, split_lines
from glsl_include.settings import ExpanderSettings
from glsl_include.source_map import SourceMap
from glsl_include.virtual_file_store import VirtualFileStore

logger = logging.getLogger(__name__)


@dataclass
class ExpansionFrame:
    """State for one file being expanded.

    Attributes:
        current_file: Virtual file name, or None for the root source
        lines: The file's physical lines
        position: Index of the next line to process
        in_block_comment: Whether a block comment is open before that line
    """

    current_file: str | None
    lines: list[str]
    position: int = 0
    in_block_comment: bool = False


@dataclass
class ExpansionResult:
    """Output of a successful expansion.

    Attributes:
        output: The flattened source text
        source_map: Origin of every output line
        lines: The emitted output lines, one per source map entry
    """

    output: str
    source_map: SourceMap = field(default_factory=SourceMap)
    lines: list[str] = field(default_factory=list)


class Expander:
    """Expands include directives against a VirtualFileStore.

    The expander keeps an explicit stack of frames rather than recursing, so
    deep include chains are limited only by the include graph. The include
    stack holds the names currently being expanded; meeting one of them again
    is a cycle.
    """

    def __init__(self, store: VirtualFileStore, settings: ExpanderSettings | None = None) -> None:
        """Initialize the expander.

        Args:
            store: The files available to include directives.
            settings: Expander settings; defaults are used when omitted.
        """
        self._store = store
        self._settings = settings or ExpanderSettings()
        self._parser = IncludeDirectiveParser(self._settings)

    def expand(self, root_source: str) -> ExpansionResult:
        """Expand a root source.

        Args:
            root_source: The source text to expand.

        Returns:
            The flattened text and its source map.

        Raises:
            MissingIncludeError: A directive names an unregistered file.
            CyclicIncludeError: A directive names a file already being expanded.
        """
        if not isinstance(root_source, str):
            raise TypeError(f"Source must be a str, not {type(root_source).__name__}")

        output: list[str] = []
        source_map = SourceMap()
        include_stack: list[str] = []
        frames = [ExpansionFrame(current_file=None, lines=split_lines(root_source))]

        while frames:
            frame = frames[-1]
            if frame.position >= len(frame.lines):
                frames.pop()
                if include_stack:
                    include_stack.pop()
                continue

            line = frame.lines[frame.position]
            line_number = frame.position + 1
            frame.position += 1

            directive = None
            if not frame.in_block_comment:
                directive = self._parser.parse_line(line, line_number)

            if directive is None:
                frame.in_block_comment = self._parser.is_in_block_comment(line, frame.in_block_comment)
                output.append(line)
                source_map.append(frame.current_file, line_number)
                continue

            name = directive.name
            if name in include_stack:
                self._fail(DiagnosticKind.CYCLIC_INCLUDE, name, frame, line_number, include_stack)

            content = self._store.lookup(name)
            if content is None:
                self._fail(DiagnosticKind.MISSING_INCLUDE, name, frame, line_number, include_stack)

            logger.debug(f"Including {name} from {self._origin_label(frame.current_file)}:{line_number}")
            include_stack.append(name)
            frames.append(ExpansionFrame(current_file=name, lines=split_lines(content)))

        return ExpansionResult(output="\n".join(output), source_map=source_map, lines=output)

    def _fail(
        self,
        kind: DiagnosticKind,
        name: str,
        frame: ExpansionFrame,
        line_number: int,
        include_stack: list[str],
    ) -> NoReturn:
        """Raise the IncludeError for a failed directive."""
        diagnostic = Diagnostic(
            kind=kind,
            file=name,
            referenced_from_file=frame.current_file,
            referenced_from_line=line_number,
            include_stack=tuple(include_stack),
        )
        if kind is DiagnosticKind.CYCLIC_INCLUDE:
            logger.warning(f"Circular include detected involving: {name}")
        else:
            logger.warning(
                f"Include not found: {name} (from {self._origin_label(frame.current_file)}:{line_number})"
            )
        raise IncludeError.from_diagnostic(diagnostic)

    def _origin_label(self, current_file: str | None) -> str:
        if current_file is None:
            return self._settings.root_name
        return current_file


def expand(
    store: VirtualFileStore,
    root_source: str,
    settings: ExpanderSettings | None = None,
) -> ExpansionResult:
    """Expand a root source against a store. See Expander.expand."""
    return Expander(store, settings).expand(root_source)
