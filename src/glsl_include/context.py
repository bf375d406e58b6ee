"""Context owning the virtual files and the result of the last expansion.

Typical use:

    with Context() as ctx:
        ctx.register_include("A.glsl", "void A() {}")
        expanded = ctx.expand("#include <A.glsl>\\nvoid main() {}")
        if expanded is None:
            print(ctx.get_error_message())
        else:
            origin_file, origin_line = ctx.get_source_mapping(0)

A Context is meant for one thread at a time; callers sharing one across
threads must serialise every call themselves.
"""

from __future__ import annotations

import logging
from enum import Enum

from glsl_include.diagnostics import ContextClosedError, Diagnostic, IncludeError, render
from glsl_include.expander import Expander, ExpansionResult
from glsl_include.include_directive_parser import IncludeDirectiveParser
from glsl_include.include_graph import IncludeGraph
from glsl_include.settings import ExpanderSettings
from glsl_include.source_map import SourceMap
from glsl_include.virtual_file_store import VirtualFileStore

logger = logging.getLogger(__name__)

# Line number reported by get_source_mapping when there is no origin
UNMAPPED_LINE = -1


class ContextState(Enum):
    """Lifecycle states of a Context."""

    CLEAN = "clean"
    HAS_OUTPUT = "has_output"
    HAS_ERROR = "has_error"
    CLOSED = "closed"


class Context:
    """Owns a VirtualFileStore and the outcome of the most recent expansion.

    After each call to `expand` the context holds either the output and its
    source map or a Diagnostic, never both. Registering files does not change
    the state.
    """

    def __init__(self, settings: ExpanderSettings | None = None) -> None:
        """Initialize a context in the CLEAN state with an empty store.

        Args:
            settings: Expander settings; defaults are used when omitted.
        """
        self._settings = settings or ExpanderSettings()
        self._store = VirtualFileStore()
        self._graph = IncludeGraph()
        self._parser = IncludeDirectiveParser(self._settings)
        self._state = ContextState.CLEAN
        self._result: ExpansionResult | None = None
        self._diagnostic: Diagnostic | None = None

    def __enter__(self) -> Context:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def state(self) -> ContextState:
        return self._state

    @property
    def store(self) -> VirtualFileStore:
        self._check_open()
        return self._store

    @property
    def output(self) -> str | None:
        """The last expanded text, or None unless in HAS_OUTPUT."""
        self._check_open()
        return self._result.output if self._result is not None else None

    @property
    def source_map(self) -> SourceMap | None:
        """The last source map, or None unless in HAS_OUTPUT."""
        self._check_open()
        return self._result.source_map if self._result is not None else None

    @property
    def diagnostic(self) -> Diagnostic | None:
        """The last diagnostic, or None unless in HAS_ERROR."""
        self._check_open()
        return self._diagnostic

    def register_include(self, name: str, content: str) -> None:
        """Register a virtual file for later expansions.

        Args:
            name: The name include directives refer to.
            content: The file content.
        """
        self._check_open()
        self._store.register(name, content)
        affected = self._graph.update(name, self._parser.extract_includes(content))
        logger.debug(f"Registered {name}; affects {', '.join(affected)}")

    def expand(self, source: str) -> str | None:
        """Expand a root source, replacing the previous result.

        Args:
            source: The root source text.

        Returns:
            The expanded text, or None if expansion failed. On failure the
            reason is available from `get_error_message` and `diagnostic`.
        """
        self._check_open()
        expander = Expander(self._store, self._settings)
        try:
            result = expander.expand(source)
        except IncludeError as e:
            self._result = None
            self._diagnostic = e.diagnostic
            self._state = ContextState.HAS_ERROR
            return None

        self._result = result
        self._diagnostic = None
        self._state = ContextState.HAS_OUTPUT
        return result.output

    def get_source_mapping(self, output_line_index: int) -> tuple[str | None, int]:
        """Get the origin of a line of the last expanded output.

        Args:
            output_line_index: Line index in the expanded output (0-indexed).

        Returns:
            A tuple of (origin_file, origin_line). origin_file is None for the
            root source. (None, UNMAPPED_LINE) is returned when the last
            expansion failed, nothing was expanded yet, or the index is out of
            range.
        """
        self._check_open()
        if self._result is None:
            return None, UNMAPPED_LINE

        entry = self._result.source_map.lookup(output_line_index)
        if entry is None:
            return None, UNMAPPED_LINE
        return entry.origin_file, entry.origin_line

    def get_error_message(self) -> str | None:
        """Get the rendered message of the last failed expansion.

        Returns:
            The message, or None unless the context is in HAS_ERROR.
        """
        self._check_open()
        if self._diagnostic is None:
            return None
        return render(self._diagnostic)

    def dependencies(self, source: str) -> list[str]:
        """Get every virtual file name a source pulls in, registered or not.

        Args:
            source: A root source text.

        Returns:
            Names in the order they are first reached.
        """
        self._check_open()
        names: list[str] = []
        for directive in self._parser.extract_includes(source):
            for name in [directive.name, *self._graph.get_transitive_includes(directive.name)]:
                if name not in names:
                    names.append(name)
        return names

    def includers(self, name: str) -> list[str]:
        """Get the registered files that include a name, directly or not."""
        self._check_open()
        return self._graph.get_transitive_includers(name)

    def include_sites(self, name: str) -> list[tuple[str, int]]:
        """Get the (file, line) of every registered directive including a name."""
        self._check_open()
        return self._graph.get_include_sites(name)

    def close(self) -> None:
        """Release everything the context owns. Further use is an error."""
        if self._state is ContextState.CLOSED:
            return
        self._store.clear()
        self._graph.clear()
        self._result = None
        self._diagnostic = None
        self._state = ContextState.CLOSED

    def _check_open(self) -> None:
        if self._state is ContextState.CLOSED:
            raise ContextClosedError("Context has been closed")
