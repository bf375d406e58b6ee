"""Include Graph for tracking include relationships between virtual files.

This module provides the IncludeEdge dataclass and IncludeGraph class for
recording which registered virtual files include which others. The graph
answers dependency questions without expanding anything, e.g. which files
must be re-expanded after one of them is re-registered.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass

from glsl_include.include_directive import IncludeDirective

logger = logging.getLogger(__name__)


@dataclass
class IncludeEdge:
    """Represents an include relationship between two virtual files.

    Attributes:
        source: The name of the file containing the include directive.
        target: The name of the included file.
        directive: The parsed include directive.
    """

    source: str
    target: str
    directive: IncludeDirective


class IncludeGraph:
    """Graph for tracking include relationships between virtual files.

    This class maintains a directed graph of include relationships with:
    - Forward edges (name -> edges to included names)
    - Reverse edges (name -> names of the files including it)

    Targets do not have to be registered; an edge to an unknown name is kept
    so that dependency queries report it.
    """

    def __init__(self) -> None:
        """Initialize an empty include graph."""
        # Forward edges: source name -> list of IncludeEdge
        self._edges: dict[str, list[IncludeEdge]] = {}

        # Reverse edges: target name -> list of source names
        self._reverse_edges: dict[str, list[str]] = {}

    def update(self, name: str, directives: list[IncludeDirective]) -> list[str]:
        """Update the include relationships for a file.

        This replaces any existing includes for the given name.

        Args:
            name: The name of the file being updated.
            directives: The include directives found in the file.

        Returns:
            The file itself followed by every file that transitively includes
            it, i.e. everything whose expansion may have changed.
        """
        self._remove_edges_from(name)

        edges: list[IncludeEdge] = []
        for directive in directives:
            edges.append(IncludeEdge(source=name, target=directive.name, directive=directive))

            includers = self._reverse_edges.setdefault(directive.name, [])
            if name not in includers:
                includers.append(name)

        if edges:
            self._edges[name] = edges

        return [name, *self.get_transitive_includers(name)]

    def clear(self) -> None:
        """Clear all data from the graph."""
        self._edges.clear()
        self._reverse_edges.clear()

    def get_direct_includes(self, name: str) -> list[str]:
        """Get the names directly included by a file, in directive order.

        A name included twice appears once.

        Args:
            name: The name of the file.

        Returns:
            A list of included names.
        """
        targets: list[str] = []
        for edge in self._edges.get(name, []):
            if edge.target not in targets:
                targets.append(edge.target)
        return targets

    def get_includers(self, name: str) -> list[str]:
        """Get the names of files that directly include the given file.

        Args:
            name: The name of the file.

        Returns:
            A list of including names.
        """
        return list(self._reverse_edges.get(name, []))

    def get_include_sites(self, name: str) -> list[tuple[str, int]]:
        """Get the directives that include a file.

        Args:
            name: The name of the included file.

        Returns:
            A list of (source name, directive line) tuples, one per directive.
        """
        sites: list[tuple[str, int]] = []
        for source in self.get_includers(name):
            for edge in self._edges.get(source, []):
                if edge.target == name:
                    sites.append((source, edge.directive.line))
        return sites

    def get_transitive_includes(self, name: str) -> list[str]:
        """Get all names transitively included by a file.

        This performs a depth-first search with an explicit stack; cycles are
        handled by tracking visited nodes.

        Args:
            name: The name of the file.

        Returns:
            A list of included names in the order they are first reached.
        """
        result: list[str] = []
        visited: set[str] = {name}
        stack = [iter(self.get_direct_includes(name))]

        while stack:
            target = next(stack[-1], None)
            if target is None:
                stack.pop()
                continue
            if target not in visited:
                visited.add(target)
                result.append(target)
                stack.append(iter(self.get_direct_includes(target)))

        return result

    def get_transitive_includers(self, name: str) -> list[str]:
        """Get all names that transitively include a file.

        Args:
            name: The name of the file.

        Returns:
            A list of including names, nearest first.
        """
        result: list[str] = []
        visited: set[str] = {name}
        queue = deque([name])

        while queue:
            current = queue.popleft()
            for source in self.get_includers(current):
                if source not in visited:
                    visited.add(source)
                    result.append(source)
                    queue.append(source)

        return result

    def has_cycle(self, name: str) -> bool:
        """Check if there is a cycle reachable from the given file.

        Args:
            name: The starting name to check.

        Returns:
            True if a cycle is detected, False otherwise.
        """
        # Names on the current DFS path
        path: set[str] = {name}
        # Names already reached
        visited: set[str] = {name}
        stack = [(name, iter(self.get_direct_includes(name)))]

        while stack:
            current, targets = stack[-1]
            target = next(targets, None)
            if target is None:
                path.remove(current)
                stack.pop()
                continue

            if target in path:
                logger.warning(f"Circular include detected involving: {target}")
                return True

            if target not in visited:
                visited.add(target)
                path.add(target)
                stack.append((target, iter(self.get_direct_includes(target))))

        return False

    def _remove_edges_from(self, name: str) -> None:
        """Remove all forward edges from a file and update the reverse index.

        Args:
            name: The source name whose edges should be removed.
        """
        if name not in self._edges:
            return

        for edge in self._edges[name]:
            target = edge.target
            if target in self._reverse_edges:
                self._reverse_edges[target] = [
                    source for source in self._reverse_edges[target] if source != name
                ]
                if not self._reverse_edges[target]:
                    del self._reverse_edges[target]

        del self._edges[name]
