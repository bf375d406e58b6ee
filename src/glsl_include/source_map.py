"""Source Map for expanded shader sources.

This module provides the SourceMapEntry dataclass and the SourceMap class
that records, for every line of an expanded output, which file and line
produced it. A host compiler's error on expanded line N can be translated
back to the authored location with `SourceMap.lookup`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lsprotocol import types


@dataclass(frozen=True)
class SourceMapEntry:
    """Origin of one output line.

    Attributes:
        output_line_index: Line index in the expanded output (0-indexed)
        origin_file: Virtual file name, or None for the root source
        origin_line: Line within the origin (1-indexed)
    """

    output_line_index: int
    origin_file: str | None
    origin_line: int

    @property
    def is_root(self) -> bool:
        """Whether the line came from the root source."""
        return self.origin_file is None

    def to_location(
        self,
        root_uri: str,
        uri_for_file: Callable[[str], str] | None = None,
    ) -> types.Location:
        """Convert this entry to an LSP Location object.

        Args:
            root_uri: URI used for lines from the root source.
            uri_for_file: Maps a virtual file name to a URI. The name itself
                is used when omitted.

        Returns:
            An LSP Location covering the whole origin line.
        """
        from lsprotocol import types

        if self.origin_file is None:
            uri = root_uri
        elif uri_for_file is not None:
            uri = uri_for_file(self.origin_file)
        else:
            uri = self.origin_file

        line = self.origin_line - 1
        return types.Location(
            uri=uri,
            range=types.Range(
                start=types.Position(line=line, character=0),
                end=types.Position(line=line + 1, character=0),
            ),
        )


class SourceMap:
    """Ordered, line-indexed record of where each output line came from.

    Entry i describes output line i. The map is filled during expansion and
    is only read afterwards.
    """

    def __init__(self) -> None:
        """Initialize an empty source map."""
        self._entries: list[SourceMapEntry] = []

    def append(self, origin_file: str | None, origin_line: int) -> SourceMapEntry:
        """Record the origin of the next output line.

        Args:
            origin_file: Virtual file name, or None for the root source.
            origin_line: Line within the origin (1-indexed).

        Returns:
            The new entry.
        """
        entry = SourceMapEntry(
            output_line_index=len(self._entries),
            origin_file=origin_file,
            origin_line=origin_line,
        )
        self._entries.append(entry)
        return entry

    def lookup(self, output_line_index: int) -> SourceMapEntry | None:
        """Get the origin of an output line.

        Args:
            output_line_index: Line index in the expanded output (0-indexed).

        Returns:
            The entry, or None if the index is negative or past the last line.
        """
        if 0 <= output_line_index < len(self._entries):
            return self._entries[output_line_index]
        return None

    def entries_for(self, origin_file: str | None) -> list[SourceMapEntry]:
        """Get all entries produced by one origin, in output order.

        Args:
            origin_file: Virtual file name, or None for the root source.

        Returns:
            The matching entries.
        """
        return [entry for entry in self._entries if entry.origin_file == origin_file]

    def __getitem__(self, output_line_index: int) -> SourceMapEntry:
        return self._entries[output_line_index]

    def __iter__(self) -> Iterator[SourceMapEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
