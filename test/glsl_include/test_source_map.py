"""
Unit tests for the Source Map.
"""

import pytest
from lsprotocol import types

from glsl_include.source_map import SourceMap, SourceMapEntry


def _sample_map() -> SourceMap:
    source_map = SourceMap()
    source_map.append("A.glsl", 1)
    source_map.append("B.glsl", 1)
    source_map.append(None, 3)
    return source_map


@pytest.mark.glsl_include
class TestSourceMapLookup:
    """Test source map queries."""

    def test_append_assigns_output_indices(self) -> None:
        """Test entries are numbered in output order."""
        source_map = _sample_map()

        assert [entry.output_line_index for entry in source_map] == [0, 1, 2]
        assert len(source_map) == 3

    def test_lookup(self) -> None:
        """Test looking up an in-range index."""
        entry = _sample_map().lookup(1)

        assert entry == SourceMapEntry(output_line_index=1, origin_file="B.glsl", origin_line=1)

    def test_lookup_out_of_range(self) -> None:
        """Test out-of-range and negative indices return None."""
        source_map = _sample_map()

        assert source_map.lookup(3) is None
        assert source_map.lookup(100) is None
        assert source_map.lookup(-1) is None

    def test_lookup_is_idempotent(self) -> None:
        """Test repeated lookups return identical results."""
        source_map = _sample_map()

        assert source_map.lookup(2) == source_map.lookup(2)
        assert len(source_map) == 3

    def test_entries_for(self) -> None:
        """Test filtering entries by origin."""
        source_map = _sample_map()

        assert [entry.output_line_index for entry in source_map.entries_for(None)] == [2]
        assert [entry.output_line_index for entry in source_map.entries_for("A.glsl")] == [0]
        assert source_map.entries_for("missing.glsl") == []


@pytest.mark.glsl_include
class TestSourceMapEntry:
    """Test SourceMapEntry helpers."""

    def test_is_root(self) -> None:
        """Test is_root distinguishes the root source from files."""
        assert SourceMapEntry(0, None, 1).is_root is True
        assert SourceMapEntry(0, "A.glsl", 1).is_root is False

    def test_to_location_root(self) -> None:
        """Test root lines map to the root URI with 0-indexed lines."""
        location = SourceMapEntry(0, None, 3).to_location("file:///shaders/main.frag")

        assert isinstance(location, types.Location)
        assert location.uri == "file:///shaders/main.frag"
        assert location.range.start.line == 2
        assert location.range.end.line == 3

    def test_to_location_file(self) -> None:
        """Test file lines map through uri_for_file."""
        entry = SourceMapEntry(0, "A.glsl", 1)

        location = entry.to_location("file:///main.frag", lambda name: f"file:///lib/{name}")

        assert location.uri == "file:///lib/A.glsl"
        assert location.range.start.line == 0

    def test_to_location_file_default_uri(self) -> None:
        """Test the file name is used as URI when no mapping is given."""
        location = SourceMapEntry(0, "A.glsl", 2).to_location("file:///main.frag")

        assert location.uri == "A.glsl"
