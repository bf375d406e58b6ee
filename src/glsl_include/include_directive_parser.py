"""Include Directive Parser for shader sources.

This module provides the IncludeDirectiveParser class for recognising
include directives line by line. A directive must occupy its own line:

    #include <common.glsl>
    #include "lighting.glsl"
    #pragma include <noise.glsl>

Anything after the closing delimiter other than whitespace makes the line a
literal line. Lines that start inside a block comment are literal as well.
"""

from __future__ import annotations

import re

from glsl_include.include_directive import IncludeDirective
from glsl_include.settings import ExpanderSettings

# Matches: #include <name>, #include "name", # include <name>, #pragma include "name"
# The whole line must match, so trailing text turns the line into a literal.
INCLUDE_PATTERN = re.compile(
    r'^\s*#\s*(pragma\s+)?include\s+(?:<([^<>]*)>|"([^"]*)")\s*$',
)


def split_lines(content: str) -> list[str]:
    """Split source text into physical lines.

    A trailing line terminator does not start another line, and a single
    carriage return before each newline is dropped.

    Args:
        content: The source text.

    Returns:
        The lines of the text without their terminators.
    """
    if not content:
        return []

    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class IncludeDirectiveParser:
    """Parser for recognising include directives in shader source.

    The parser is stateless across calls except for block comment tracking,
    which callers thread through `is_in_block_comment` line by line.
    """

    def __init__(self, settings: ExpanderSettings | None = None) -> None:
        """Initialize the parser.

        Args:
            settings: Expander settings; defaults are used when omitted.
        """
        self._settings = settings or ExpanderSettings()

    def parse_line(self, line: str, line_number: int) -> IncludeDirective | None:
        """Parse one physical line.

        Args:
            line: The line text, without terminator.
            line_number: The 1-indexed line number, recorded on the directive.

        Returns:
            An IncludeDirective, or None if the line is literal content.
        """
        match = INCLUDE_PATTERN.match(line)
        if match is None:
            return None

        is_pragma = match.group(1) is not None
        if is_pragma and not self._settings.recognize_pragma_include:
            return None

        if match.group(2) is not None:
            return IncludeDirective(
                name=match.group(2),
                delimiter="angle",
                line=line_number,
                is_pragma=is_pragma,
            )
        return IncludeDirective(
            name=match.group(3),
            delimiter="quote",
            line=line_number,
            is_pragma=is_pragma,
        )

    def is_in_block_comment(self, line: str, in_block_comment: bool) -> bool:
        """Compute whether a block comment is still open after a line.

        Args:
            line: The line text.
            in_block_comment: Whether a block comment was open before the line.

        Returns:
            True if a block comment is open at the end of the line.
        """
        if not self._settings.skip_block_comments:
            return False

        position = 0
        length = len(line)
        while position < length:
            if in_block_comment:
                end = line.find("*/", position)
                if end == -1:
                    return True
                in_block_comment = False
                position = end + 2
                continue

            line_comment = line.find("//", position)
            block_start = line.find("/*", position)
            if block_start == -1:
                return False
            if line_comment != -1 and line_comment < block_start:
                return False
            in_block_comment = True
            position = block_start + 2

        return in_block_comment

    def extract_includes(self, content: str) -> list[IncludeDirective]:
        """Extract every include directive from a text.

        Args:
            content: The source text to scan.

        Returns:
            A list of IncludeDirective objects in line order.
        """
        directives: list[IncludeDirective] = []
        in_block_comment = False

        for index, line in enumerate(split_lines(content)):
            if not in_block_comment:
                directive = self.parse_line(line, index + 1)
                if directive is not None:
                    directives.append(directive)
                    continue
            in_block_comment = self.is_in_block_comment(line, in_block_comment)

        return directives
