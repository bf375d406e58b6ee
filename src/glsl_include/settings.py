"""Settings for the include expander."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ExpanderSettings:
    """Configuration shared by the parser, the expander and the context.

    Attributes:
        recognize_pragma_include: Treat `#pragma include <name>` as a directive
        skip_block_comments: Leave directives inside /* ... */ comments untouched
        root_name: Label used for the root source in log messages
    """

    recognize_pragma_include: bool = True
    skip_block_comments: bool = True
    root_name: str = "<root>"
