"""Include Directive data model for shader include directives.

This module provides the IncludeDirective dataclass that represents a
`#include <name>` or `#include "name"` line in shader source, as found by
the include directive parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class IncludeDirective:
    """Represents a shader include directive.

    Attributes:
        name: The virtual file name between the delimiters
        delimiter: "angle" for <name>, "quote" for "name"
        line: Line number of the directive (1-indexed)
        is_pragma: Whether the directive was written as #pragma include
    """

    name: str
    delimiter: Literal["angle", "quote"]
    line: int
    is_pragma: bool = False
