"""Virtual File Store holding the named files available to #include."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class VirtualFileStore:
    """Registry mapping virtual file names to their content.

    Names are opaque, case-sensitive tokens matched exactly against the text
    between an include directive's delimiters. Entries can be replaced but
    never removed.
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._files: dict[str, str] = {}

    def register(self, name: str, content: str) -> None:
        """Register a file, replacing any earlier file with the same name.

        Args:
            name: The virtual file name.
            content: The file content. May itself contain include directives.
        """
        if not isinstance(name, str):
            raise TypeError(f"File name must be a str, not {type(name).__name__}")
        if not isinstance(content, str):
            raise TypeError(f"Content of {name!r} must be a str, not {type(content).__name__}")

        if name in self._files:
            logger.debug(f"Replacing virtual file: {name}")
        self._files[name] = content

    def lookup(self, name: str) -> str | None:
        """Get the content registered under a name.

        Args:
            name: The virtual file name.

        Returns:
            The content, or None if nothing is registered under the name.
        """
        return self._files.get(name)

    def names(self) -> list[str]:
        """Get the registered names, sorted."""
        return sorted(self._files)

    def clear(self) -> None:
        """Drop every registered file."""
        self._files.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._files

    def __len__(self) -> int:
        return len(self._files)
