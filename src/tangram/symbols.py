"""Material Symbols name → codepoint table.

Loaded once from the bundled ``resources/material_symbols.txt`` (one
``name codepoint`` pair per line, codepoint in hex) and handed to the
renderer as a read-only value.
"""

from __future__ import annotations

import importlib.resources
from collections.abc import Mapping
from types import MappingProxyType

_RESOURCE_PACKAGE = "tangram.resources"
_RESOURCE_NAME = "material_symbols.txt"


class SymbolTable:
    """Read-only mapping of symbol names to hex codepoints.

    Example:
        >>> table = SymbolTable({"star": "e838"})
        >>> table.codepoint("star")
        'e838'
        >>> table.codepoint("nope") is None
        True
    """

    __slots__ = ("_codepoints",)

    def __init__(self, codepoints: Mapping[str, str]):
        self._codepoints = MappingProxyType(dict(codepoints))

    @classmethod
    def parse(cls, text: str) -> SymbolTable:
        codepoints: dict[str, str] = {}
        for line in text.splitlines():
            parts = line.split()
            if len(parts) >= 2:
                codepoints[parts[0]] = parts[1].lower()
        return cls(codepoints)

    @classmethod
    def load(cls) -> SymbolTable:
        """Load the bundled table."""
        resource = importlib.resources.files(_RESOURCE_PACKAGE).joinpath(_RESOURCE_NAME)
        return cls.parse(resource.read_text(encoding="utf-8"))

    def codepoint(self, name: str | None) -> str | None:
        if name is None:
            return None
        return self._codepoints.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._codepoints

    def __len__(self) -> int:
        return len(self._codepoints)
