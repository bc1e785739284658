"""Source loaders for tangram sites.

Loaders provide raw source text to the template repository. They implement
`get_source(name)` returning `(source, filename)`, `list_templates()`
returning every file name below the site's source root, and `exists(name)`.

Names are POSIX paths relative to the source root, e.g. ``pages/index.html``,
``components/card.html``, ``site.toml`` or ``icons/favicon.ico``.

Built-in Loaders:
- `FileSystemLoader`: Load from a site's ``src/`` directory
- `DictLoader`: Load from an in-memory dictionary (testing/embedded)

Custom Loaders:
Implement the Loader protocol:
    ```python
    class ZipLoader:
        def get_source(self, name: str) -> tuple[str, str | None]: ...
        def list_templates(self) -> list[str]: ...
        def exists(self, name: str) -> bool: ...
    ```

"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from tangram.environment.exceptions import TemplateNotFoundError


class Loader(Protocol):
    """Protocol implemented by every source loader."""

    def get_source(self, name: str) -> tuple[str, str | None]: ...

    def list_templates(self) -> list[str]: ...

    def exists(self, name: str) -> bool: ...


class FileSystemLoader:
    """Load sources from a site's source directory.

    Attributes:
        _root: Source root (usually ``<site>/src``)
        _encoding: File encoding (default: utf-8)

    Example:
        >>> loader = FileSystemLoader("mysite/src")
        >>> source, filename = loader.get_source("pages/index.html")
        >>> print(filename)
        mysite/src/pages/index.html

    Raises:
        TemplateNotFoundError: If the file does not exist

    """

    __slots__ = ("_encoding", "_root")

    def __init__(self, root: str | Path, encoding: str = "utf-8"):
        self._root = Path(root)
        self._encoding = encoding

    @property
    def root(self) -> Path:
        return self._root

    def get_source(self, name: str) -> tuple[str, str]:
        """Load source text from the filesystem."""
        path = self._root / name
        if path.is_file():
            return path.read_text(self._encoding), str(path)

        raise TemplateNotFoundError(f"Source '{name}' not found in: {self._root}")

    def list_templates(self) -> list[str]:
        """List every file below the source root as a POSIX relative path."""
        if not self._root.is_dir():
            return []
        return sorted(
            path.relative_to(self._root).as_posix()
            for path in self._root.rglob("*")
            if path.is_file()
        )

    def exists(self, name: str) -> bool:
        return (self._root / name).is_file()


class DictLoader:
    """Load sources from an in-memory dictionary.

    Maps source names to source strings. Useful for testing and for sites
    generated on the fly.

    Note:
        Returns `None` as filename since sources are not file-backed.

    Example:
        >>> loader = DictLoader({
        ...     "pages/index.html": "<h1>Hello, world!</h1>",
        ...     "layouts/main.html": "<main><tg:content></tg:content></main>",
        ... })
        >>> loader.list_templates()
        ['layouts/main.html', 'pages/index.html']

    Raises:
        TemplateNotFoundError: If the name is not in the mapping

    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: dict[str, str]):
        self._mapping = mapping

    def get_source(self, name: str) -> tuple[str, None]:
        if name not in self._mapping:
            from difflib import get_close_matches

            available = sorted(self._mapping.keys())
            msg = f"Source '{name}' not found"
            matches = get_close_matches(name, available, n=1, cutoff=0.6)
            if matches:
                msg += f". Did you mean '{matches[0]}'?"
            raise TemplateNotFoundError(msg)
        return self._mapping[name], None

    def list_templates(self) -> list[str]:
        return sorted(self._mapping.keys())

    def exists(self, name: str) -> bool:
        return name in self._mapping

    def set_source(self, name: str, source: str) -> None:
        """Add or replace a source (simulates a file write)."""
        self._mapping[name] = source

    def remove_source(self, name: str) -> None:
        """Remove a source (simulates a file deletion)."""
        self._mapping.pop(name, None)
