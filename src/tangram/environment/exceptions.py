"""Exceptions for the tangram site compiler.

Exception Hierarchy:
TangramError (base)
├── TemplateNotFoundError     # Source not found by loader
├── FrontMatterError          # TOML syntax error in a template's front matter
└── SiteConfigError           # TOML syntax error in site.toml

Rendering never raises: unresolved directives degrade into inline error
markers in the output. These exceptions cover loading, where a missing or
unreadable source is a genuine failure of the caller's input.

Example:
    ```
    T-FM-001: Invalid front matter: Expected '=' after a key (at line 2, column 7)
      --> pages/index.html:2
       |
     2 | title "Home"
       |
    ```

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------


class ErrorCode(Enum):
    """Searchable error codes for tangram errors.

    Format: T-{CATEGORY}-{NUMBER}
    Categories: TPL (template loading), FM (front matter), CFG (site config)
    """

    TEMPLATE_NOT_FOUND = "T-TPL-001"
    FRONT_MATTER_SYNTAX = "T-FM-001"
    UNCLOSED_FRONT_MATTER = "T-FM-002"
    SITE_CONFIG_SYNTAX = "T-CFG-001"

    @property
    def category(self) -> str:
        """Error category (e.g., 'template', 'front-matter')."""
        prefix = self.value.split("-")[1]
        return {
            "TPL": "template",
            "FM": "front-matter",
            "CFG": "config",
        }.get(prefix, "unknown")


# ---------------------------------------------------------------------------
# Source snippets
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """Source context around an error line.

    Attributes:
        lines: Tuple of (line_number, line_content) pairs around the error.
        error_line: The 1-based line number where the error occurred.
    """

    lines: tuple[tuple[int, str], ...]
    error_line: int

    def format(self) -> str:
        parts: list[str] = ["   |"]
        for lineno, content in self.lines:
            marker = ">" if lineno == self.error_line else " "
            parts.append(f"{marker}{lineno:>2} | {content}")
        parts.append("   |")
        return "\n".join(parts)


def build_source_snippet(
    source: str,
    error_line: int,
    *,
    context_lines: int = 2,
) -> SourceSnippet:
    """Build a SourceSnippet from source text.

    Args:
        source: Full source text.
        error_line: 1-based line number of the error.
        context_lines: Number of lines to show before/after the error line.
    """
    all_lines = source.splitlines()
    start = max(0, error_line - 1 - context_lines)
    end = min(len(all_lines), error_line + context_lines)
    lines = tuple((i + 1, all_lines[i]) for i in range(start, end))
    return SourceSnippet(lines=lines, error_line=error_line)


class TangramError(Exception):
    """Base exception for all tangram errors.

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a one-screen diagnostic without traceback noise."""
        header = str(self)
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        return header


class TemplateNotFoundError(TangramError):
    """Source not found by any configured loader."""

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND


class FrontMatterError(TangramError):
    """Front matter of a template could not be parsed.

    Attributes:
        message: Parser message
        filename: Template path
        lineno: 1-based line number within the template source, if known
        source: Full template source, used for the snippet
    """

    code: ErrorCode | None = ErrorCode.FRONT_MATTER_SYNTAX

    def __init__(
        self,
        message: str,
        *,
        filename: str | None = None,
        lineno: int | None = None,
        source: str | None = None,
        code: ErrorCode | None = None,
    ):
        self.message = message
        self.filename = filename
        self.lineno = lineno
        self.source = source
        if code is not None:
            self.code = code
        super().__init__(message)

    def format_compact(self) -> str:
        parts: list[str] = []
        code_prefix = f"{self.code.value}: " if self.code else ""
        location = self.filename or "<template>"
        if self.lineno:
            location += f":{self.lineno}"
        parts.append(f"{code_prefix}{self.message}")
        parts.append(f"  --> {location}")
        if self.source and self.lineno:
            parts.append(build_source_snippet(self.source, self.lineno).format())
        return "\n".join(parts)


class SiteConfigError(FrontMatterError):
    """``site.toml`` could not be parsed."""

    code: ErrorCode | None = ErrorCode.SITE_CONFIG_SYNTAX
