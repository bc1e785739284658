"""Pytest configuration and fixtures for tangram tests."""

import re

import pytest

from tangram import DictLoader, Site, SymbolTable

_BETWEEN_TAGS_RE = re.compile(r">\s+<")


@pytest.fixture(scope="session")
def symbols():
    """The bundled symbol table, loaded once."""
    return SymbolTable.load()


@pytest.fixture
def make_site(symbols):
    """Build a Site from an in-memory mapping of source paths."""

    def factory(sources, **options):
        return Site(DictLoader(dict(sources)), symbols=symbols, **options)

    return factory


def normalize(html: str) -> str:
    """Drop whitespace between tags so assertions ignore indentation."""
    return _BETWEEN_TAGS_RE.sub("><", html).strip()


def body_of(html: str) -> str:
    """The normalized markup between ``<body>`` and ``</body>``."""
    html = normalize(html)
    start = html.index("<body>") + len("<body>")
    return html[start : html.rindex("</body>")]


def assert_contains(result: str, *expected_parts: str) -> None:
    """Assert result contains all expected parts.

    Args:
        result: The actual rendering result.
        expected_parts: Strings that should all be present in the result.
    """
    for part in expected_parts:
        assert part in result, (
            f"Rendered output missing expected content:\n"
            f"  Missing: {part!r}\n"
            f"  Actual: {result!r}"
        )
