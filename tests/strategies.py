"""Shared hypothesis strategies for tangram property-based testing.

Provides reusable strategies at three levels:

- **Markup**: Text and element fragments the parser must round-trip
- **Articles**: Article sets with optional ``main.index`` values
- **Properties**: Nested property tables as parsed from TOML

These are building blocks -- individual test modules compose them into
property-specific strategies.
"""

from __future__ import annotations

from hypothesis import strategies as st

from tangram._types import TemplateKind
from tangram.dom import Document
from tangram.environment.repository import Template

# ---------------------------------------------------------------------------
# Markup strategies
# ---------------------------------------------------------------------------

# Text with no markup-significant characters: parses to a single Text node.
plain_text = st.text(
    alphabet=st.characters(
        blacklist_categories=("Cs", "Cc"),
        blacklist_characters="<>&",
    ),
    min_size=1,
    max_size=80,
)

identifier = st.from_regex(r"[a-z][a-z0-9]{0,10}", fullmatch=True)

_tag_name = st.sampled_from(["div", "p", "span", "section", "em", "b", "li"])


def _element(children: st.SearchStrategy[str]) -> st.SearchStrategy[str]:
    return st.tuples(_tag_name, identifier, st.lists(children, max_size=3)).map(
        lambda t: f'<{t[0]} class="{t[1]}">{"".join(t[2])}</{t[0]}>'
    )


# Well-formed fragments of nested ordinary elements.
html_fragment = st.recursive(plain_text, _element, max_leaves=12)

# Arbitrary input that might stress the parser (fuzz-like)
arbitrary_source = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",)),
    min_size=0,
    max_size=300,
)

# ---------------------------------------------------------------------------
# Article strategies
# ---------------------------------------------------------------------------


def _article(name: str, index: int | None) -> Template:
    main = {} if index is None else {"index": index}
    return Template(
        kind=TemplateKind.ARTICLE,
        path=f"articles/{name}.html",
        dom=Document(),
        front_matter={"main": main},
    )


# Distinct article names, each with an optional (possibly repeated) index.
article_lists = st.lists(
    st.tuples(identifier, st.one_of(st.none(), st.integers(min_value=-5, max_value=5))),
    max_size=12,
    unique_by=lambda t: t[0],
).map(lambda items: [_article(name, index) for name, index in items])

# ---------------------------------------------------------------------------
# Property strategies
# ---------------------------------------------------------------------------

_scalar = st.one_of(st.booleans(), st.integers(), plain_text)

property_tables = st.recursive(
    st.dictionaries(identifier, _scalar, max_size=4),
    lambda tables: st.dictionaries(identifier, st.one_of(_scalar, tables), max_size=4),
    max_leaves=10,
)
