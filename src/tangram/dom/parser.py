"""HTML fragment parser built on BeautifulSoup.

BeautifulSoup (with the ``html.parser`` tree builder) does the tokenizing
and tree building; this module converts its tree into a tangram
``Document``. The parse is forgiving: unmatched end tags are dropped and
unclosed elements are closed at end of input, so any source yields a tree.

BeautifulSoup decodes character references. Text is re-escaped on the way
in, which keeps the invariant that every Text node is markup-ready, while
attribute values stay decoded until serialization.
"""

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.element import Comment as SoupComment
from bs4.element import NavigableString, PreformattedString, Tag

from tangram.dom.nodes import Comment, Document, Element, Node, Text

# Elements whose content the tokenizer keeps as raw text
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})


def _convert_children(tag: Tag, raw_text: bool = False) -> list[Node]:
    children: list[Node] = []
    for child in tag.contents:
        if isinstance(child, Tag):
            element = Element(child.name, _convert_attrs(child))
            element.children = _convert_children(child, child.name in RAW_TEXT_ELEMENTS)
            children.append(element)
        elif isinstance(child, SoupComment):
            children.append(Comment(str(child)))
        elif isinstance(child, PreformattedString):
            # Doctypes, declarations and processing instructions
            continue
        elif isinstance(child, NavigableString):
            data = str(child) if raw_text else EntitySubstitution.substitute_xml(str(child))
            if children and isinstance(children[-1], Text):
                children[-1].data += data
            else:
                children.append(Text(data))
    return children


def _convert_attrs(tag: Tag) -> dict[str, str]:
    return {name: value if value is not None else "" for name, value in tag.attrs.items()}


def parse_html(source: str) -> Document:
    """Parse an HTML fragment into a Document.

    Example:
        >>> doc = parse_html('<p title="a &amp; b">Hi</p>')
        >>> doc.children[0].attrs
        {'title': 'a & b'}
    """
    soup = BeautifulSoup(
        source,
        "html.parser",
        # Keep class and rel as plain strings; first duplicate wins, as in browsers
        multi_valued_attributes=None,
        on_duplicate_attribute="ignore",
        # Whitespace-only text is kept verbatim everywhere below the root
        preserve_whitespace_tags={BeautifulSoup.ROOT_TAG_NAME},
    )
    return Document(_convert_children(soup))
