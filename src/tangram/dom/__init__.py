"""DOM substrate for tangram: nodes, parsing, serialization and queries."""

from tangram.dom.nodes import Comment, Document, Element, Node, Text
from tangram.dom.parser import parse_html
from tangram.dom.query import find, find_all, find_by_name, iter_elements, text_content
from tangram.dom.serializer import to_document_html, to_html

__all__ = [
    "Comment",
    "Document",
    "Element",
    "Node",
    "Text",
    "find",
    "find_all",
    "find_by_name",
    "iter_elements",
    "parse_html",
    "text_content",
    "to_document_html",
    "to_html",
]
