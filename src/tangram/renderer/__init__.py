"""Rendering: directive expansion, widget codegen and document assembly."""

from tangram.renderer.core import Renderer, interpolate
from tangram.renderer.errors import error_marker
from tangram.renderer.head import build_head, expand_meta_property
from tangram.renderer.postprocess import postprocess

__all__ = [
    "Renderer",
    "build_head",
    "error_marker",
    "expand_meta_property",
    "interpolate",
    "postprocess",
]
