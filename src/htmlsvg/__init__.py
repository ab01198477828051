"""
htmlsvg

Renders in-memory HTML documents as self-contained SVG images.
"""

from .gear.document import HtmlDocument
from .gear.errors import (
    ConcurrentRenderError,
    InvalidOptionsError,
    InvalidXhtmlError,
    MeasurementError,
    RenderError,
    SynthesisError,
)
from .gear.models import RenderOptions, RenderResult, SizeDescriptor
from .gear.render import (
    RenderOrchestrator,
    draw_document_as_png,
    draw_document_as_svg,
    draw_html_as_svg,
    get_svg_for_document,
)

__all__ = [
    "HtmlDocument",
    "RenderOptions",
    "RenderResult",
    "SizeDescriptor",
    "RenderOrchestrator",
    "get_svg_for_document",
    "draw_document_as_svg",
    "draw_document_as_png",
    "draw_html_as_svg",
    "RenderError",
    "SynthesisError",
    "InvalidXhtmlError",
    "MeasurementError",
    "InvalidOptionsError",
    "ConcurrentRenderError",
]
