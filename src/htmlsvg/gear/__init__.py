"""Render Gear - HTML document to SVG conversion."""

from .render import (
    RenderOrchestrator,
    draw_document_as_png,
    draw_document_as_svg,
    draw_html_as_svg,
    get_svg_for_document,
)

__all__ = [
    "RenderOrchestrator",
    "get_svg_for_document",
    "draw_document_as_svg",
    "draw_document_as_png",
    "draw_html_as_svg",
]
