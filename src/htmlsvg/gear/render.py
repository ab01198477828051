"""
Render Gear - HTML document to SVG

Embeds a whole document in an SVG foreignObject so it draws at the
requested size and zoom, and runs the pipeline around it:
simulate pseudo-states, measure the content, synthesize the SVG.
"""

import logging
from typing import Any, Awaitable, Callable, Mapping, Optional

from .document.base import Document
from .document.pseudo import fake_active, fake_hover
from .document.tree import HtmlDocument
from .errors import ConcurrentRenderError
from .measure import calculate_document_content_size
from .models import RenderOptions, RenderResult, SizeDescriptor
from .visual.rasterizer import rasterize_svg
from .xhtml import validate_xhtml

logger = logging.getLogger("htmlsvg.render")

SVG_NS = "http://www.w3.org/2000/svg"

SizeCalculator = Callable[[Any, dict], Awaitable[Any]]
Synthesizer = Callable[[Any, Any, Optional[float]], str]
Simulator = Callable[[Any, str], None]
Rasterizer = Callable[[str, float, float], Awaitable[bytes]]


def _format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _foreign_object_style(zoom: Optional[float]) -> str:
    style = ""
    if zoom:
        scale = _format_number(zoom)
        style += (
            f"-webkit-transform: scale({scale}); -webkit-transform-origin: 0 0; "
            f"transform: scale({scale}); transform-origin: 0 0; "
        )
    # Floating keeps the content's margins from collapsing across the SVG element
    # in WebKit-based engines.
    return style + "float: left;"


def get_svg_for_document(
    document: Document,
    size: SizeDescriptor | Mapping[str, Any],
    zoom: Optional[float],
    validator: Callable[[str], None] | None = None,
) -> str:
    """
    Synthesize the SVG for ``document``.

    The foreignObject is shifted by (-left, -top) and sized to the visible
    frame; the outer svg is sized to the canvas. A zoom of 0 or None leaves
    the content unscaled, any other value scales it around the frame's
    top-left corner.

    Errors raised while serializing or validating propagate unchanged.
    """
    size = SizeDescriptor.coerce(size)
    validate = validator or validate_xhtml

    xhtml = document.serialize()
    validate(xhtml)

    foreign_object = (
        f'<foreignObject x="{_format_number(-size.left)}" y="{_format_number(-size.top)}"'
        f' width="{_format_number(size.viewport_width)}"'
        f' height="{_format_number(size.viewport_height)}"'
        f' style="{_foreign_object_style(zoom)}">'
        f"{xhtml}"
        f"</foreignObject>"
    )
    return (
        f'<svg xmlns="{SVG_NS}" width="{_format_number(size.width)}"'
        f' height="{_format_number(size.height)}">'
        f"{foreign_object}"
        f"</svg>"
    )


class RenderOrchestrator:
    """
    Runs one render per call: pseudo-states, measurement, synthesis.

    Collaborators default to the bundled implementations and can be swapped
    for other document backends or measuring engines. A document may only
    be rendered by one call at a time.
    """

    def __init__(
        self,
        size_calculator: SizeCalculator | None = None,
        synthesizer: Synthesizer | None = None,
        hover_simulator: Simulator | None = None,
        active_simulator: Simulator | None = None,
        rasterizer: Rasterizer | None = None,
    ):
        self.size_calculator = size_calculator or calculate_document_content_size
        self.synthesizer = synthesizer or get_svg_for_document
        self.hover_simulator = hover_simulator or fake_hover
        self.active_simulator = active_simulator or fake_active
        self.rasterizer = rasterizer or rasterize_svg
        self._rendering: set[int] = set()

    async def render(
        self, document: Document, options: RenderOptions | Mapping[str, Any] | None = None
    ) -> RenderResult:
        """Render ``document`` and keep the size the SVG was made for."""
        svg, size = await self._run(document, options)
        return RenderResult(svg=svg, size=SizeDescriptor.coerce(size))

    async def _run(
        self, document: Document, options: RenderOptions | Mapping[str, Any] | None
    ) -> tuple[str, Any]:
        # The calculator result goes to the synthesizer as-is.
        options = RenderOptions.coerce(options)

        key = id(document)
        if key in self._rendering:
            raise ConcurrentRenderError("Document is already being rendered")
        self._rendering.add(key)

        try:
            # Pseudo-states can change layout, so they go in before measuring.
            if options.hover:
                self.hover_simulator(document, options.hover)
            if options.active:
                self.active_simulator(document, options.active)

            size_request = options.size_request()
            logger.debug(f"Calculating content size with {size_request}")
            size = await self.size_calculator(document, size_request)

            svg = self.synthesizer(document, size, options.zoom)
        finally:
            self._rendering.discard(key)

        return svg, size

    async def draw_document_as_svg(
        self, document: Document, options: RenderOptions | Mapping[str, Any] | None = None
    ) -> str:
        svg, _ = await self._run(document, options)
        return svg

    async def draw_document_as_png(
        self, document: Document, options: RenderOptions | Mapping[str, Any] | None = None
    ) -> bytes:
        """Render, then rasterize the SVG at its canvas size."""
        result = await self.render(document, options)
        return await self.rasterizer(result.svg, result.size.width, result.size.height)


_default_orchestrator = RenderOrchestrator()


async def draw_document_as_svg(
    document: Document, options: RenderOptions | Mapping[str, Any] | None = None
) -> str:
    """Render ``document`` to SVG with the bundled collaborators."""
    return await _default_orchestrator.draw_document_as_svg(document, options)


async def draw_document_as_png(
    document: Document, options: RenderOptions | Mapping[str, Any] | None = None
) -> bytes:
    return await _default_orchestrator.draw_document_as_png(document, options)


async def draw_html_as_svg(
    markup: str, options: RenderOptions | Mapping[str, Any] | None = None
) -> str:
    """Parse a full HTML page and render it to SVG."""
    return await draw_document_as_svg(HtmlDocument.from_string(markup), options)
