"""
Content Size Calculator - "The Tape Measure"

Lays the document out in a headless browser page and reports the geometry
the SVG needs: canvas size, visible frame size and, when clipping to one
element, that element's offset.
"""

import logging
import math
from typing import Any, Dict

from .browser.manager import BrowserManager
from .document.base import Document
from .errors import MeasurementError
from .models import SizeDescriptor

logger = logging.getLogger("htmlsvg.measure")

DEFAULT_WIDTH = 300
DEFAULT_HEIGHT = 200

# Returns null when the clipping selector has no match.
_MEASURE_SCRIPT = """(selector) => {
    const root = document.documentElement;
    // clientWidth/clientHeight cover documents that do not overflow
    const viewportWidth = Math.max(root.scrollWidth, root.clientWidth);
    const viewportHeight = Math.max(root.scrollHeight, root.clientHeight);

    if (!selector) {
        return {
            left: 0,
            top: 0,
            width: viewportWidth,
            height: viewportHeight,
            viewportWidth: viewportWidth,
            viewportHeight: viewportHeight
        };
    }

    const element = document.querySelector(selector);
    if (!element) {
        return null;
    }
    const rect = element.getBoundingClientRect();
    return {
        left: rect.left,
        top: rect.top,
        width: rect.width,
        height: rect.height,
        viewportWidth: viewportWidth,
        viewportHeight: viewportHeight
    };
}"""


def zoomed_content_size(
    measured: Dict[str, float],
    requested_width: float,
    requested_height: float,
    zoom: float,
    clipped: bool = False,
) -> SizeDescriptor:
    """
    Turn raw page measurements into a SizeDescriptor.

    The canvas is the measured content scaled by ``zoom`` and rounded up.
    Without clipping it never shrinks below the requested size.
    """
    width = measured["width"] * zoom
    height = measured["height"] * zoom
    if not clipped:
        width = max(width, requested_width)
        height = max(height, requested_height)

    return SizeDescriptor(
        left=measured["left"],
        top=measured["top"],
        width=math.ceil(width),
        height=math.ceil(height),
        viewport_width=measured["viewportWidth"],
        viewport_height=measured["viewportHeight"],
    )


class ContentSizeCalculator:
    """
    Measures documents in a headless browser.

    The layout viewport is the requested size divided by the zoom factor, so
    zoomed content fills exactly the requested canvas.
    """

    def __init__(self, browser: BrowserManager | None = None, config: Dict[str, Any] | None = None):
        self.config = config or {}
        self.browser = browser or BrowserManager(self.config)
        self.default_width = self.config.get("render.default_width", DEFAULT_WIDTH)
        self.default_height = self.config.get("render.default_height", DEFAULT_HEIGHT)
        self.wait_until = self.config.get("render.wait_until", "load")

    async def __call__(self, document: Document, size_request: Dict[str, Any]) -> SizeDescriptor:
        return await self.calculate(document, size_request)

    async def calculate(self, document: Document, size_request: Dict[str, Any]) -> SizeDescriptor:
        """Measure ``document`` for the given width/height/clip/zoom request."""
        zoom = size_request.get("zoom") or 1
        clip = size_request.get("clip")
        requested_width = size_request.get("width")
        requested_height = size_request.get("height")
        if requested_width is None:
            requested_width = self.default_width
        if requested_height is None:
            requested_height = self.default_height

        viewport = (math.ceil(requested_width / zoom), math.ceil(requested_height / zoom))
        logger.debug(f"Measuring document in {viewport[0]}x{viewport[1]} viewport (zoom={zoom})")

        async with self.browser.page(viewport) as page:
            await page.set_content(document.to_html(), wait_until=self.wait_until)
            measured = await page.evaluate(_MEASURE_SCRIPT, clip)

        if measured is None:
            logger.error(f"Clipping selector not found: {clip}")
            raise MeasurementError(f"Clipping selector not found: {clip}")

        size = zoomed_content_size(
            measured, requested_width, requested_height, zoom, clipped=bool(clip)
        )
        logger.debug(f"Measured {size}")
        return size


async def calculate_document_content_size(
    document: Document, size_request: Dict[str, Any]
) -> SizeDescriptor:
    """Measure ``document`` with a browser started for this call only."""
    async with BrowserManager() as browser:
        return await ContentSizeCalculator(browser).calculate(document, size_request)
