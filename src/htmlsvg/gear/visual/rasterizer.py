"""
SVG Rasterizer - "The Camera"

Draws a finished SVG onto a bitmap by loading it into a browser page as an
image and taking a screenshot clipped to the canvas.
"""

import logging
import math
from urllib.parse import quote

from playwright.async_api import Page

from ..browser.manager import BrowserManager

logger = logging.getLogger("htmlsvg.visual")

# The SVG goes in as an image so the browser parses it as XML; pasted into
# the host markup it would be parsed as HTML and lose the embedded document.
_HOST_PAGE = (
    "<!DOCTYPE html><html><head><style>"
    "html, body { margin: 0; padding: 0; background: transparent; }"
    "img { display: block; }"
    '</style></head><body><img src="{src}" width="{width}" height="{height}"></body></html>'
)


def svg_data_url(svg: str) -> str:
    return "data:image/svg+xml;charset=utf-8," + quote(svg, safe="")


class SvgRasterizer:
    """
    Converts SVG markup to PNG bytes.
    """

    def __init__(self, browser: BrowserManager | None = None):
        self.browser = browser or BrowserManager()

    async def __call__(self, svg: str, width: float, height: float) -> bytes:
        return await self.rasterize(svg, width, height)

    async def rasterize(self, svg: str, width: float, height: float) -> bytes:
        """Render ``svg`` on a ``width`` x ``height`` canvas."""
        viewport = (math.ceil(width), math.ceil(height))
        async with self.browser.page(viewport) as page:
            return await self.capture_png(page, svg, *viewport)

    @staticmethod
    async def capture_png(page: Page, svg: str, width: int, height: int) -> bytes:
        """
        Captures the SVG as PNG. Transparent areas stay transparent.
        """
        host = (
            _HOST_PAGE.replace("{src}", svg_data_url(svg))
            .replace("{width}", str(width))
            .replace("{height}", str(height))
        )
        try:
            # "load" waits for the image to be fetched and decoded
            await page.set_content(host, wait_until="load")
            return await page.screenshot(
                type="png",
                clip={"x": 0, "y": 0, "width": max(width, 1), "height": max(height, 1)},
                omit_background=True,
                animations="disabled",  # Freeze animations for consistent snapshots
            )
        except Exception as e:
            logger.error(f"SVG rasterization failed: {e}")
            raise


async def rasterize_svg(svg: str, width: float, height: float) -> bytes:
    """Rasterize with a browser started for this call only."""
    async with BrowserManager() as browser:
        return await SvgRasterizer(browser).rasterize(svg, width, height)
