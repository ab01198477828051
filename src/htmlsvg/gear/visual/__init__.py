"""
Visual Module

Bitmap output for rendered SVGs.
"""

from .rasterizer import SvgRasterizer, rasterize_svg

__all__ = ["SvgRasterizer", "rasterize_svg"]
