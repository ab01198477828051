"""
Browser Manager Module

Headless browser lifecycle for measurement and rasterization.
"""

from .manager import BrowserConfig, BrowserManager, BrowserType

__all__ = [
    "BrowserManager",
    "BrowserType",
    "BrowserConfig",
]
