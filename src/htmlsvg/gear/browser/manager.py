"""
Browser Manager - Headless Layout Engine

Owns the Playwright lifecycle and hands out short-lived pages sized to a
viewport. Used for content measurement and SVG rasterization.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, AsyncIterator, Dict, Optional, Tuple

from playwright.async_api import Browser, Page, Playwright, async_playwright

logger = logging.getLogger("htmlsvg.browser")


class BrowserType(Enum):
    """Supported browser engines."""

    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"


@dataclass
class BrowserConfig:
    """Browser launch configuration."""

    browser_type: BrowserType = BrowserType.CHROMIUM
    headless: bool = True
    device_scale_factor: float = 1.0
    java_script_enabled: bool = True

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "BrowserConfig":
        return cls(
            browser_type=BrowserType(config.get("browser.type", BrowserType.CHROMIUM.value)),
            headless=config.get("browser.headless", True),
            device_scale_factor=config.get("browser.device_scale_factor", 1.0),
            java_script_enabled=config.get("browser.java_script_enabled", True),
        )


class BrowserManager:
    """
    Browser Manager

    Starts one browser lazily and gives every caller an isolated context.
    """

    def __init__(self, config: Dict[str, Any] | None = None):
        self.config = config or {}
        self.browser_config = BrowserConfig.from_dict(self.config)
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None

    async def start(self) -> Browser:
        """Start the browser if it is not running yet."""
        if self.browser is not None:
            return self.browser

        if not self.playwright:
            self.playwright = await async_playwright().start()

        browser_type = self.browser_config.browser_type
        try:
            if browser_type == BrowserType.CHROMIUM:
                self.browser = await self.playwright.chromium.launch(
                    headless=self.browser_config.headless,
                    args=["--no-sandbox", "--disable-dev-shm-usage"],
                )
            elif browser_type == BrowserType.FIREFOX:
                self.browser = await self.playwright.firefox.launch(
                    headless=self.browser_config.headless
                )
            elif browser_type == BrowserType.WEBKIT:
                self.browser = await self.playwright.webkit.launch(
                    headless=self.browser_config.headless
                )
            else:
                raise ValueError(f"Unsupported browser type: {browser_type}")
        except Exception as e:
            logger.error(f"Failed to start {browser_type.value} browser: {e}")
            raise

        logger.info(f"Started {browser_type.value} browser")
        return self.browser

    @asynccontextmanager
    async def page(self, viewport: Tuple[int, int]) -> AsyncIterator[Page]:
        """Yield a fresh page with the given (width, height) viewport."""
        browser = await self.start()
        width, height = viewport
        context = await browser.new_context(
            viewport={"width": max(int(width), 1), "height": max(int(height), 1)},
            device_scale_factor=self.browser_config.device_scale_factor,
            java_script_enabled=self.browser_config.java_script_enabled,
        )
        try:
            yield await context.new_page()
        finally:
            try:
                await context.close()
            except Exception as e:
                logger.debug(f"Error closing browser context: {e}")

    async def close(self) -> None:
        """Close the browser and stop Playwright."""
        if self.browser is not None:
            await self.browser.close()
            self.browser = None
            logger.info("Closed browser")

        if self.playwright:
            await self.playwright.stop()
            self.playwright = None

    async def __aenter__(self) -> "BrowserManager":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
