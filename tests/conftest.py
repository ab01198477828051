"""Shared fixtures."""

import pytest

from htmlsvg.gear.browser.manager import BrowserManager
from htmlsvg.gear.document.tree import HtmlDocument


@pytest.fixture
def document():
    """Empty document, like document.implementation.createHTMLDocument("")."""
    return HtmlDocument.create()


@pytest.fixture
async def browser():
    """Headless Chromium; tests needing it are skipped when none is installed."""
    manager = BrowserManager()
    try:
        await manager.start()
    except Exception as e:
        await manager.close()
        pytest.skip(f"Chromium not available: {e}")
    yield manager
    await manager.close()
