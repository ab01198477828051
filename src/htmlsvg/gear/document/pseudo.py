"""
Pseudo-State Simulation

Forces :hover / :active looks onto a static document. The matched element
and its ancestors get a marker class, and embedded stylesheets are rewritten
so rules written for the pseudo-class target the marker class instead.
"""

import logging

from .base import Document

logger = logging.getLogger("htmlsvg.document")

PSEUDO_CLASS_PREFIX = "htmlsvg"


def pseudo_class_name(action: str) -> str:
    return f"{PSEUDO_CLASS_PREFIX}{action}"


def fake_user_action(document: Document, selector: str, action: str) -> bool:
    """Apply the ``action`` pseudo-state to the first match of ``selector``."""
    element = document.query_selector(selector)
    if element is None:
        logger.debug(f"No element matches {selector!r}, skipping :{action}")
        return False

    class_name = pseudo_class_name(action)
    document.add_class_name(element, class_name, recursive=True)
    document.rewrite_style_selectors(f":{action}", f".{class_name}")
    return True


def fake_hover(document: Document, selector: str) -> None:
    fake_user_action(document, selector, "hover")


def fake_active(document: Document, selector: str) -> None:
    fake_user_action(document, selector, "active")
