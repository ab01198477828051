"""
Document Module

Document contract, lxml-backed implementation and pseudo-state simulation.
"""

from .base import Document
from .pseudo import fake_active, fake_hover, fake_user_action
from .tree import HtmlDocument

__all__ = [
    "Document",
    "HtmlDocument",
    "fake_hover",
    "fake_active",
    "fake_user_action",
]
