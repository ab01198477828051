"""The document contract consumed by the render pipeline."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Document(Protocol):
    """
    Opaque, caller-owned document tree.

    Any backend (in-memory tree, DOM emulator, headless engine) can be
    rendered as long as it serializes itself, answers selector queries and
    lets matched elements be mutated.
    """

    def serialize(self) -> str:
        """Canonical XHTML serialization of the whole document."""
        ...

    def to_html(self) -> str:
        """HTML serialization, used to load the document into a browser."""
        ...

    def query_selector(self, selector: str) -> Any | None:
        """First element matching ``selector``, or None."""
        ...

    def add_class_name(self, element: Any, class_name: str, recursive: bool = False) -> None:
        """Add a class to ``element`` and, when ``recursive``, to all its ancestors."""
        ...

    def rewrite_style_selectors(self, pseudo_class: str, replacement: str) -> int:
        """Rewrite ``pseudo_class`` in embedded style selectors. Returns styles changed."""
        ...
