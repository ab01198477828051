"""
HTML Document - in-memory document tree backed by lxml.

Mirrors the handful of DOM operations the render pipeline needs:
creating an empty document, replacing body content, selector queries and
class/stylesheet mutation for pseudo-state simulation.
"""

import logging
import re
from typing import Callable

from lxml import html

from ..xhtml import serialize_to_xhtml

logger = logging.getLogger("htmlsvg.document")

HTML5_DOCTYPE = "<!DOCTYPE html>"

# Comments, string literals and braces. Braces inside the first two are not
# block delimiters.
_CSS_TOKEN = re.compile(r"/\*.*?\*/|\"(?:\\.|[^\"\\])*\"|'(?:\\.|[^'\\])*'|[{}]", re.S)


class HtmlDocument:
    """
    Document tree held as an lxml.html element.

    The instance is owned by the caller; renders only mutate it through
    add_class_name and rewrite_style_selectors.
    """

    def __init__(self, root: html.HtmlElement):
        self.root = root

    @classmethod
    def create(cls, title: str = "") -> "HtmlDocument":
        """Empty document with a <title> and an empty <body>."""
        root = html.Element("html")
        head = html.Element("head")
        title_element = html.Element("title")
        title_element.text = title or None
        head.append(title_element)
        root.append(head)
        root.append(html.Element("body"))
        return cls(root)

    @classmethod
    def from_string(cls, markup: str) -> "HtmlDocument":
        """Parse a complete HTML page."""
        root = html.document_fromstring(markup)
        document = cls(root)
        # Markup without a body still gets one so content can be added later.
        if root.find("body") is None:
            root.append(html.Element("body"))
        return document

    @property
    def head(self) -> html.HtmlElement:
        head = self.root.find("head")
        if head is None:
            head = html.Element("head")
            self.root.insert(0, head)
        return head

    @property
    def body(self) -> html.HtmlElement:
        return self.root.find("body")

    @property
    def title(self) -> str:
        title = self.head.find("title")
        if title is None:
            return ""
        return title.text_content()

    @title.setter
    def title(self, value: str) -> None:
        title = self.head.find("title")
        if title is None:
            title = html.Element("title")
            self.head.insert(0, title)
        title.text = value or None

    def set_body_html(self, markup: str) -> None:
        """Replace the body content, like assigning body.innerHTML."""
        body = self.body
        for child in list(body):
            body.remove(child)
        body.text = None

        if not markup.strip():
            body.text = markup or None
            return

        fragments = html.fragments_fromstring(markup)
        if fragments and isinstance(fragments[0], str):
            body.text = fragments.pop(0)
        for fragment in fragments:
            body.append(fragment)

    def serialize(self) -> str:
        return serialize_to_xhtml(self.root)

    def to_html(self) -> str:
        return html.tostring(self.root, encoding="unicode", method="html", doctype=HTML5_DOCTYPE)

    def query_selector(self, selector: str) -> html.HtmlElement | None:
        matches = self.root.cssselect(selector)
        return matches[0] if matches else None

    def add_class_name(
        self, element: html.HtmlElement, class_name: str, recursive: bool = False
    ) -> None:
        while element is not None:
            element.classes.add(class_name)
            if not recursive:
                break
            element = element.getparent()

    def rewrite_style_selectors(self, pseudo_class: str, replacement: str) -> int:
        pattern = re.compile(re.escape(pseudo_class) + r"(?![\w-])")

        def rewrite_selector(text: str) -> str:
            return pattern.sub(lambda _: replacement, text)

        changed = 0
        for style in self.root.iter("style"):
            css = style.text or ""
            rewritten = rewrite_rule_preludes(css, rewrite_selector)
            if rewritten != css:
                style.text = rewritten
                changed += 1

        logger.debug(f"Rewrote {pseudo_class} in {changed} style element(s)")
        return changed


def rewrite_rule_preludes(css: str, rewrite: Callable[[str], str]) -> str:
    """
    Apply ``rewrite`` to every selector list and at-rule prelude in ``css``.

    A prelude is the text before an opening brace. Declaration blocks,
    comments and string literals are left as they are.
    """
    output = []
    pending = []  # (text, is_prelude_text) since the last brace
    position = 0
    for match in _CSS_TOKEN.finditer(css):
        token = match.group()
        pending.append((css[position : match.start()], True))
        position = match.end()
        if token == "{":
            output.extend(rewrite(text) if plain else text for text, plain in pending)
        elif token == "}":
            output.extend(text for text, _ in pending)
        else:
            pending.append((token, False))
            continue
        output.append(token)
        pending = []

    output.extend(text for text, _ in pending)
    output.append(css[position:])
    return "".join(output)
