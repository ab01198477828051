"""
XHTML Canonicalizer - "The Notary"

Turns an lxml HTML tree into the XHTML that gets embedded in a foreignObject,
and checks that the result is well-formed XML before it is wrapped.
"""

import logging

from lxml import etree

from .errors import InvalidXhtmlError

logger = logging.getLogger("htmlsvg.xhtml")

XHTML_NS = "http://www.w3.org/1999/xhtml"
XML_NS = "http://www.w3.org/XML/1998/namespace"
XLINK_NS = "http://www.w3.org/1999/xlink"

ATTRIBUTE_NAMESPACES = {"xml": XML_NS, "xlink": XLINK_NS}

SVG_NS = "http://www.w3.org/2000/svg"
MATHML_NS = "http://www.w3.org/1998/Math/MathML"

# Inline SVG and MathML islands keep their own namespace inside the XHTML tree.
FOREIGN_NAMESPACES = {"svg": SVG_NS, "math": MATHML_NS}

# HTML parsers lowercase names; SVG is case-sensitive. Case adjustments from
# the WHATWG HTML parsing algorithm.
_SVG_TAG_NAMES = (
    "altGlyph altGlyphDef altGlyphItem animateColor animateMotion animateTransform "
    "clipPath feBlend feColorMatrix feComponentTransfer feComposite feConvolveMatrix "
    "feDiffuseLighting feDisplacementMap feDistantLight feDropShadow feFlood feFuncA "
    "feFuncB feFuncG feFuncR feGaussianBlur feImage feMerge feMergeNode feMorphology "
    "feOffset fePointLight feSpecularLighting feSpotLight feTile feTurbulence "
    "foreignObject glyphRef linearGradient radialGradient textPath"
)
_SVG_ATTRIBUTE_NAMES = (
    "attributeName attributeType baseFrequency baseProfile calcMode clipPathUnits "
    "diffuseConstant edgeMode filterUnits glyphRef gradientTransform gradientUnits "
    "kernelMatrix kernelUnitLength keyPoints keySplines keyTimes lengthAdjust "
    "limitingConeAngle markerHeight markerUnits markerWidth maskContentUnits maskUnits "
    "numOctaves pathLength patternContentUnits patternTransform patternUnits pointsAtX "
    "pointsAtY pointsAtZ preserveAlpha preserveAspectRatio primitiveUnits refX refY "
    "repeatCount repeatDur requiredExtensions requiredFeatures specularConstant "
    "specularExponent spreadMethod startOffset stdDeviation stitchTiles surfaceScale "
    "systemLanguage tableValues targetX targetY textLength viewBox viewTarget "
    "xChannelSelector yChannelSelector zoomAndPan"
)
SVG_TAG_CASE = {name.lower(): name for name in _SVG_TAG_NAMES.split()}
SVG_ATTRIBUTE_CASE = {name.lower(): name for name in _SVG_ATTRIBUTE_NAMES.split()}
MATHML_ATTRIBUTE_CASE = {"definitionurl": "definitionURL"}

ATTRIBUTE_CASE = {SVG_NS: SVG_ATTRIBUTE_CASE, MATHML_NS: MATHML_ATTRIBUTE_CASE}


def serialize_to_xhtml(root: etree._Element) -> str:
    """
    Serialize an HTML tree as XHTML.

    The root element carries the XHTML namespace and <head> holds exactly one
    <title>. The source tree is not modified; everything else is copied
    through as-is.
    """
    try:
        xhtml_root = _copy_element(root, None)
    except ValueError as e:
        logger.error(f"XHTML serialization failed: {e}")
        raise InvalidXhtmlError(f"Document cannot be serialized as XHTML: {e}") from e

    _ensure_single_title(xhtml_root)
    return etree.tostring(xhtml_root, encoding="unicode", method="xml")


def validate_xhtml(markup: str) -> None:
    """Raise InvalidXhtmlError unless ``markup`` is a well-formed XHTML document."""
    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
    try:
        root = etree.fromstring(markup, parser)
    except etree.XMLSyntaxError as e:
        logger.error(f"Invalid XHTML source: {e}")
        raise InvalidXhtmlError(f"Invalid source: {e}") from e

    if etree.QName(root).namespace != XHTML_NS:
        raise InvalidXhtmlError(f"Root element is not in the XHTML namespace: {root.tag}")


def _xhtml_tag(name: str) -> str:
    return f"{{{XHTML_NS}}}{name.lower()}"


def _copy_element(source: etree._Element, parent: etree._Element | None) -> etree._Element | None:
    if isinstance(source, etree._Comment):
        node = etree.Comment(source.text or "")
        parent.append(node)
        node.tail = source.tail
        return node

    if not isinstance(source.tag, str):
        # Processing instructions and entities have no XHTML counterpart; keep their tail.
        if source.tail:
            _append_text(parent, source.tail)
        return None

    localname = etree.QName(source).localname.lower()
    namespace = _child_namespace(parent, localname)
    if namespace == SVG_NS:
        localname = SVG_TAG_CASE.get(localname, localname)
    attribute_case = ATTRIBUTE_CASE.get(namespace, {})

    tag = f"{{{namespace}}}{localname}"
    if parent is None:
        node = etree.Element(tag, nsmap={None: XHTML_NS})
    elif namespace != etree.QName(parent).namespace:
        node = etree.SubElement(parent, tag, nsmap={None: namespace})
    else:
        node = etree.SubElement(parent, tag)

    for name, value in source.attrib.items():
        if name == "xmlns" or name.startswith("xmlns:"):
            continue
        prefix, _, local = name.partition(":")
        if local and prefix in ATTRIBUTE_NAMESPACES:
            name = f"{{{ATTRIBUTE_NAMESPACES[prefix]}}}{local}"
        else:
            name = attribute_case.get(name.lower(), name)
        node.set(name, value)

    node.text = source.text
    for child in source:
        _copy_element(child, node)
    if parent is not None:
        node.tail = source.tail
    return node


def _child_namespace(parent: etree._Element | None, localname: str) -> str:
    if localname in FOREIGN_NAMESPACES:
        return FOREIGN_NAMESPACES[localname]
    if parent is None:
        return XHTML_NS
    parent_name = etree.QName(parent)
    # foreignObject content is HTML again
    if parent_name.namespace == SVG_NS and parent_name.localname == "foreignObject":
        return XHTML_NS
    return parent_name.namespace


def _append_text(parent: etree._Element, text: str) -> None:
    if len(parent):
        last = parent[-1]
        last.tail = (last.tail or "") + text
    else:
        parent.text = (parent.text or "") + text


def _ensure_single_title(root: etree._Element) -> None:
    head = root.find(_xhtml_tag("head"))
    if head is None:
        head = etree.Element(_xhtml_tag("head"))
        root.insert(0, head)

    titles = head.findall(_xhtml_tag("title"))
    if not titles:
        head.insert(0, etree.Element(_xhtml_tag("title")))
        return

    for extra in titles[1:]:
        if extra.tail:
            _append_text_before(extra, extra.tail)
        head.remove(extra)


def _append_text_before(element: etree._Element, text: str) -> None:
    previous = element.getprevious()
    if previous is not None:
        previous.tail = (previous.tail or "") + text
    else:
        parent = element.getparent()
        parent.text = (parent.text or "") + text
