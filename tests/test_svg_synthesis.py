"""
Tests for document to SVG synthesis.
"""

import re
from unittest.mock import Mock

import pytest

from htmlsvg.gear import render
from htmlsvg.gear.errors import InvalidXhtmlError
from htmlsvg.gear.models import SizeDescriptor
from htmlsvg.gear.render import get_svg_for_document

DEFAULT_ZOOM = 1

SVG_PREFIX = '<svg xmlns="http://www.w3.org/2000/svg" '
XHTML_HEAD = '<html xmlns="http://www.w3.org/1999/xhtml"><head><title(/>|></title>)</head>'


def a_render_size(width=None, height=None, viewport_width=None, viewport_height=None, left=0, top=0):
    width = width or 123
    height = height or 456
    return SizeDescriptor(
        left=left,
        top=top,
        width=width,
        height=height,
        viewport_width=viewport_width or width,
        viewport_height=viewport_height or height,
    )


class TestSvgForDocument:
    """Document to SVG conversion."""

    def test_embeds_html(self, document):
        """Body text ends up unchanged inside the foreignObject."""
        document.set_body_html("Test content")

        svg = get_svg_for_document(document, a_render_size(), DEFAULT_ZOOM)

        assert re.match(
            re.escape(SVG_PREFIX)
            + ".*><foreignObject .*>"
            + XHTML_HEAD
            + "<body>Test content</body></html></foreignObject></svg>$",
            svg,
        )

    def test_embeds_image_data_uri_unchanged(self, document):
        """Inline image data is passed through byte for byte."""
        document.set_body_html('<img src="data:image/png;base64,sOmeFAKeBasE64="/>')

        svg = get_svg_for_document(document, a_render_size(), DEFAULT_ZOOM)

        canonical = re.sub(r" +/>", "/>", svg)
        assert '<body><img src="data:image/png;base64,sOmeFAKeBasE64="/></body>' in canonical

    def test_uses_given_size(self, document):
        """Canvas gets width/height, the foreignObject the negated offset and the frame size."""
        document.set_body_html("content")

        svg = get_svg_for_document(document, a_render_size(123, 987, 200, 1000, 2, 7), DEFAULT_ZOOM)

        assert svg.startswith(
            '<svg xmlns="http://www.w3.org/2000/svg" width="123" height="987">'
            '<foreignObject x="-2" y="-7" width="200" height="1000"'
        )
        assert "<body>content</body>" in svg

    def test_zooms_by_factor(self, document):
        """Zoom is applied as a prefixed and an unprefixed CSS transform."""
        document.set_body_html("content")

        svg = get_svg_for_document(document, a_render_size(123, 987, 12, 99), 10)

        assert svg.startswith(
            '<svg xmlns="http://www.w3.org/2000/svg" width="123" height="987">'
            '<foreignObject x="0" y="0" width="12" height="99" '
            'style="-webkit-transform: scale(10); -webkit-transform-origin: 0 0; '
            'transform: scale(10); transform-origin: 0 0;'
        )

    def test_zoom_of_one_still_emits_transform(self, document):
        svg = get_svg_for_document(document, a_render_size(), 1)

        assert "transform: scale(1);" in svg
        assert "-webkit-transform: scale(1);" in svg

    def test_fractional_zoom(self, document):
        svg = get_svg_for_document(document, a_render_size(), 1.5)

        assert "transform: scale(1.5); transform-origin: 0 0;" in svg

    @pytest.mark.parametrize("zoom", [0, None])
    def test_ignores_zero_or_missing_zoom(self, document, zoom):
        document.set_body_html("content")

        svg = get_svg_for_document(document, a_render_size(123, 987), zoom)

        assert "scale" not in svg

    def test_float_geometry_is_unitless(self, document):
        size = SizeDescriptor(
            left=1.5, top=0.0, width=100.0, height=50.0, viewport_width=80.5, viewport_height=40.0
        )

        svg = get_svg_for_document(document, size, 0)

        assert 'width="100" height="50"' in svg
        assert '<foreignObject x="-1.5" y="0" width="80.5" height="40"' in svg

    def test_accepts_size_mapping(self, document):
        """Calculator results in camelCase mapping form are accepted."""
        size = {
            "left": 0,
            "top": 0,
            "width": 10,
            "height": 20,
            "viewportWidth": 30,
            "viewportHeight": 40,
        }

        svg = get_svg_for_document(document, size, 0)

        assert svg.startswith(
            '<svg xmlns="http://www.w3.org/2000/svg" width="10" height="20">'
            '<foreignObject x="0" y="0" width="30" height="40"'
        )

    def test_zero_size_and_empty_body(self, document):
        """A zero canvas and an empty body still give valid markup."""
        size = SizeDescriptor(width=0, height=0, viewport_width=0, viewport_height=0)

        svg = get_svg_for_document(document, size, 0)

        assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg" width="0" height="0">')
        assert "<body/>" in svg
        assert svg.endswith("</foreignObject></svg>")

    def test_title_content_is_kept(self):
        from htmlsvg.gear.document.tree import HtmlDocument

        document = HtmlDocument.create("meh")

        svg = get_svg_for_document(document, a_render_size(), 0)

        assert "<head><title>meh</title></head>" in svg

    def test_does_not_mutate_document(self, document):
        document.set_body_html("<p>content</p>")
        before = document.to_html()

        get_svg_for_document(document, a_render_size(), 3)

        assert document.to_html() == before

    def test_foreign_object_floats_against_collapsing_margins(self, document):
        svg = get_svg_for_document(document, a_render_size(), 0)

        assert 'style="float: left;"' in svg


class TestSynthesisErrors:
    """Validation failures propagate untouched."""

    def test_raises_validator_error(self, document):
        """The exact error object raised by the validator reaches the caller."""
        document.set_body_html("content")
        error = Exception()
        validator = Mock(side_effect=error)

        with pytest.raises(Exception) as exc_info:
            get_svg_for_document(document, a_render_size(), 1, validator=validator)

        assert exc_info.value is error
        validator.assert_called_once_with(document.serialize())

    def test_raises_error_of_patched_module_validator(self, document, monkeypatch):
        error = ValueError("broken")
        monkeypatch.setattr(render, "validate_xhtml", Mock(side_effect=error))

        with pytest.raises(ValueError) as exc_info:
            get_svg_for_document(document, a_render_size(), 1)

        assert exc_info.value is error

    def test_invalid_source(self):
        """Malformed serialization is rejected by the bundled validator."""
        broken = Mock()
        broken.serialize.return_value = '<html xmlns="http://www.w3.org/1999/xhtml"><body>'

        with pytest.raises(InvalidXhtmlError):
            get_svg_for_document(broken, a_render_size(), 1)

    def test_serialize_error_propagates(self):
        error = RuntimeError("cannot serialize")
        broken = Mock()
        broken.serialize.side_effect = error

        with pytest.raises(RuntimeError) as exc_info:
            get_svg_for_document(broken, a_render_size(), 1)

        assert exc_info.value is error
