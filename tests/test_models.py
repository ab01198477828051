"""
Tests for render option and size records.
"""

import pytest

from htmlsvg.gear.errors import InvalidOptionsError
from htmlsvg.gear.models import RenderOptions, SizeDescriptor


class TestSizeDescriptor:
    def test_offset_defaults_to_zero(self):
        size = SizeDescriptor(width=1, height=2, viewport_width=3, viewport_height=4)

        assert (size.left, size.top) == (0, 0)

    def test_from_camel_case_mapping(self):
        size = SizeDescriptor.from_mapping(
            {
                "left": 2,
                "top": 7,
                "width": 123,
                "height": 987,
                "viewportWidth": 200,
                "viewportHeight": 1000,
                "rootFontSize": "16px",
            }
        )

        assert size == SizeDescriptor(
            left=2, top=7, width=123, height=987, viewport_width=200, viewport_height=1000
        )

    def test_coerce_keeps_instances(self):
        size = SizeDescriptor(width=1, height=2, viewport_width=3, viewport_height=4)

        assert SizeDescriptor.coerce(size) is size


class TestRenderOptions:
    def test_none_means_no_options(self):
        options = RenderOptions.coerce(None)

        assert options == RenderOptions()
        assert options.size_request() == {}

    def test_size_request_has_supplied_keys_only(self):
        options = RenderOptions.coerce({"width": 42, "height": 4711, "hover": ".x"})

        assert options.size_request() == {"width": 42, "height": 4711}

    def test_zero_is_supplied(self):
        options = RenderOptions(width=0, zoom=0)

        assert options.size_request() == {"width": 0, "zoom": 0}

    def test_unknown_option(self):
        with pytest.raises(InvalidOptionsError, match="zooom"):
            RenderOptions.coerce({"zooom": 3})

    def test_unknown_option_is_value_error(self):
        with pytest.raises(ValueError):
            RenderOptions.coerce({"scale": 3})
