"""Data records passed between the render stages."""

from dataclasses import dataclass, fields
from typing import Any, Mapping

from .errors import InvalidOptionsError

SIZE_REQUEST_KEYS = ("width", "height", "clip", "zoom")

_SIZE_ALIASES = {
    "viewportWidth": "viewport_width",
    "viewportHeight": "viewport_height",
}


@dataclass(frozen=True)
class SizeDescriptor:
    """Geometry for one synthesis call.

    ``width``/``height`` size the outer SVG canvas, ``viewport_*`` size the
    visible frame the content is laid out in. ``left``/``top`` is the offset
    of the frame inside the content.
    """

    width: float
    height: float
    viewport_width: float
    viewport_height: float
    left: float = 0
    top: float = 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SizeDescriptor":
        """Build from a calculator result using camelCase or snake_case keys."""
        values = {_SIZE_ALIASES.get(key, key): value for key, value in data.items()}
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})

    @classmethod
    def coerce(cls, size: "SizeDescriptor | Mapping[str, Any]") -> "SizeDescriptor":
        if isinstance(size, SizeDescriptor):
            return size
        return cls.from_mapping(size)


@dataclass
class RenderOptions:
    """Options for one render call. ``None`` means the option has no effect."""

    width: float | None = None
    height: float | None = None
    zoom: float | None = None
    hover: str | None = None
    active: str | None = None
    clip: str | None = None

    @classmethod
    def coerce(cls, options: "RenderOptions | Mapping[str, Any] | None") -> "RenderOptions":
        if options is None:
            return cls()
        if isinstance(options, RenderOptions):
            return options

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise InvalidOptionsError(f"Unknown render options: {', '.join(unknown)}")
        return cls(**dict(options))

    def size_request(self) -> dict[str, Any]:
        """Options forwarded to the content-size calculator, supplied keys only."""
        return {
            key: getattr(self, key) for key in SIZE_REQUEST_KEYS if getattr(self, key) is not None
        }


@dataclass(frozen=True)
class RenderResult:
    """SVG markup together with the size it was synthesized for."""

    svg: str
    size: SizeDescriptor
