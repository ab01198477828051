"""
Render Errors

Failures raised by the bundled collaborators. Errors coming from injected
collaborators are propagated as-is and never rewrapped.
"""


class RenderError(Exception):
    """Base class for rendering failures."""


class SynthesisError(RenderError):
    """The document could not be serialized into embeddable XHTML."""


class InvalidXhtmlError(SynthesisError):
    """Serialized markup is not well-formed XML."""


class MeasurementError(RenderError):
    """The document content size could not be calculated."""


class InvalidOptionsError(RenderError, ValueError):
    """Unknown or malformed render option."""


class ConcurrentRenderError(RenderError):
    """A render is already running against the same document."""
