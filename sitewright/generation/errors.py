# sitewright/generation/errors.py
"""
Exceptions raised by the materialization pipeline.

Build failures are deliberately absent: they are reported as
:class:`~sitewright.generation.models.BuildOutcome` values.
"""


class GenerationError(Exception):
    """Base class for pipeline errors."""
    pass


class ValidationError(GenerationError):
    """Input rejected before any filesystem mutation."""
    pass


class UnsupportedKindError(ValidationError):
    """The requested output kind is not one of the supported kinds."""

    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"Unsupported output kind: {kind!r}")
