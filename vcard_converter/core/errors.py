"""Exceptions raised while reading or converting vCards.

WHY: Callers (CLI, tests, embedding applications) need typed exceptions
to tell a rejected revision apart from malformed data. Every one of them
aborts the whole conversion; there is no partial output.

HOW: A small hierarchy rooted at ConversionError, itself a ValueError so
generic input-validation handlers keep working.

RULES:
- Each exception carries the offending value as an attribute
- Messages name the violated precondition
"""

from __future__ import annotations


class ConversionError(ValueError):
    """Base class for all vCard conversion failures."""


class UnsupportedSourceRevisionError(ConversionError):
    """Raised when the input document's revision is not 2.1, 3.0 or 4.0."""

    def __init__(self, revision: object) -> None:
        self.revision = revision
        super().__init__(
            "Only vCard 2.1, 3.0 and 4.0 are supported for the input data "
            "(got {!r})".format(str(revision))
        )


class UnsupportedTargetRevisionError(ConversionError):
    """Raised when the requested target is not vCard 3.0 or 4.0."""

    def __init__(self, revision: object) -> None:
        self.revision = revision
        super().__init__(
            "You can only use vCard 3.0 or 4.0 for the target version "
            "(got {!r})".format(str(revision))
        )


class InvalidDateValueError(ConversionError):
    """Raised when a date-and-or-time value cannot be parsed."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__("Invalid vCard date-time string: {!r}".format(value))


class InvalidDataUriError(ConversionError):
    """Raised when a ``data:`` URI has no payload separator or bad base64."""

    def __init__(self, value: str, reason: str) -> None:
        self.value = value
        self.reason = reason
        preview = value if len(value) <= 40 else value[:40] + "..."
        super().__init__("Invalid data: URI {!r}: {}".format(preview, reason))


class InvalidJCardError(ConversionError):
    """Raised when jCard input is not valid JSON or fails schema validation."""
