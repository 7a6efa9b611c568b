"""Custom exception hierarchy for pysbahn."""

from __future__ import annotations


class SbahnError(Exception):
    """Base exception for all pysbahn errors."""


class SbahnConfigError(SbahnError):
    """Invalid or missing configuration."""


class FeedConnectionError(SbahnError):
    """Websocket-level failure (connect, read or send)."""

    def __init__(self, message: str, *, url: str = "") -> None:
        self.url = url
        super().__init__(message)


class RawLogError(SbahnError):
    """The raw frame log could not be opened."""


class FrameParseError(SbahnError):
    """A raw line is not valid JSON or has no recognizable envelope shape."""

    def __init__(self, message: str, *, line: str = "") -> None:
        self.line = line
        super().__init__(message)


class DecodeError(SbahnError):
    """Base for failures while extracting domain records from an envelope."""


class MissingPropertyError(DecodeError):
    """A required property is absent."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"missing property: '{name}'")


class IncorrectTypeError(DecodeError):
    """A payload, feature or container has the wrong shape."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected value to be of type '{expected}', but found it to be of type '{actual}'")


class IncorrectValueTypeError(DecodeError):
    """A property is present but holds the wrong JSON kind."""

    def __init__(self, expected: str, value: str, actual: str) -> None:
        self.expected = expected
        self.value = value
        self.actual = actual
        super().__init__(f"expected value {value} to be of type '{expected}', but found it to be of type '{actual}'")


class MissingItemsError(DecodeError):
    """An array has the wrong number of items."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected {expected} items, but found {actual} instead")


class ColorConversionError(SbahnError):
    """A hex color string could not be converted."""


class WrongColorPrefixError(ColorConversionError):
    """The color string does not start with ``#``."""


class ColorParseError(ColorConversionError):
    """The color string has the wrong length or a non-hex digit."""
