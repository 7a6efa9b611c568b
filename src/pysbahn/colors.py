"""Line colors as used by the replay surface."""

from __future__ import annotations

import string
from dataclasses import dataclass

from pysbahn.exceptions import ColorParseError, WrongColorPrefixError

_HEX_DIGITS = frozenset(string.hexdigits)


@dataclass(frozen=True)
class Color:
    """RGBA color with channels as fractions in ``[0, 1]``."""

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse ``#RRGGBB``.

        Raises :class:`WrongColorPrefixError` when the ``#`` is missing and
        :class:`ColorParseError` for a wrong length or non-hex digit.
        """
        if not value.startswith("#"):
            raise WrongColorPrefixError(f"does not start with '#': {value!r}")
        digits = value[1:]
        if len(digits) != 6:
            raise ColorParseError(f"expected 6 hex digits, got {len(digits)}: {value!r}")
        if not _HEX_DIGITS.issuperset(digits):
            raise ColorParseError(f"invalid hex digit in {value!r}")
        r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
        return cls(r / 255.0, g / 255.0, b / 255.0, 1.0)

    @classmethod
    def from_rgb_int(cls, value: int) -> Color:
        """Build an opaque color from ``0xRRGGBB``."""
        return cls(
            ((value >> 16) & 0xFF) / 255.0,
            ((value >> 8) & 0xFF) / 255.0,
            (value & 0xFF) / 255.0,
        )

    def to_rgba255(self) -> tuple[int, int, int, int]:
        return (round(self.r * 255), round(self.g * 255), round(self.b * 255), round(self.a * 255))
