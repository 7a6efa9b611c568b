from __future__ import annotations

import pytest

from pysbahn.colors import Color
from pysbahn.exceptions import ColorConversionError, ColorParseError, WrongColorPrefixError


def test_hex_to_channel_fractions() -> None:
    color = Color.from_hex("#1A2B3C")

    assert color.r == 26 / 255.0
    assert color.g == 43 / 255.0
    assert color.b == 60 / 255.0
    assert color.a == 1.0


def test_lowercase_hex() -> None:
    assert Color.from_hex("#ff8000") == Color(1.0, 128 / 255.0, 0.0)


def test_missing_prefix() -> None:
    with pytest.raises(WrongColorPrefixError):
        Color.from_hex("1A2B3C")


def test_bad_hex_digit() -> None:
    with pytest.raises(ColorParseError):
        Color.from_hex("#GGHHII")


def test_prefix_and_parse_errors_are_distinct() -> None:
    assert not issubclass(WrongColorPrefixError, ColorParseError)
    assert not issubclass(ColorParseError, WrongColorPrefixError)
    assert issubclass(WrongColorPrefixError, ColorConversionError)
    assert issubclass(ColorParseError, ColorConversionError)


@pytest.mark.parametrize("value", ["#", "#1A2B3", "#1A2B3C4D", "#+1+2+3"])
def test_wrong_length_or_sign(value: str) -> None:
    with pytest.raises(ColorParseError):
        Color.from_hex(value)


def test_from_rgb_int() -> None:
    color = Color.from_rgb_int(0x9E9E9E)

    assert color == Color(158 / 255.0, 158 / 255.0, 158 / 255.0)
    assert color.to_rgba255() == (158, 158, 158, 255)
