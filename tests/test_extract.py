from __future__ import annotations

import pytest

from pysbahn.exceptions import IncorrectValueTypeError, MissingPropertyError
from pysbahn.ingestion.extract import INTEGER, OBJECT, STRING, flag, json_kind


@pytest.mark.parametrize(
    ("value", "kind"),
    [
        (None, "null"),
        (True, "boolean"),
        (3, "integer"),
        (3.5, "number"),
        ("x", "string"),
        ([1], "array"),
        ({"a": 1}, "object"),
    ],
)
def test_json_kind(value: object, kind: str) -> None:
    assert json_kind(value) == kind


def test_required_present() -> None:
    assert STRING.required({"tenant": "sbm"}, "tenant") == "sbm"


def test_required_missing() -> None:
    with pytest.raises(MissingPropertyError) as info:
        STRING.required({}, "tenant")

    assert info.value.name == "tenant"
    assert str(info.value) == "missing property: 'tenant'"


def test_required_null() -> None:
    with pytest.raises(IncorrectValueTypeError) as info:
        STRING.required({"tenant": None}, "tenant")

    assert info.value.value == "null"
    assert info.value.actual == "null"


def test_optional_missing_and_null() -> None:
    assert STRING.optional({}, "delay") is None
    assert STRING.optional({"delay": None}, "delay") is None


def test_optional_wrong_kind() -> None:
    with pytest.raises(IncorrectValueTypeError) as info:
        STRING.optional({"delay": [1, 2]}, "delay")

    assert str(info.value) == "expected value [1, 2] to be of type 'string', but found it to be of type 'array'"


@pytest.mark.parametrize("value", [True, 1.0, "1"])
def test_integer_rejects_non_integers(value: object) -> None:
    with pytest.raises(IncorrectValueTypeError):
        INTEGER.convert(value)


def test_object() -> None:
    assert OBJECT.required({"line": {"name": "S1"}}, "line") == {"name": "S1"}


def test_flag() -> None:
    properties = {"yes": True, "no": False, "text": "true", "null": None}

    assert flag(properties, "yes") is True
    assert flag(properties, "no") is False
    assert flag(properties, "text") is False
    assert flag(properties, "null") is False
    assert flag(properties, "missing") is False
