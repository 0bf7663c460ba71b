"""Discriminated unions."""

import re

import pytest

from ascertain import STRICT, SchemaError, compile, discriminated

NOTIFICATION = discriminated(
    [
        {"type": "email", "address": re.compile(r"^[^@]+@[^@]+$")},
        {"type": "sms", "phone": re.compile(r"^\+\d+$")},
    ],
    "type",
)


def test_dispatches_on_discriminant():
    validator = compile(NOTIFICATION)
    assert validator({"type": "email", "address": "a@b.c"}) is True
    assert validator({"type": "sms", "phone": "+123"}) is True


def test_unknown_discriminant_lists_choices():
    validator = compile(NOTIFICATION)
    assert validator({"type": "push"}) is False
    issue = validator.issues[0]
    assert issue.path == ("type",)
    assert issue.message == "Invalid discriminant value 'push', expected one of {'email', 'sms'}"


def test_missing_discriminant():
    validator = compile(NOTIFICATION)
    assert validator({}) is False
    assert validator.issues[0].path == ("type",)
    assert validator.issues[0].message.startswith("Invalid discriminant value None")


def test_only_selected_variant_is_checked():
    validator = compile(NOTIFICATION, all_errors=True)
    assert validator({"type": "email", "address": "nope"}) is False
    assert [issue.path for issue in validator.issues] == [("address",)]


def test_non_object_data():
    validator = compile(NOTIFICATION)
    assert validator("email") is False
    assert validator.issues[0].message == "Invalid value 'email', expected object"
    assert validator.issues[0].path == ()


def test_strict_variant_counts_discriminant_as_declared():
    schema = discriminated([{STRICT: True, "kind": 1, "value": int}], "kind")
    validator = compile(schema)
    assert validator({"kind": 1, "value": 2}) is True
    assert validator({"kind": 1, "value": 2, "extra": 3}) is False
    assert validator.issues[0].path == ("extra",)


def test_numbers_and_booleans_are_distinct_discriminants():
    schema = discriminated(
        [{"kind": 1, "value": int}, {"kind": True, "value": str}],
        "kind",
    )
    validator = compile(schema)
    assert validator({"kind": 1, "value": 5}) is True
    assert validator({"kind": True, "value": "x"}) is True
    assert validator({"kind": True, "value": 5}) is False
    assert validator.issues[0].path == ("value",)
    assert validator({"kind": "1"}) is False
    assert validator.issues[0].path == ("kind",)


def test_float_discriminant():
    validator = compile(discriminated([{"v": 1.5}, {"v": 2}], "v"))
    assert validator({"v": 1.5}) is True
    assert validator({"v": 2.0}) is True
    assert validator({"v": 3}) is False


def test_nested_discriminated_path():
    validator = compile({"channels": [NOTIFICATION]})
    assert validator({"channels": [{"type": "sms", "phone": "x"}]}) is False
    assert validator.issues[0].path == ("channels", 0, "phone")


def test_empty_variants_rejected():
    with pytest.raises(SchemaError, match="at least one element"):
        discriminated([], "type")


@pytest.mark.parametrize(
    "variants",
    [
        [{"other": "a"}],
        [["type", "a"]],
        [{"type": None}],
        [{"type": [1]}],
        [{"type": float("nan")}],
        [{"type": str}],
    ],
)
def test_bad_variants_rejected_at_compile(variants):
    with pytest.raises(SchemaError):
        compile(discriminated(variants, "type"))
