"""First-error versus all-errors reporting, paths and validator state."""

import re

import pytest

from ascertain import KEYS, STRICT, VALUES, and_, compile, or_


def test_valid_data_has_no_issues():
    validator = compile({"a": float, "b": [str]})
    assert validator({"a": 1.5, "b": ["x"]}) is True
    assert validator.issues == []


def test_single_issue_path_and_message():
    validator = compile({"a": float})
    assert validator({"a": "x"}) is False
    assert len(validator.issues) == 1
    issue = validator.issues[0]
    assert issue.path == ("a",)
    assert "float" in issue.message


def test_all_errors_in_declaration_order():
    validator = compile({"a": float, "b": str, "c": bool}, all_errors=True)
    assert validator({"a": "x", "b": 1, "c": "y"}) is False
    assert [issue.path for issue in validator.issues] == [("a",), ("b",), ("c",)]
    assert [issue.message for issue in validator.issues] == [
        "Invalid type str, expected float",
        "Invalid type int, expected str",
        "Invalid type str, expected bool",
    ]


def test_first_error_stops_early():
    validator = compile({"a": float, "b": str, "c": bool})
    assert validator({"a": "x", "b": 1, "c": "y"}) is False
    assert [issue.path for issue in validator.issues] == [("a",)]


def test_issues_are_replaced_on_every_call():
    validator = compile({"a": int}, all_errors=True)
    assert validator({"a": "x"}) is False
    assert len(validator.issues) == 1
    assert validator({"a": 1}) is True
    assert validator.issues == []


def test_check_leaves_issues_untouched():
    validator = compile(int)
    assert validator("x") is False
    before = validator.issues
    issues = validator.check(1.5)
    assert len(issues) == 1
    assert validator.issues is before
    assert validator.check(1) == []


def test_valid_data_skips_diagnostic_procedure():
    validator = compile({"a": [int]})

    def fail(*args):
        raise AssertionError("diagnostic procedure must not run for valid data")

    validator._diagnostic = fail
    assert validator({"a": [1, 2]}) is True


@pytest.mark.parametrize("all_errors", [False, True])
def test_compiling_twice_is_equivalent(all_errors):
    schema = {"a": or_(int, str), "b": [{"c": bool}]}
    samples = [
        {"a": 1, "b": []},
        {"a": "x", "b": [{"c": True}]},
        {"a": None, "b": [{"c": 1}]},
        {"b": "x"},
        [],
    ]
    first = compile(schema, all_errors=all_errors)
    second = compile(schema, all_errors=all_errors)
    for sample in samples:
        assert first(sample) == second(sample)
        assert first.issues == second.issues


def test_nested_dynamic_paths():
    validator = compile({"items": [{"id": int}]})
    assert validator({"items": [{"id": 1}, {"id": "x"}]}) is False
    issue = validator.issues[0]
    assert issue.path == ("items", 1, "id")
    assert issue.pointer == "/items/1/id"


def test_array_elements_all_reported():
    validator = compile([int], all_errors=True)
    assert validator([1, "a", 2, "b"]) is False
    assert [issue.path for issue in validator.issues] == [(1,), (3,)]


def test_failed_node_skips_children_in_all_errors():
    validator = compile({"a": {"b": int, "c": int}}, all_errors=True)
    assert validator({"a": 5}) is False
    assert len(validator.issues) == 1
    assert validator.issues[0].message == "Invalid value 5, expected object"


def test_or_first_error_reports_first_branch():
    validator = compile(or_({"a": int}, {"b": str}))
    assert validator({}) is False
    assert [issue.path for issue in validator.issues] == [("a",)]


def test_or_all_errors_aggregates_branches():
    validator = compile(or_({"a": int}, {"b": str}), all_errors=True)
    assert validator({}) is False
    assert [issue.path for issue in validator.issues] == [("a",), ("b",)]


def test_or_accepts_any_branch():
    validator = compile(or_({"a": int}, {"b": str}), all_errors=True)
    assert validator({"b": "x"}) is True
    assert validator.issues == []


def test_and_first_versus_all():
    schema = and_({"a": int}, {"b": int})
    first = compile(schema)
    every = compile(schema, all_errors=True)
    assert first({}) is False
    assert every({}) is False
    assert len(first.issues) == 1
    assert [issue.path for issue in every.issues] == [("a",), ("b",)]


def test_keys_issue_at_offending_key():
    validator = compile({KEYS: re.compile(r"^key")}, all_errors=True)
    assert validator({"keyA": 1, "other": 2}) is False
    assert [issue.path for issue in validator.issues] == [("other",)]


def test_values_issue_at_offending_key():
    validator = compile({VALUES: int})
    assert validator({"a": 1, "b": "x"}) is False
    assert validator.issues[0].path == ("b",)


def test_strict_rejects_undeclared_keys():
    validator = compile({STRICT: True, "a": float})
    assert validator({"a": 1}) is True
    assert validator({"a": 1, "b": 2}) is False
    assert validator.issues[0].path == ("b",)
    assert validator.issues[0].message == "Extra properties not allowed: 'b'"


def test_object_checks_compose():
    schema = {STRICT: True, KEYS: re.compile(r"^[a-z]+$"), VALUES: int, "a": int}
    validator = compile(schema, all_errors=True)
    assert validator({"a": 1, "b": 2}) is False
    assert validator.issues[0].path == ("b",)

    assert validator({"a": 1, "B": "x"}) is False
    assert [issue.path for issue in validator.issues] == [("B",), ("B",), ("B",)]
    assert validator.issues[0].message == "Extra properties not allowed: 'B'"
    assert "matching" in validator.issues[1].message
    assert validator.issues[2].message == "Invalid type str, expected int"


def _nested(depth, leaf):
    value = leaf
    for _ in range(depth):
        value = [value]
    return value


@pytest.mark.parametrize("all_errors", [False, True])
def test_deeply_nested_schema(all_errors):
    validator = compile(_nested(40, int), all_errors=all_errors)
    assert validator(_nested(40, 1)) is True
    assert validator(_nested(40, "x")) is False
    assert validator.issues[0].path == (0,) * 40
    assert validator.issues[0].message == "Invalid type str, expected int"


def test_deeply_nested_objects():
    schema = int
    data = "x"
    for index in range(30):
        schema = {f"k{index}": schema}
        data = {f"k{index}": data}
    validator = compile(schema)
    assert validator(data) is False
    assert validator.issues[0].path == tuple(f"k{index}" for index in reversed(range(30)))
