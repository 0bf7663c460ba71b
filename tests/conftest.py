"""Shared fixtures for the ascertain test suite."""

from typing import Any, Callable

import pytest

from ascertain import AssertError, ascertain, clear_cache, compile


@pytest.fixture(autouse=True)
def fresh_cache():
    clear_cache()
    yield
    clear_cache()


def _first_error(schema: Any, data: Any) -> None:
    validator = compile(schema)
    if not validator(data):
        raise AssertError(validator.issues[0].message, validator.issues)


def _all_errors(schema: Any, data: Any) -> None:
    validator = compile(schema, all_errors=True)
    if not validator(data):
        raise AssertError(validator.issues[0].message, validator.issues)


@pytest.fixture(params=["first_error", "all_errors", "ascertain"])
def validate(request) -> Callable[[Any, Any], None]:
    """Validation entry point that raises AssertError, one per calling style."""
    return {
        "first_error": _first_error,
        "all_errors": _all_errors,
        "ascertain": ascertain,
    }[request.param]
