# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Public entry points."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Optional, Sequence, Tuple, Type, TypeVar

from .compiler import Context, Mode, compile_procedure
from .exceptions import AssertError, IssuesError
from .models.issue import Issue, format_issues
from .validator import Validator

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Compiled validators used by ascertain(), keyed by schema identity
_VALIDATOR_CACHE: Dict[int, Tuple[Any, Validator]] = {}
_CACHE_LIMIT = 256


def compile(schema: Any, *, all_errors: bool = False) -> Validator:
    """Compile ``schema`` into a reusable validator.

    Args:
        schema: Schema tree (literals, classes, patterns, dicts, lists, combinators)
        all_errors: Report every issue instead of stopping at the first one

    Returns:
        A :class:`Validator`

    Raises:
        SchemaError: If the schema is malformed
    """
    context = Context()
    fast, fast_source = compile_procedure(schema, context, Mode.FAST)
    mode = Mode.ALL_ERRORS if all_errors else Mode.FIRST_ERROR
    diagnostic, diagnostic_source = compile_procedure(schema, context, mode)
    return Validator(
        schema,
        fast,
        diagnostic,
        {Mode.FAST.value: fast_source, mode.value: diagnostic_source},
        all_errors=all_errors,
    )


def _cached_validator(schema: Any) -> Validator:
    entry = _VALIDATOR_CACHE.get(id(schema))
    if entry is not None and entry[0] is schema:
        return entry[1]

    validator = compile(schema)
    if len(_VALIDATOR_CACHE) >= _CACHE_LIMIT:
        del _VALIDATOR_CACHE[next(iter(_VALIDATOR_CACHE))]
    # the entry keeps ``schema`` alive, so its id cannot be reused
    _VALIDATOR_CACHE[id(schema)] = (schema, validator)
    return validator


def clear_cache() -> None:
    """Clear the compiled validator cache. Useful for testing."""
    _VALIDATOR_CACHE.clear()


def _raise_issues(issues: Sequence[Issue], error: Type[AssertError] = AssertError) -> None:
    logger.debug("Validation failed:\n%s", format_issues(issues))
    raise error(issues[0].message, issues) from IssuesError(issues)


def ascertain(
    schema: Any,
    data: Any,
    root_name: Optional[Hashable] = None,
    *,
    error: Type[AssertError] = AssertError,
) -> None:
    """Validate ``data`` against ``schema``.

    Args:
        schema: Schema tree
        data: Value to validate
        root_name: Optional first path segment of every issue, e.g. ``"config"``
        error: AssertError subclass to raise

    Raises:
        AssertError: With the first issue's message; ``issues`` holds all issues
    """
    root = () if root_name is None else (root_name,)
    issues = _cached_validator(schema).check(data, root)
    if issues:
        _raise_issues(issues, error)


def create_validator(config: T) -> Callable[[Any], T]:
    """Bind ``config`` and return a function validating a subset of it.

    Each consumer declares only the keys it reads::

        validate = create_validator(config)
        http = validate({"http": {"port": int}})

    The returned value is ``config`` itself.
    """

    def validate(schema: Any) -> T:
        ascertain(schema, config)
        return config

    return validate


@dataclass(frozen=True)
class StandardResult:
    """``value`` on success, ``issues`` on failure."""

    value: Any = None
    issues: Optional[Tuple[Issue, ...]] = None

    @property
    def ok(self) -> bool:
        return self.issues is None


class StandardSchema:
    """Result-object interface over a compiled validator.

    ``validate`` never raises and returns a :class:`StandardResult`; calling
    the object raises :class:`AssertError` like :func:`ascertain`.
    """

    vendor = "ascertain"
    version = 1

    def __init__(self, schema: Any, *, all_errors: bool = False):
        self.schema = schema
        self.validator = compile(schema, all_errors=all_errors)

    def validate(self, value: Any) -> StandardResult:
        issues = self.validator.check(value)
        if issues:
            return StandardResult(issues=tuple(issues))
        return StandardResult(value=value)

    def __call__(self, value: Any) -> Any:
        result = self.validate(value)
        if not result.ok:
            _raise_issues(result.issues)
        return result.value


def standard_schema(schema: Any, *, all_errors: bool = False) -> StandardSchema:
    return StandardSchema(schema, all_errors=all_errors)
