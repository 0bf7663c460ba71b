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

"""Names available to generated validator code.

Message builders are only called from diagnostic procedures, after the fast
procedure already rejected the data.
"""

from __future__ import annotations

import reprlib
from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional, Sequence

from ..models.issue import Issue


# Values that are never treated as objects by object schemas
_NOT_OBJECTS = (str, bytes, bytearray, int, float, complex, list, tuple, BaseException)

_repr = reprlib.Repr()
_repr.maxstring = 60
_repr.maxother = 60


class AttributeView(Mapping):
    """Read-only mapping over the attributes of a plain object.

    Lookups go through ``getattr`` (so methods and properties are visible);
    iteration only yields the instance's own ``__dict__`` keys.
    """

    __slots__ = ("_target",)

    def __init__(self, target: Any) -> None:
        self._target = target

    def __getitem__(self, key: Any) -> Any:
        if not isinstance(key, str):
            raise KeyError(key)
        try:
            return getattr(self._target, key)
        except AttributeError:
            raise KeyError(key) from None

    def __iter__(self) -> Iterator[str]:
        return iter(list(getattr(self._target, "__dict__", ())))

    def __len__(self) -> int:
        return len(getattr(self._target, "__dict__", ()))


def as_mapping(value: Any) -> Optional[Mapping]:
    """Return a mapping view of ``value``, or None if it is not object-like."""
    if isinstance(value, Mapping):
        return value
    if value is None or isinstance(value, _NOT_OBJECTS):
        return None
    return AttributeView(value)


def describe(value: Any) -> str:
    return _repr.repr(value)


def type_name(value: Any) -> str:
    return type(value).__name__


def _surface(value: Any) -> Optional[str]:
    # a CastError (or any exception) stored in the data explains itself
    if isinstance(value, BaseException):
        return error_message(value)
    return None


def error_message(value: BaseException) -> str:
    return str(value) or type_name(value)


def is_nan(value: Any) -> bool:
    try:
        return value != value
    except ArithmeticError:
        # signaling NaNs refuse to be compared at all
        return True


def nullable_message(value: Any) -> str:
    return _surface(value) or f"Invalid value {describe(value)}, expected nullable"


def non_nullable_message(expected: str) -> str:
    return f"Invalid value None, expected a non-nullable {expected}"


def type_message(value: Any, expected: str) -> str:
    return _surface(value) or f"Invalid type {type_name(value)}, expected {expected}"


def instance_message(value: Any, expected: type) -> str:
    return f"Invalid instance of {type_name(value)}, expected instance of {expected.__name__}"


def nan_message(value: Any, expected: str) -> str:
    return f"Invalid value {describe(value)}, expected a valid {expected}"


def value_message(value: Any, expected: Any) -> str:
    return _surface(value) or f"Invalid value {describe(value)}, expected {describe(expected)}"


def array_message(value: Any) -> str:
    return _surface(value) or f"Invalid value {describe(value)}, expected array"


def array_length_message(value: Sequence[Any], limit: int) -> str:
    return f"Invalid array length {len(value)}, expected at most {limit}"


def tuple_length_message(value: Sequence[Any], size: int) -> str:
    return f"Invalid tuple length {len(value)}, expected exactly {size}"


def object_message(value: Any) -> str:
    return _surface(value) or f"Invalid value {describe(value)}, expected object"


def extra_property_message(key: Any) -> str:
    return f"Extra properties not allowed: {key!r}"


def pattern_message(value: Any, pattern: Any) -> str:
    return f"Invalid value {describe(value)}, expected matching {pattern.pattern!r}"


def discriminant_message(value: Any, choices: Sequence[Any]) -> str:
    expected = ", ".join(repr(choice) for choice in choices)
    return f"Invalid discriminant value {describe(value)}, expected one of {{{expected}}}"


def runtime_globals() -> Dict[str, Any]:
    """Fresh globals for one generated module."""
    return {
        "__name__": "ascertain.generated",
        "Issue": Issue,
        "as_mapping": as_mapping,
        "is_nan": is_nan,
        "error_message": error_message,
        "nullable_message": nullable_message,
        "non_nullable_message": non_nullable_message,
        "type_message": type_message,
        "instance_message": instance_message,
        "nan_message": nan_message,
        "value_message": value_message,
        "array_message": array_message,
        "array_length_message": array_length_message,
        "tuple_length_message": tuple_length_message,
        "object_message": object_message,
        "extra_property_message": extra_property_message,
        "pattern_message": pattern_message,
        "discriminant_message": discriminant_message,
    }
