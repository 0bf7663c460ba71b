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

"""Schema combinators and object markers.

A schema is any nested combination of plain Python values (literals, classes,
compiled patterns, dicts, lists) and the combinator objects defined here.
Combinators only hold their children; the compiler gives them meaning.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Hashable, Sequence, Tuple

from ..exceptions import SchemaError


class Operator(str, Enum):
    OR = "or"
    AND = "and"
    OPTIONAL = "optional"
    TUPLE = "tuple"
    DISCRIMINATED = "discriminated"


class Marker:
    """Special dict key understood by object schemas."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"${self.name}"


# Schema for every own key (as a string) of the target object
KEYS = Marker("keys")
# Schema for every own value of the target object
VALUES = Marker("values")
# Reject own keys that are not declared
STRICT = Marker("strict")


@dataclass(frozen=True, eq=False)
class Operation:
    """Base of all combinators. ``schemas`` is never empty."""

    kind: ClassVar[Operator]
    schemas: Tuple[Any, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.schemas, tuple):
            object.__setattr__(self, "schemas", tuple(self.schemas))
        if len(self.schemas) == 0:
            raise SchemaError(f"Operation schema {type(self).__name__} must have at least one element")


@dataclass(frozen=True, eq=False)
class OrSchema(Operation):
    kind: ClassVar[Operator] = Operator.OR


@dataclass(frozen=True, eq=False)
class AndSchema(Operation):
    kind: ClassVar[Operator] = Operator.AND


@dataclass(frozen=True, eq=False)
class OptionalSchema(Operation):
    kind: ClassVar[Operator] = Operator.OPTIONAL

    @property
    def schema(self) -> Any:
        return self.schemas[0]


@dataclass(frozen=True, eq=False)
class TupleSchema(Operation):
    kind: ClassVar[Operator] = Operator.TUPLE


@dataclass(frozen=True, eq=False)
class DiscriminatedSchema(Operation):
    kind: ClassVar[Operator] = Operator.DISCRIMINATED
    key: Hashable = None


def or_(*schemas: Any) -> OrSchema:
    """Accept a value matching at least one of ``schemas``."""
    return OrSchema(schemas)


def and_(*schemas: Any) -> AndSchema:
    """Accept a value matching every one of ``schemas``."""
    return AndSchema(schemas)


def optional(schema: Any) -> OptionalSchema:
    """Accept ``None`` or a value matching ``schema``."""
    return OptionalSchema((schema,))


def tuple_(*schemas: Any) -> TupleSchema:
    """Accept an array of exactly ``len(schemas)`` elements, one schema per position."""
    return TupleSchema(schemas)


def discriminated(schemas: Sequence[Any], key: Hashable) -> DiscriminatedSchema:
    """Accept an object matching the variant selected by its ``key`` literal.

    Every variant must be a dict schema declaring ``key`` with a str, int,
    float or bool literal. That is checked when the schema is compiled.
    """
    return DiscriminatedSchema(tuple(schemas), key)
