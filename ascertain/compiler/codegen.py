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

"""Schema to Python source compiler.

A schema tree is turned into one generated module per mode. Each schema node
emits an ``if/elif`` chain of guards (one per failure condition) followed by
the checks of its children, so a rejected node never looks at its children.

Modes:
  * ``FAST``: ``validate(v) -> bool``, returns False at the first failure and
    never builds a message.
  * ``FIRST_ERROR``: ``validate(v, path, issues) -> bool``, appends exactly one
    Issue and returns.
  * ``ALL_ERRORS``: same signature, keeps going and appends every Issue.

Paths are tuples. Static segments (declared keys, tuple positions) are
written into the source as literals, dynamic ones (array indices, iterated
keys) are loop variables.
"""

from __future__ import annotations

import logging
import math
import numbers
import re
import typing
from collections.abc import Callable as CallableABC
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from ..exceptions import SchemaError
from ..models.schema import (
    KEYS,
    STRICT,
    VALUES,
    DiscriminatedSchema,
    Marker,
    Operation,
    Operator,
)
from .context import Context
from .runtime import runtime_globals
from .template_renderer import get_renderer

logger = logging.getLogger(__name__)


# Nodes nested deeper than this are moved into their own function
MAX_INLINE_LEVEL = 16

_NO_SKIP = object()

_NUMBER_MISMATCH = "not isinstance({v}, (int, float)) or isinstance({v}, bool)"


class Mode(str, Enum):
    FAST = "fast"
    FIRST_ERROR = "first_error"
    ALL_ERRORS = "all_errors"


# (failure condition, message expression)
Guard = Tuple[str, str]


@dataclass(frozen=True)
class _Path:
    """Source-level path: the ``path`` parameter plus extra segment expressions."""

    segments: Tuple[str, ...] = ()

    def child(self, segment_source: str) -> "_Path":
        return _Path(self.segments + (segment_source,))

    def render(self) -> str:
        if not self.segments:
            return "path"
        return f"(*path, {', '.join(self.segments)})"


class _Writer:
    def __init__(self) -> None:
        self.lines: List[str] = []
        self.level = 1

    def line(self, text: str) -> None:
        self.lines.append("    " * self.level + text)

    @contextmanager
    def block(self, header: str) -> Iterator[None]:
        self.line(header)
        self.level += 1
        start = len(self.lines)
        try:
            yield
        finally:
            if len(self.lines) == start:
                self.line("pass")
            self.level -= 1


def _is_inline_literal(value: Any) -> bool:
    if type(value) is float:
        return math.isfinite(value)
    return type(value) in (str, int, bool, bytes) or value is None


def _is_compound(schema: Any) -> bool:
    return isinstance(schema, (dict, list, Operation))


def _is_discriminant_literal(value: Any) -> bool:
    if isinstance(value, float):
        return math.isfinite(value)
    return isinstance(value, (str, int, bool))


class CodeGenerator:
    """Emits the functions of one generated module for a given mode."""

    def __init__(self, context: Context, mode: Mode) -> None:
        self.context = context
        self.mode = mode
        self.functions: List[str] = []
        self._hoisted: Dict[int, Tuple[Any, str]] = {}

    def generate(self, schema: Any, name: str = "validate") -> str:
        self._function(name, schema)
        return name

    # ---- functions -----------------------------------------------------------

    def _function(self, name: str, schema: Any) -> None:
        w = _Writer()
        if self.mode is Mode.ALL_ERRORS:
            w.line("count = len(issues)")
        self._emit(schema, "v", _Path(), w)
        if self.mode is Mode.ALL_ERRORS:
            w.line("return len(issues) == count")
        else:
            w.line("return True")

        params = "v" if self.mode is Mode.FAST else "v, path, issues"
        self.functions.append(f"def {name}({params}):\n" + "\n".join(w.lines))

    def _hoist(self, schema: Any) -> str:
        """Compile ``schema`` into a standalone function, once per schema object."""
        entry = self._hoisted.get(id(schema))
        if entry is not None:
            return entry[1]
        name = self.context.unique("f" if self.mode is Mode.FAST else "g")
        self._hoisted[id(schema)] = (schema, name)
        self._function(name, schema)
        return name

    def _call(self, name: str, v: str, path: _Path, w: _Writer) -> None:
        if self.mode is Mode.FAST:
            with w.block(f"if not {name}({v}):"):
                w.line("return False")
        elif self.mode is Mode.FIRST_ERROR:
            with w.block(f"if not {name}({v}, {path.render()}, issues):"):
                w.line("return False")
        else:
            w.line(f"{name}({v}, {path.render()}, issues)")

    # ---- failure plumbing ----------------------------------------------------

    def _fail(self, w: _Writer, message: str, path: _Path) -> None:
        if self.mode is Mode.FAST:
            w.line("return False")
            return
        w.line(f"issues.append(Issue({message}, {path.render()}))")
        if self.mode is Mode.FIRST_ERROR:
            w.line("return False")

    def _guarded(
        self,
        w: _Writer,
        guards: Sequence[Guard],
        path: _Path,
        body: Optional[Callable[[], None]] = None,
    ) -> None:
        for index, (condition, message) in enumerate(guards):
            keyword = "if" if index == 0 else "elif"
            with w.block(f"{keyword} {condition}:"):
                self._fail(w, message, path)

        if body is None:
            return
        if guards and self.mode is Mode.ALL_ERRORS:
            # failures do not return here, children must be skipped explicitly
            with w.block("else:"):
                body()
        else:
            body()

    def _source(self, value: Any) -> str:
        """Source expression for a constant: inline literal or registry reference."""
        if _is_inline_literal(value):
            return repr(value)
        return self.context.ref(value)

    # ---- dispatch ------------------------------------------------------------

    def _emit(self, schema: Any, v: str, path: _Path, w: _Writer) -> None:
        if schema is typing.Callable:
            schema = CallableABC
        if w.level > MAX_INLINE_LEVEL and _is_compound(schema):
            self._call(self._hoist(schema), v, path, w)
        elif isinstance(schema, Operation):
            self._emit_operation(schema, v, path, w)
        elif schema is None:
            self._guarded(w, [(f"{v} is not None", f"nullable_message({v})")], path)
        elif isinstance(schema, type):
            self._emit_type(schema, v, path, w)
        elif isinstance(schema, list):
            self._emit_array(schema, v, path, w)
        elif isinstance(schema, dict):
            self._emit_object(schema, v, path, w)
        elif isinstance(schema, re.Pattern):
            self._emit_pattern(schema, v, path, w)
        else:
            self._emit_literal(schema, v, path, w)

    def _emit_operation(self, schema: Operation, v: str, path: _Path, w: _Writer) -> None:
        kind = schema.kind
        if kind is Operator.OR:
            self._emit_or(schema.schemas, v, path, w)
        elif kind is Operator.AND:
            for child in schema.schemas:
                self._emit(child, v, path, w)
        elif kind is Operator.OPTIONAL:
            with w.block(f"if {v} is not None:"):
                self._emit(schema.schemas[0], v, path, w)
        elif kind is Operator.TUPLE:
            self._emit_tuple(schema.schemas, v, path, w)
        elif kind is Operator.DISCRIMINATED:
            self._emit_discriminated(schema, v, path, w)
        else:
            raise SchemaError(f"Unknown operation schema: {type(schema).__name__}")

    # ---- leaves --------------------------------------------------------------

    def _emit_type(self, schema: type, v: str, path: _Path, w: _Writer) -> None:
        expected = repr(schema.__name__)
        guards: List[Guard] = [(f"{v} is None", f"non_nullable_message({expected})")]
        if not issubclass(schema, BaseException):
            guards.append((f"isinstance({v}, BaseException)", f"error_message({v})"))

        type_failure = f"type_message({v}, {expected})"
        if schema is str or schema is bytes or schema is bool:
            guards.append((f"not isinstance({v}, {schema.__name__})", type_failure))
        elif schema is int:
            guards.append((f"not isinstance({v}, int) or isinstance({v}, bool)", type_failure))
        elif schema is float:
            guards.append((_NUMBER_MISMATCH.format(v=v), type_failure))
            guards.append((f"{v} != {v}", f"nan_message({v}, {expected})"))
        elif schema is CallableABC:
            guards.append((f"not callable({v})", type_failure))
        else:
            ref = self.context.ref(schema)
            guards.append((f"not isinstance({v}, {ref})", f"instance_message({v}, {ref})"))
            if issubclass(schema, numbers.Number):
                guards.append((f"is_nan({v})", f"nan_message({v}, {expected})"))

        self._guarded(w, guards, path)

    def _emit_pattern(self, schema: re.Pattern, v: str, path: _Path, w: _Writer) -> None:
        if isinstance(schema.pattern, bytes):
            raise SchemaError(f"Pattern schemas must be str patterns, got {schema.pattern!r}")
        ref = self.context.ref(schema)
        text = f"{v} if {v}.__class__ is str else str({v})"
        self._guarded(
            w,
            [
                (f"{v} is None", f"pattern_message({v}, {ref})"),
                (f"isinstance({v}, BaseException)", f"error_message({v})"),
                (f"{ref}.search({text}) is None", f"pattern_message({v}, {ref})"),
            ],
            path,
        )

    def _emit_literal(self, schema: Any, v: str, path: _Path, w: _Writer) -> None:
        source = self._source(schema)
        mismatch = f"value_message({v}, {source})"
        if isinstance(schema, bool):
            guards: List[Guard] = [
                (f"not isinstance({v}, bool)", f"type_message({v}, 'bool')"),
                (f"{v} is not {source}", mismatch),
            ]
        elif isinstance(schema, (str, bytes)):
            tag = "str" if isinstance(schema, str) else "bytes"
            guards = [
                (f"not isinstance({v}, {tag})", f"type_message({v}, {tag!r})"),
                (f"{v} != {source}", mismatch),
            ]
        elif isinstance(schema, (int, float)):
            guards = [
                (_NUMBER_MISMATCH.format(v=v), f"type_message({v}, 'number')"),
                (f"{v} != {source}", mismatch),
            ]
        else:
            # sentinels, enum members and other opaque values
            guards = [
                (f"{v} is not {source} and not ({v}.__class__ is {source}.__class__ and {v} == {source})", mismatch),
            ]
        self._guarded(w, guards, path)

    def _literal_match(self, v: str, literal: Any) -> str:
        source = self._source(literal)
        if isinstance(literal, bool):
            return f"{v} is {source}"
        if isinstance(literal, str):
            return f"isinstance({v}, str) and {v} == {source}"
        return f"isinstance({v}, (int, float)) and not isinstance({v}, bool) and {v} == {source}"

    # ---- containers ----------------------------------------------------------

    def _emit_array(self, schema: list, v: str, path: _Path, w: _Writer) -> None:
        guards: List[Guard] = [(f"not isinstance({v}, (list, tuple))", f"array_message({v})")]
        size = len(schema)
        if size == 0:
            self._guarded(w, guards, path)
            return

        if size == 1:
            def body() -> None:
                index = self.context.unique("i")
                item = self.context.unique("v")
                with w.block(f"for {index}, {item} in enumerate({v}):"):
                    self._emit(schema[0], item, path.child(index), w)
        else:
            guards.append((f"len({v}) > {size}", f"array_length_message({v}, {size})"))

            def body() -> None:
                for position, child in enumerate(schema):
                    item = self.context.unique("v")
                    w.line(f"{item} = {v}[{position}] if len({v}) > {position} else None")
                    self._emit(child, item, path.child(repr(position)), w)

        self._guarded(w, guards, path, body)

    def _emit_tuple(self, schemas: Tuple[Any, ...], v: str, path: _Path, w: _Writer) -> None:
        size = len(schemas)
        guards: List[Guard] = [
            (f"not isinstance({v}, (list, tuple))", f"array_message({v})"),
            (f"len({v}) != {size}", f"tuple_length_message({v}, {size})"),
        ]

        def body() -> None:
            for position, child in enumerate(schemas):
                item = self.context.unique("v")
                w.line(f"{item} = {v}[{position}]")
                self._emit(child, item, path.child(repr(position)), w)

        self._guarded(w, guards, path, body)

    def _mapping_of(self, v: str, w: _Writer) -> str:
        mapping = self.context.unique("m")
        w.line(f"{mapping} = {v} if {v}.__class__ is dict else as_mapping({v})")
        return mapping

    def _emit_object(self, schema: dict, v: str, path: _Path, w: _Writer) -> None:
        mapping = self._mapping_of(v, w)
        self._guarded(
            w,
            [(f"{mapping} is None", f"object_message({v})")],
            path,
            lambda: self._object_body(schema, mapping, path, w),
        )

    def _object_body(self, schema: dict, mapping: str, path: _Path, w: _Writer, skip: Any = _NO_SKIP) -> None:
        declared = [key for key in schema if not isinstance(key, Marker)]

        if schema.get(STRICT):
            allowed = self.context.ref_derived(schema, "declared", lambda: frozenset(declared))
            key = self.context.unique("k")
            with w.block(f"for {key} in {mapping}:"):
                with w.block(f"if {key} not in {allowed}:"):
                    self._fail(w, f"extra_property_message({key})", path.child(key))

        if KEYS in schema:
            key = self.context.unique("k")
            text = self.context.unique("v")
            with w.block(f"for {key} in {mapping}:"):
                w.line(f"{text} = {key} if {key}.__class__ is str else str({key})")
                self._emit(schema[KEYS], text, path.child(key), w)

        if VALUES in schema:
            key = self.context.unique("k")
            item = self.context.unique("v")
            with w.block(f"for {key}, {item} in {mapping}.items():"):
                self._emit(schema[VALUES], item, path.child(key), w)

        for key in declared:
            if skip is not _NO_SKIP and key == skip:
                continue
            source = self._source(key)
            item = self.context.unique("v")
            w.line(f"{item} = {mapping}.get({source})")
            self._emit(schema[key], item, path.child(source), w)

    # ---- combinators ---------------------------------------------------------

    def _emit_or(self, schemas: Tuple[Any, ...], v: str, path: _Path, w: _Writer) -> None:
        names = [self._hoist(child) for child in schemas]
        if self.mode is Mode.FAST:
            calls = " or ".join(f"{name}({v})" for name in names)
            with w.block(f"if not ({calls}):"):
                w.line("return False")
            return

        errors = self.context.unique("e")
        w.line(f"{errors} = []")
        calls = " or ".join(f"{name}({v}, {path.render()}, {errors})" for name in names)
        with w.block(f"if not ({calls}):"):
            if self.mode is Mode.FIRST_ERROR:
                # the first branch's issue stands for the whole union
                w.line(f"issues.append({errors}[0])")
                w.line("return False")
            else:
                w.line(f"issues.extend({errors})")

    def _emit_discriminated(self, schema: DiscriminatedSchema, v: str, path: _Path, w: _Writer) -> None:
        key = schema.key
        for variant in schema.schemas:
            if not isinstance(variant, dict) or key not in variant:
                raise SchemaError(f"Discriminated schema variant is missing the discriminant key {key!r}: {variant!r}")
            if not _is_discriminant_literal(variant[key]):
                raise SchemaError(
                    f"Discriminant {key!r} must be a str, int, float or bool literal, got {variant[key]!r}"
                )

        mapping = self._mapping_of(v, w)

        def body() -> None:
            key_source = self._source(key)
            tag = self.context.unique("d")
            w.line(f"{tag} = {mapping}.get({key_source})")
            for index, variant in enumerate(schema.schemas):
                keyword = "if" if index == 0 else "elif"
                with w.block(f"{keyword} {self._literal_match(tag, variant[key])}:"):
                    self._object_body(variant, mapping, path, w, skip=key)
            with w.block("else:"):
                if self.mode is Mode.FAST:
                    w.line("return False")
                else:
                    choices = self.context.ref_derived(
                        schema, "choices", lambda: tuple(variant[key] for variant in schema.schemas)
                    )
                    self._fail(w, f"discriminant_message({tag}, {choices})", path.child(key_source))

        self._guarded(w, [(f"{mapping} is None", f"object_message({v})")], path, body)


def compile_procedure(schema: Any, context: Context, mode: Mode) -> Tuple[Callable[..., bool], str]:
    """Generate, render and evaluate the validation procedure for ``mode``.

    Returns:
        The procedure and its generated source
    """
    generator = CodeGenerator(context, mode)
    entry = generator.generate(schema)
    source = get_renderer().render_validator(
        mode=mode.value,
        functions=generator.functions,
        entry=entry,
        registry_size=len(context.registry),
    )
    logger.debug(
        "Compiled %s procedure: %d function(s), %d registry entries",
        mode.value,
        len(generator.functions),
        len(context.registry),
    )

    namespace = runtime_globals()
    exec(compile(source, f"<ascertain:{mode.value}>", "exec"), namespace)
    return namespace["factory"](context.registry), source
