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

"""Compile-time registry shared by the procedures of one ``compile`` call."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple


class Context:
    """Registry of schema fragments that cannot be written as source literals.

    Classes, compiled patterns, sentinel objects and declared-key sets are
    referenced from generated code by position (``r<index>``). Entries are
    appended in first-use order; registering the same object twice returns
    the existing index.
    """

    def __init__(self) -> None:
        self.registry: List[Any] = []
        self._index_by_id: Dict[int, int] = {}
        self._derived: Dict[Tuple[int, str], Tuple[Any, Any]] = {}
        self._counter = 0

    def register(self, value: Any) -> int:
        index = self._index_by_id.get(id(value))
        if index is not None:
            return index
        index = len(self.registry)
        # the registry list keeps ``value`` alive, so its id stays unique
        self.registry.append(value)
        self._index_by_id[id(value)] = index
        return index

    def ref(self, value: Any) -> str:
        """Return the source name bound to ``value`` inside generated code."""
        return f"r{self.register(value)}"

    def ref_derived(self, owner: Any, tag: str, build: Callable[[], Any]) -> str:
        """Reference a value computed from ``owner``, built once per owner and tag.

        Every procedure of one compile call then shares a single registry entry
        for, e.g., the declared keys of a strict object.
        """
        key = (id(owner), tag)
        entry = self._derived.get(key)
        if entry is None:
            # holding ``owner`` keeps its id from being reused
            entry = (owner, build())
            self._derived[key] = entry
        return self.ref(entry[1])

    def unique(self, prefix: str) -> str:
        name = f"{prefix}{self._counter}"
        self._counter += 1
        return name
