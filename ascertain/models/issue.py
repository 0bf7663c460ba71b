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

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Iterable, Tuple


JsonPointer = str
PathSegment = Hashable


def _jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


@dataclass(frozen=True)
class Issue:
    message: str
    path: Tuple[PathSegment, ...] = ()

    def __post_init__(self) -> None:
        # generated code hands over lists; keep the record hashable
        if not isinstance(self.path, tuple):
            object.__setattr__(self, "path", tuple(self.path))

    @property
    def pointer(self) -> JsonPointer:
        """RFC 6901 rendering of ``path`` (empty string for the root)."""
        return "".join(f"/{_jp_escape(str(segment))}" for segment in self.path)

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"{self.message} (path={self.pointer})"


def format_issues(issues: Iterable[Issue]) -> str:
    return "\n".join(
        f"  - {i.message}" + (f" (path={i.pointer})" if i.path else "")
        for i in issues
    )
