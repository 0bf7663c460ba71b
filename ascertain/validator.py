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

from typing import Any, Callable, Dict, List, Sequence

from .models.issue import Issue


class Validator:
    """A compiled schema.

    Calling the validator returns a bool and replaces ``issues`` with the
    outcome of that call. The diagnostic procedure only runs when the fast
    one rejects the data, so valid data never builds an Issue.

    ``issues`` is shared state: a validator used from several threads should
    be called through :meth:`check`, which returns a fresh list instead.
    """

    def __init__(
        self,
        schema: Any,
        fast: Callable[[Any], bool],
        diagnostic: Callable[..., bool],
        source: Dict[str, str],
        all_errors: bool = False,
    ):
        self.schema = schema
        self.all_errors = all_errors
        self.source = source
        self.issues: List[Issue] = []
        self._fast = fast
        self._diagnostic = diagnostic

    def __call__(self, data: Any) -> bool:
        if self._fast(data):
            self.issues = []
            return True
        self.issues = self._diagnose(data)
        return False

    def check(self, data: Any, path: Sequence[Any] = ()) -> List[Issue]:
        """Validate ``data`` and return its issues (empty when valid).

        ``path`` is prepended to every issue path.
        """
        if self._fast(data):
            return []
        return self._diagnose(data, tuple(path))

    def _diagnose(self, data: Any, path: tuple = ()) -> List[Issue]:
        issues: List[Issue] = []
        self._diagnostic(data, path, issues)
        return issues

    def __repr__(self) -> str:
        mode = "all_errors" if self.all_errors else "first_error"
        return f"<Validator {mode} schema={self.schema!r}>"
