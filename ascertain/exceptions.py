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

"""Custom exceptions for the ascertain schema validator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Sequence

if TYPE_CHECKING:
    from .models.issue import Issue


class AscertainError(Exception):
    """Base exception for ascertain related errors."""
    pass


class SchemaError(AscertainError, TypeError):
    """Exception raised for malformed schemas, at construction or compile time."""
    pass


class CastError(AscertainError, TypeError):
    """Returned (never raised) by the ``cast`` helpers when a conversion fails.

    The instance travels inside the data like any other value; the compiled
    validator recognizes it and reports its message at the right path.
    """

    def __init__(self, value: Any, expected: str):
        self.value = value
        self.expected = expected
        super().__init__(f"Invalid value {value!r}, expected {expected}")


class IssuesError(AscertainError):
    """Carrier for the complete issue list of a failed validation."""

    def __init__(self, issues: Sequence["Issue"]):
        self.issues: List["Issue"] = list(issues)
        super().__init__(f"{len(self.issues)} validation issue(s)")


class AssertError(AscertainError, TypeError):
    """Exception raised when data does not satisfy a schema.

    The message is the first issue's message; ``issues`` holds all of them.
    """

    def __init__(self, message: str, issues: Sequence["Issue"]):
        self.issues: List["Issue"] = list(issues)
        super().__init__(message)
