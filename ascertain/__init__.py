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

"""Compiled schema validation.

Schemas are plain Python values::

    from ascertain import KEYS, STRICT, compile, optional, or_

    validator = compile({
        STRICT: True,
        "name": str,
        "port": int,
        "mode": or_("dev", "prod"),
        "tags": [str],
        "timeout": optional(float),
    })
    if not validator(data):
        print(validator.issues)
"""

__version__ = "2.1.0"

from . import cast
from .api import (
    StandardResult,
    StandardSchema,
    ascertain,
    clear_cache,
    compile,
    create_validator,
    standard_schema,
)
from .exceptions import AscertainError, AssertError, CastError, IssuesError, SchemaError
from .models import (
    KEYS,
    STRICT,
    VALUES,
    Issue,
    and_,
    discriminated,
    format_issues,
    optional,
    or_,
    tuple_,
)
from .validator import Validator

__all__ = [
    "KEYS",
    "STRICT",
    "VALUES",
    "AscertainError",
    "AssertError",
    "CastError",
    "Issue",
    "IssuesError",
    "SchemaError",
    "StandardResult",
    "StandardSchema",
    "Validator",
    "and_",
    "ascertain",
    "cast",
    "clear_cache",
    "compile",
    "create_validator",
    "discriminated",
    "format_issues",
    "optional",
    "or_",
    "standard_schema",
    "tuple_",
]
