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

"""Fault tolerant conversion of strings (typically environment variables).

None of these helpers raise. On bad input they return a :class:`CastError`
in place of the value, so a configuration object can be built eagerly and
validated later: the compiled validator reports the conversion message at
the exact path where the value ended up.

Example::

    config = {
        "port": cast.number(os.environ.get("PORT")),
        "debug": cast.boolean(os.environ.get("DEBUG")),
    }
    ascertain({"port": int, "debug": bool}, config)
"""

from __future__ import annotations

import base64 as _base64
import json as _json
import math
import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, List, Optional, Union

import yaml as _yaml

from .exceptions import CastError


_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_PREFIXED_RE = re.compile(r"^([+-]?)0([xXoObB])([0-9a-fA-F]+)$")
_BASES = {"x": 16, "o": 8, "b": 2}

_TIME_RE = re.compile(r"^(\d+(?:\.\d+)?)(ms|s|m|h|d|w)?$")
MULTIPLIERS = {
    "ms": 1,
    "s": 1000,
    "m": 60000,
    "h": 3600000,
    "d": 86400000,
    "w": 604800000,
}

_BOOLEAN_RE = re.compile(r"^(0|1|true|false|enabled|disabled)$", re.IGNORECASE)
_TRUTHY_RE = re.compile(r"^(1|true|enabled)$", re.IGNORECASE)


def string(value: Optional[str]) -> Union[str, CastError]:
    return value if isinstance(value, str) else CastError(value, "a string")


def number(value: Optional[str]) -> Union[int, float, CastError]:
    """Parse a decimal, ``0x``, ``0o`` or ``0b`` number.

    Integer forms give an ``int``, everything else a ``float``.
    """
    if not isinstance(value, str):
        return CastError(value, "a number")

    text = value.strip()
    match = _PREFIXED_RE.match(text)
    if match is not None:
        sign, prefix, digits = match.groups()
        try:
            result = int(digits, _BASES[prefix.lower()])
        except ValueError:
            return CastError(value, "a number")
        return -result if sign == "-" else result

    if not _DECIMAL_RE.match(text):
        return CastError(value, "a number")
    if _INTEGER_RE.match(text):
        try:
            return int(text)
        except ValueError:
            # beyond the interpreter's int string conversion limit
            return CastError(value, "a number")

    result = float(text)
    if not math.isfinite(result):
        return CastError(value, "a finite number")
    return result


def date(value: Optional[str]) -> Union[datetime, CastError]:
    """Parse ISO 8601, falling back to RFC 2822. Naive results are UTC."""
    if not isinstance(value, str):
        return CastError(value, "a date")

    text = value.strip()
    try:
        result = datetime.fromisoformat(text)
    except ValueError:
        try:
            result = parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError):
            return CastError(value, "a date")

    if result.tzinfo is None:
        result = result.replace(tzinfo=timezone.utc)
    return result


def time(value: Optional[str], conversion_factor: Optional[float] = None) -> Union[int, CastError]:
    """Parse a duration such as ``250ms``, ``30s`` or ``2h`` into milliseconds.

    Args:
        value: ``<number><unit>`` where unit is one of ms, s, m, h, d, w (default ms)
        conversion_factor: Optional divisor, e.g. ``1000`` to get seconds

    Returns:
        The floored duration, or a CastError
    """
    match = _TIME_RE.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        return CastError(value, "a duration")

    amount, unit = match.group(1), match.group(2) or "ms"
    result = float(amount) * MULTIPLIERS[unit]
    if conversion_factor is not None:
        if not conversion_factor:
            return CastError(value, "a duration with a non-zero conversion factor")
        result = result / conversion_factor

    if not math.isfinite(result):
        return CastError(value, "a finite duration")
    return math.floor(result)


def boolean(value: Optional[str]) -> Union[bool, CastError]:
    if not isinstance(value, str) or not _BOOLEAN_RE.fullmatch(value):
        return CastError(value, "a boolean")
    return _TRUTHY_RE.fullmatch(value) is not None


def array(value: Optional[str], delimiter: str = ",") -> Union[List[str], CastError]:
    if not isinstance(value, str):
        return CastError(value, "a delimited string")
    return value.split(delimiter)


def json(value: Optional[str]) -> Any:
    try:
        return _json.loads(value)
    except (TypeError, ValueError, RecursionError):
        return CastError(value, "a JSON document")


def yaml(value: Optional[str]) -> Any:
    if not isinstance(value, str):
        return CastError(value, "a YAML document")
    try:
        return _yaml.safe_load(value)
    except (_yaml.YAMLError, TypeError, ValueError, RecursionError):
        return CastError(value, "a YAML document")


def base64(value: Optional[str]) -> Union[str, CastError]:
    try:
        return _base64.b64decode(value, validate=True).decode("utf-8")
    except (TypeError, ValueError):
        return CastError(value, "a base64 encoded string")
