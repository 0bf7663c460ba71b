"""Schema and issue data structures. Nothing here imports the compiler."""

from .issue import Issue, format_issues
from .schema import (
    KEYS,
    STRICT,
    VALUES,
    AndSchema,
    DiscriminatedSchema,
    Marker,
    Operation,
    Operator,
    OptionalSchema,
    OrSchema,
    TupleSchema,
    and_,
    discriminated,
    optional,
    or_,
    tuple_,
)
