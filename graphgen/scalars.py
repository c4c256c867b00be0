# File: graphgen/scalars.py
"""
GraphGen - Built-in Scalar & Helper Input Types
=================================================
The scalar set every registry is seeded with, and the two input types the
List operation injects (``Sort`` and ``Paginate``).

These type objects are immutable once built and safe to share between
compilation sessions; the mutable registries are per-session (see
``graphgen.registry``).
"""

from __future__ import annotations

from typing import Dict, List

from graphql import (
    GraphQLBoolean,
    GraphQLFloat,
    GraphQLID,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLInt,
    GraphQLScalarType,
    GraphQLString,
)

GraphQLDateTime: GraphQLScalarType = GraphQLScalarType(
    name="DateTime",
    description=(
        "Represents a time value as seconds since midnight, January 1, 1970 UTC. "
        "DateTime may either be expressed as a number of milliseconds or an "
        "ISO-8601 string. DateTime is serialized into JSON in the number of "
        "milliseconds since epoch."
    ),
)

DEFAULT_SCALAR_TYPES: Dict[str, GraphQLScalarType] = {
    "Int": GraphQLInt,
    "Float": GraphQLFloat,
    "String": GraphQLString,
    "Boolean": GraphQLBoolean,
    "ID": GraphQLID,
    "DateTime": GraphQLDateTime,
}

DEFAULT_SKIP: int = 0
DEFAULT_TAKE: int = 10

GraphQLSortInput: GraphQLInputObjectType = GraphQLInputObjectType(
    name="Sort",
    fields={
        "column": GraphQLInputField(GraphQLString),
    },
)

GraphQLPaginateInput: GraphQLInputObjectType = GraphQLInputObjectType(
    name="Paginate",
    fields={
        "skip": GraphQLInputField(GraphQLInt, default_value=DEFAULT_SKIP),
        "take": GraphQLInputField(GraphQLInt, default_value=DEFAULT_TAKE),
    },
)

# Names taken by the compiler itself; a model may not reuse them.
RESERVED_TYPE_NAMES: List[str] = [
    "Query",
    "Mutation",
    GraphQLSortInput.name,
    GraphQLPaginateInput.name,
]

__all__: List[str] = [
    "GraphQLDateTime",
    "GraphQLSortInput",
    "GraphQLPaginateInput",
    "DEFAULT_SCALAR_TYPES",
    "DEFAULT_SKIP",
    "DEFAULT_TAKE",
    "RESERVED_TYPE_NAMES",
]
