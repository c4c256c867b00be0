# File: graphgen/registry.py
"""
GraphGen - Type Registry & Type Resolver
==========================================
``TypeRegistry`` is the context object of one compilation session.  It owns:

    - the scalar registry (seeded with the built-in scalars),
    - the object-type registry (one entry per added model),
    - the append-only list of models.

Every generator of a session receives the same registry instance.  Nothing
here is a process-wide singleton: two sessions never share a registry, since
registration is unsynchronised and object-type fields are resolved lazily
against whatever the registry holds at finalisation time.

The Type Resolver (``TypeRegistry.resolve``) is a pure lookup-and-wrap:

    1. look the name up in the scalar registry, then the object registry;
    2. wrap in a list if ``list`` is true;
    3. wrap the result in non-null unless ``required`` is explicitly False
       (``None`` / omitted counts as required).
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional

from graphql import (
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLType,
)

from graphgen.errors import ModelNotFoundError, UnknownTypeError
from graphgen.models import Model
from graphgen.scalars import DEFAULT_SCALAR_TYPES

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("graphgen.registry")


def wrap_type(
    base: GraphQLType,
    list: Optional[bool] = False,
    required: Optional[bool] = True,
) -> GraphQLType:
    """
    Apply list and non-null wrappers to *base*.

    The non-null wrapper is applied once, outermost: ``String`` with
    ``list=True, required=True`` becomes ``[String]!``.
    """
    wrapped: GraphQLType = base
    if list is True:
        wrapped = GraphQLList(wrapped)
    if required is None or required is True:
        wrapped = GraphQLNonNull(wrapped)
    return wrapped


class TypeRegistry:
    """Scalar / object registries and model list for one compilation session."""

    def __init__(
        self,
        scalar_types: Optional[Mapping[str, GraphQLScalarType]] = None,
    ) -> None:
        self.scalar_types: Dict[str, GraphQLScalarType] = dict(
            DEFAULT_SCALAR_TYPES if scalar_types is None else scalar_types
        )
        self.object_types: Dict[str, GraphQLObjectType] = {}
        self.models: List[Model] = []

    # -- Registration -------------------------------------------------------

    def add_scalar_type(self, scalar_type: GraphQLScalarType) -> None:
        self.scalar_types[scalar_type.name] = scalar_type
        logger.debug("Registered scalar type '%s'.", scalar_type.name)

    def add_object_type(self, object_type: GraphQLObjectType) -> None:
        self.object_types[object_type.name] = object_type
        logger.debug("Registered object type '%s'.", object_type.name)

    def add_model(self, model: Model) -> None:
        self.models.append(model)

    # -- Lookup -------------------------------------------------------------

    def has_type(self, name: str) -> bool:
        return name in self.scalar_types or name in self.object_types

    def get_type(self, name: str) -> GraphQLNamedType:
        """Scalars first, then object types; unknown names raise."""
        named: Optional[GraphQLNamedType] = self.scalar_types.get(name)
        if named is None:
            named = self.object_types.get(name)
        if named is None:
            raise UnknownTypeError(name)
        return named

    def get_object_type(self, name: str) -> GraphQLObjectType:
        object_type: Optional[GraphQLObjectType] = self.object_types.get(name)
        if object_type is None:
            raise ModelNotFoundError(name)
        return object_type

    # -- Type Resolver ------------------------------------------------------

    def resolve(
        self,
        name: str,
        list: Optional[bool] = False,
        required: Optional[bool] = True,
    ) -> GraphQLType:
        """Resolve *name* and wrap it according to the list/required flags."""
        return wrap_type(self.get_type(name), list=list, required=required)

    def __repr__(self) -> str:
        return (
            f"<TypeRegistry {len(self.scalar_types)} scalars, "
            f"{len(self.object_types)} object types, {len(self.models)} models>"
        )


__all__: List[str] = [
    "TypeRegistry",
    "wrap_type",
]
