# File: graphgen/schema.py
"""
GraphGen - Model-to-Schema Compiler
=====================================
Turns models into a ``graphql-core`` type graph and prints it as SDL.

Pipeline per session::

    add_model(model)         → object type registered (fields deferred)
    ...                      → more models, in any order
    create()                 → references checked → Query / Mutation roots
                               → GraphQLSchema → print_schema → ``output``

Object-type fields are thunks evaluated only once every model has been
added, so relationships may point forward or form cycles.

Operation shaping (input fields → result fields):

    ======  ===========================================  =====================
    Show    generic: ``id: ID!`` or ``id: ID`` + args    ``entry: Model``
    List    args + ``sort: Sort`` + ``paginate``          ``entries``, ``total``
    Create  args                                         ``entry: Model``
    Update  ``id: ID!`` + args                           ``entry: Model``
    Remove  generic: ``id: ID!`` or ``id: ID`` + args    ``entry: Model``
    ======  ===========================================  =====================

The generic rule makes ``id`` non-null only when the operation declares no
arguments, while Update always makes it non-null.  Both rules are kept as
they are.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from graphql import (
    GraphQLArgument,
    GraphQLField,
    GraphQLID,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLInt,
    GraphQLList,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLSchema,
    print_schema,
)

from graphgen.models import (
    MUTATION_KINDS,
    QUERY_KINDS,
    Argument,
    Model,
    Operation,
    OperationKind,
)
from graphgen.registry import TypeRegistry
from graphgen.scalars import GraphQLPaginateInput, GraphQLSortInput
from graphgen.utils import (
    input_type_name,
    operation_field_name,
    operation_kind,
    result_type_name,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("graphgen.schema")

GraphQLFieldMap = Dict[str, GraphQLField]
GraphQLInputFieldMap = Dict[str, GraphQLInputField]


class SchemaGenerator:
    """
    Builds object, input and result types for every model of a session.

    Usage::

        registry = TypeRegistry()
        schema_gen = SchemaGenerator(registry)
        schema_gen.add_model(book)
        schema_gen.add_model(author)
        schema_gen.create()
        print(schema_gen.output)
    """

    def __init__(self, registry: TypeRegistry) -> None:
        self.registry: TypeRegistry = registry
        self.schema: Optional[GraphQLSchema] = None
        self.output: str = ""

    # -----------------------------------------------------------------
    # Object types
    # -----------------------------------------------------------------

    def add_model(self, model: Model) -> GraphQLObjectType:
        """
        Register *model* and its object type.

        Property types are checked immediately so a bad property registers
        nothing.  Relationship targets are checked in ``create()``, once
        every model is known.
        """
        for prop in model.properties:
            self.registry.resolve(prop.type, list=prop.list, required=prop.required)

        object_type: GraphQLObjectType = self.create_object_type(model)
        self.registry.add_model(model)
        self.registry.add_object_type(object_type)
        logger.debug(
            "Added model '%s' (%d properties, %d relationships, %d operations).",
            model.name,
            len(model.properties),
            len(model.relationships),
            len(model.operations),
        )
        return object_type

    def create_object_type(self, model: Model) -> GraphQLObjectType:
        return GraphQLObjectType(
            name=model.name,
            fields=lambda: self.create_fields(model),
        )

    def create_fields(self, model: Model) -> GraphQLFieldMap:
        """Field map in order: ``id``, properties, relationships."""
        fields: GraphQLFieldMap = {
            "id": GraphQLField(self.registry.resolve("ID", required=True)),
        }
        for prop in model.properties:
            fields[prop.name] = GraphQLField(
                self.registry.resolve(prop.type, list=prop.list, required=prop.required)
            )
        for relationship in model.relationships:
            fields[relationship.name] = GraphQLField(
                self.registry.resolve(
                    relationship.type,
                    list=relationship.list,
                    required=relationship.required,
                )
            )
        return fields

    # -----------------------------------------------------------------
    # Operation input / result types
    # -----------------------------------------------------------------

    def create_argument_fields(self, arguments: Iterable[Argument]) -> GraphQLInputFieldMap:
        fields: GraphQLInputFieldMap = {}
        for argument in arguments:
            fields[argument.name] = GraphQLInputField(
                self.registry.resolve(
                    argument.type, list=argument.list, required=argument.required
                )
            )
        return fields

    def create_generic_input_fields(self, operation: Operation) -> GraphQLInputFieldMap:
        argument_fields: GraphQLInputFieldMap = self.create_argument_fields(
            operation.arguments
        )
        if argument_fields:
            return {"id": GraphQLInputField(GraphQLID), **argument_fields}
        return {"id": GraphQLInputField(GraphQLNonNull(GraphQLID))}

    def create_input_fields(self, operation: Operation) -> GraphQLInputFieldMap:
        kind: OperationKind = operation_kind(operation.type)

        if kind in (OperationKind.SHOW, OperationKind.REMOVE):
            return self.create_generic_input_fields(operation)
        if kind == OperationKind.LIST:
            return {
                **self.create_argument_fields(operation.arguments),
                "sort": GraphQLInputField(GraphQLSortInput),
                "paginate": GraphQLInputField(GraphQLPaginateInput),
            }
        if kind == OperationKind.CREATE:
            return self.create_argument_fields(operation.arguments)
        if kind == OperationKind.UPDATE:
            return {
                "id": GraphQLInputField(GraphQLNonNull(GraphQLID)),
                **self.create_argument_fields(operation.arguments),
            }
        raise AssertionError(f"Unhandled operation kind: {kind}")

    def create_result_fields(
        self,
        kind: OperationKind,
        model_type: GraphQLObjectType,
    ) -> GraphQLFieldMap:
        if kind == OperationKind.LIST:
            return {
                "entries": GraphQLField(
                    GraphQLNonNull(GraphQLList(GraphQLNonNull(model_type)))
                ),
                "total": GraphQLField(GraphQLNonNull(GraphQLInt)),
            }
        return {"entry": GraphQLField(model_type)}

    def create_operation(
        self,
        model: Model,
        operation: Operation,
    ) -> Tuple[GraphQLInputObjectType, GraphQLObjectType]:
        """
        Build the ``(input, result)`` type pair for one model operation.

        Raises:
            UnsupportedOperationError: unknown operation kind.
            ModelNotFoundError: the model has no registered object type.
            UnknownTypeError: an argument names an unknown type.
        """
        kind: OperationKind = operation_kind(operation.type)
        model_type: GraphQLObjectType = self.registry.get_object_type(model.name)

        input_type: GraphQLInputObjectType = GraphQLInputObjectType(
            name=input_type_name(model.name, kind),
            fields=self.create_input_fields(operation),
        )
        output_type: GraphQLObjectType = GraphQLObjectType(
            name=result_type_name(model.name, kind),
            fields=self.create_result_fields(kind, model_type),
        )
        return input_type, output_type

    def create_operation_field(self, model: Model, operation: Operation) -> GraphQLField:
        input_type, output_type = self.create_operation(model, operation)
        return GraphQLField(
            GraphQLNonNull(output_type),
            args={"input": GraphQLArgument(GraphQLNonNull(input_type))},
        )

    # -----------------------------------------------------------------
    # Root assembly
    # -----------------------------------------------------------------

    def create_operations(self, kinds: Sequence[OperationKind]) -> GraphQLFieldMap:
        """
        Root fields for every operation whose kind is in *kinds*.

        Keys are ``operation.name + model.name``; a repeated key replaces the
        earlier field (last write wins).
        """
        operations: GraphQLFieldMap = {}
        for model in self.registry.models:
            for operation in model.operations:
                if operation_kind(operation.type) not in kinds:
                    continue
                field_name: str = operation_field_name(operation.name, model.name)
                if field_name in operations:
                    logger.warning(
                        "Root field '%s' is defined more than once; "
                        "the last definition wins.",
                        field_name,
                    )
                operations[field_name] = self.create_operation_field(model, operation)
        return operations

    def create_query(self) -> GraphQLObjectType:
        return GraphQLObjectType(name="Query", fields=self.create_operations(QUERY_KINDS))

    def create_mutation(self) -> GraphQLObjectType:
        return GraphQLObjectType(
            name="Mutation", fields=self.create_operations(MUTATION_KINDS)
        )

    # -----------------------------------------------------------------
    # Finalisation
    # -----------------------------------------------------------------

    def check_references(self) -> None:
        """
        Resolve every deferred field of every model.

        graphql-core wraps errors raised inside field thunks in a
        ``TypeError``; resolving here first surfaces ``UnknownTypeError``
        unchanged.
        """
        for model in self.registry.models:
            self.create_fields(model)

    def create_schema(self) -> GraphQLSchema:
        self.check_references()
        query: GraphQLObjectType = self.create_query()
        mutation: GraphQLObjectType = self.create_mutation()
        return GraphQLSchema(
            query=query,
            mutation=mutation,
            types=list(self.registry.object_types.values()),
        )

    def create(self) -> str:
        """Build the schema, print it to SDL and keep both."""
        schema: GraphQLSchema = self.create_schema()
        self.schema = schema
        self.output = print_schema(schema)
        logger.info(
            "Schema created: %d object types, %d query fields, %d mutation fields.",
            len(self.registry.object_types),
            len(schema.query_type.fields) if schema.query_type else 0,
            len(schema.mutation_type.fields) if schema.mutation_type else 0,
        )
        return self.output


__all__: List[str] = [
    "SchemaGenerator",
]
