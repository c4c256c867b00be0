# File: graphgen/documents.py
"""
GraphGen - Example Document Generator
=======================================
Writes a GraphQL document with one fragment per model and one query or
mutation per operation, ready to be used against the generated schema.

graphql-core can print a document AST but building one by hand is far more
verbose than the text itself, so the document is assembled from lines.  All
type and field names come from ``graphgen.utils`` so they match the schema
byte for byte.
"""

from __future__ import annotations

import logging
from typing import List

from graphgen.models import Model, Operation, OperationKind
from graphgen.registry import TypeRegistry
from graphgen.utils import (
    fragment_name,
    indent_lines,
    input_type_name,
    operation_field_name,
    operation_kind,
    operation_label,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("graphgen.documents")


class DocumentGenerator:
    """Builds fragments and operation blocks for every model in the registry."""

    def __init__(self, registry: TypeRegistry) -> None:
        self.registry: TypeRegistry = registry
        self.output: str = ""

    # -----------------------------------------------------------------
    # Blocks
    # -----------------------------------------------------------------

    def create_fragment(self, model: Model) -> str:
        lines: List[str] = [f"fragment {fragment_name(model.name)} on {model.name} {{"]
        lines.extend(indent_lines([prop.name for prop in model.properties]))
        lines.append("}")
        return "\n".join(lines)

    def create_selection(self, model: Model, kind: OperationKind) -> List[str]:
        spread: str = f"...{fragment_name(model.name)}"
        if kind == OperationKind.LIST:
            return ["entries {", f"  {spread}", "}", "total"]
        return ["entry {", f"  {spread}", "}"]

    def create_operation(self, model: Model, operation: Operation) -> str:
        """
        One ``query`` (Show / List) or ``mutation`` (Create / Update / Remove)
        block named after the operation kind and the model.
        """
        kind: OperationKind = operation_kind(operation.type)
        keyword: str = (
            "query" if kind in (OperationKind.SHOW, OperationKind.LIST) else "mutation"
        )
        block_name: str = f"{operation_label(kind)}{model.name}"
        field_name: str = operation_field_name(operation.name, model.name)
        input_name: str = input_type_name(model.name, kind)

        lines: List[str] = [f"{keyword} {block_name}($input: {input_name}!) {{"]
        lines.append(f"  {field_name}(input: $input) {{")
        lines.extend(indent_lines(self.create_selection(model, kind), level=2))
        lines.append("  }")
        lines.append("}")
        return "\n".join(lines)

    # -----------------------------------------------------------------
    # Document
    # -----------------------------------------------------------------

    def create(self) -> str:
        """All fragments first, then all operation blocks, in declaration order."""
        fragments: List[str] = []
        operations: List[str] = []

        for model in self.registry.models:
            if not model.operations:
                continue
            fragments.append(self.create_fragment(model))
            for operation in model.operations:
                operations.append(self.create_operation(model, operation))

        document: str = "\n\n".join(fragments + operations)
        if document:
            document += "\n"

        self.output = document
        logger.info(
            "Document created: %d fragment(s), %d operation(s).",
            len(fragments),
            len(operations),
        )
        return document


__all__: List[str] = [
    "DocumentGenerator",
]
