# File: graphgen/resolvers.py
"""
GraphGen - Resolver Source Generator
======================================
Generates the Python handler module that serves the generated schema with
``ariadne`` (schema-first: the SDL is loaded as is and resolvers are bound by
root field name).

For every model the module contains:

    1. the validator registrations for every operation argument,
       e.g. ``MinLength(3)("BookCreateInput", "title")``;
    2. one ``<Model>Resolver`` class taking the ``<Model>Service`` it
       delegates to, with one async method per operation that returns the
       service result unchanged, and a ``bind()`` method registering those
       methods on the ``Query`` / ``Mutation`` root fields.

Import lines are collected separately and de-duplicated, keeping the first
occurrence.  The whole module is passed through ``black`` at the end.

**Performance contract:** string assembly uses ``List[str]`` +
``"\\n".join()``; no repeated ``str +=``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

import black

from graphgen.models import GenerationConfig, Model, Operation, OperationKind
from graphgen.utils import (
    dedupe_preserving_order,
    input_type_name,
    operation_field_name,
    operation_kind,
    resolver_class_name,
    resolver_method_name,
    service_attribute_name,
    service_class_name,
    to_snake_case,
)
from graphgen.validator_registry import emit_validator

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("graphgen.resolvers")

_INDENT: str = "    "
_DOUBLE_INDENT: str = "        "

_HEADER_IMPORTS: Tuple[str, ...] = ("from ariadne import MutationType, QueryType",)

# Service method each operation kind delegates to.
SERVICE_METHODS: Dict[OperationKind, str] = {
    OperationKind.SHOW: "find",
    OperationKind.LIST: "find",
    OperationKind.CREATE: "create",
    OperationKind.UPDATE: "update",
    OperationKind.REMOVE: "remove",
}

_ROOT_BINDINGS: Dict[OperationKind, str] = {
    OperationKind.SHOW: "query",
    OperationKind.LIST: "query",
    OperationKind.CREATE: "mutation",
    OperationKind.UPDATE: "mutation",
    OperationKind.REMOVE: "mutation",
}


@dataclass(frozen=True)
class ModelSource:
    """Rendered, not yet committed, source pieces for one model."""

    model_name: str
    imports: Tuple[str, ...]
    validations: Tuple[str, ...]
    class_source: str


def format_python(source: str, line_length: int = 99) -> str:
    """Pretty-print generated Python with black."""
    return black.format_str(source, mode=black.Mode(line_length=line_length))


class ResolverGenerator:
    """
    Accumulates resolver source model by model.

    ``render_model`` is pure; ``add_model`` renders and commits only when
    rendering succeeded, so a model with an unknown validator contributes
    nothing to the output.
    """

    def __init__(self, config: GenerationConfig) -> None:
        self.config: GenerationConfig = config
        self.imports: List[str] = []
        self.bodies: List[str] = []
        self.output: str = ""

    # -----------------------------------------------------------------
    # Rendering
    # -----------------------------------------------------------------

    def render_validations(self, model: Model, operation: Operation) -> List[str]:
        target: str = input_type_name(model.name, operation.type)
        return [
            emit_validator(target, argument.name, validator)
            for argument in operation.arguments
            for validator in argument.validators
        ]

    def render_method(self, model: Model, operation: Operation) -> List[str]:
        kind: OperationKind = operation_kind(operation.type)
        service_attr: str = service_attribute_name(model.name)
        return [
            f"{_INDENT}async def {resolver_method_name(kind, operation.name)}"
            f"(self, obj, info, input):",
            f"{_DOUBLE_INDENT}return await self.{service_attr}."
            f"{SERVICE_METHODS[kind]}(input)",
        ]

    def render_bind(self, model: Model) -> List[str]:
        lines: List[str] = [
            f"{_INDENT}def bind(self, query: QueryType, mutation: MutationType) -> None:",
        ]
        for operation in model.operations:
            kind: OperationKind = operation_kind(operation.type)
            lines.append(
                f"{_DOUBLE_INDENT}{_ROOT_BINDINGS[kind]}.set_field("
                f'"{operation_field_name(operation.name, model.name)}", '
                f"self.{resolver_method_name(kind, operation.name)})"
            )
        if not model.operations:
            lines.append(f"{_DOUBLE_INDENT}pass")
        return lines

    def render_class(self, model: Model) -> str:
        service_name: str = service_class_name(model.name)
        service_attr: str = service_attribute_name(model.name)

        lines: List[str] = [
            f"class {resolver_class_name(model.name)}:",
            f"{_INDENT}def __init__(self, {service_attr}: {service_name}) -> None:",
            f"{_DOUBLE_INDENT}self.{service_attr} = {service_attr}",
        ]
        for operation in model.operations:
            lines.append("")
            lines.extend(self.render_method(model, operation))
        lines.append("")
        lines.extend(self.render_bind(model))
        return "\n".join(lines)

    def render_model(self, model: Model) -> ModelSource:
        """
        Render every piece for *model* without touching accumulated state.

        Raises:
            UnknownValidatorError: an argument names an unknown validator.
            UnsupportedOperationError: an operation kind is not recognised.
        """
        service_name: str = service_class_name(model.name)
        imports: List[str] = [
            f"from {self.config.service_package}.{to_snake_case(service_name)} "
            f"import {service_name}",
        ]
        validations: List[str] = []

        for operation in model.operations:
            for argument in operation.arguments:
                for validator in argument.validators:
                    imports.append(
                        f"from {self.config.validator_module} import {validator.type}"
                    )
            validations.extend(self.render_validations(model, operation))

        return ModelSource(
            model_name=model.name,
            imports=tuple(imports),
            validations=tuple(validations),
            class_source=self.render_class(model),
        )

    # -----------------------------------------------------------------
    # Accumulation
    # -----------------------------------------------------------------

    def add_rendered(self, rendered: ModelSource) -> None:
        self.imports.extend(rendered.imports)
        parts: List[str] = []
        if rendered.validations:
            parts.append("\n".join(rendered.validations))
        parts.append(rendered.class_source)
        self.bodies.append("\n\n\n".join(parts))
        logger.debug(
            "Resolver source added for '%s' (%d validator call(s)).",
            rendered.model_name,
            len(rendered.validations),
        )

    def add_model(self, model: Model) -> None:
        self.add_rendered(self.render_model(model))

    def create(self) -> str:
        """Assemble imports and bodies into one module and format it."""
        import_lines: List[str] = list(_HEADER_IMPORTS)
        import_lines.append("")
        import_lines.extend(dedupe_preserving_order(self.imports))

        source: str = "\n".join(import_lines) + "\n\n\n" + "\n\n\n".join(self.bodies) + "\n"
        if self.config.format_source:
            source = format_python(source, line_length=self.config.line_length)

        self.output = source
        logger.info(
            "Resolver source created: %d class(es), %d import line(s).",
            len(self.bodies),
            len(import_lines),
        )
        return source


__all__: List[str] = [
    "ModelSource",
    "ResolverGenerator",
    "SERVICE_METHODS",
    "format_python",
]
