# File: graphgen/__init__.py
"""
GraphGen - Declarative Model to GraphQL Compiler
==================================================

Compiles declarative model definitions (name, properties, relationships,
operations) into three artifacts:

    - a GraphQL schema in SDL (built with ``graphql-core``),
    - an example document with one fragment per model and one query or
      mutation per operation,
    - Python resolver source for an ``ariadne`` server, formatted by ``black``.

Architecture overview::

    ┌───────────────┐     ┌────────────────────┐     ┌─────────────────┐
    │ parse_models  │────▶│   GraphGenerator   │────▶│ GenerationReport│
    │  (models.py)  │     │   (generator.py)   │     │   + artifacts   │
    └───────────────┘     └─────────┬──────────┘     └─────────────────┘
                                    │
                 ┌──────────────────┼───────────────────┐
                 ▼                  ▼                   ▼
          ┌────────────┐   ┌──────────────────┐   ┌────────────┐
          │ validators │   │CompilationSession│   │   utils    │
          └────────────┘   └────────┬─────────┘   └────────────┘
                                    │  TypeRegistry
                 ┌──────────────────┼───────────────────┐
                 ▼                  ▼                   ▼
          ┌────────────┐   ┌──────────────────┐   ┌────────────┐
          │   schema   │   │    documents     │   │ resolvers  │
          └────────────┘   └──────────────────┘   └────────────┘

Usage::

    from graphgen import CompilationSession, Model

    session = CompilationSession()
    session.add_model(Model.model_validate(book_definition))
    output = session.finalize()
    print(output.schema_sdl)

    # Or the whole pipeline with validation and a report
    from graphgen import generate_from_text
    report = generate_from_text(yaml_text)
    print(report.summary())
"""

from __future__ import annotations

import logging
import sys

__version__: str = "0.1.0"
__license__: str = "MIT"

from graphgen.errors import (
    GraphGenError,
    ModelNotFoundError,
    ModelValidationError,
    SessionFinalizedError,
    UnknownTypeError,
    UnknownValidatorError,
    UnsupportedOperationError,
)
from graphgen.models import (
    Argument,
    GenerationConfig,
    GenerationResult,
    Model,
    ModelDefinitions,
    Operation,
    OperationKind,
    Permission,
    Property,
    Relationship,
    ScalarType,
    Validator,
    parse_model_text,
    parse_models,
)
from graphgen.registry import TypeRegistry
from graphgen.schema import SchemaGenerator
from graphgen.documents import DocumentGenerator
from graphgen.resolvers import ResolverGenerator
from graphgen.validators import ValidationResult, validate_full
from graphgen.generator import (
    CompilationOutput,
    CompilationSession,
    GenerationReport,
    GraphGenerator,
    compile_models,
    generate_from_data,
    generate_from_text,
)


def configure_logging(verbosity: int = 0) -> None:
    """
    Attach a stderr handler to the ``graphgen`` logger.

    Args:
        verbosity: 0 = WARNING, 1 = INFO, 2+ = DEBUG.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
            datefmt="%H:%M:%S",
        )
    )

    package_logger: logging.Logger = logging.getLogger("graphgen")
    package_logger.setLevel(level)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.propagate = False


# ---------------------------------------------------------------------------
# Public API surface
# ---------------------------------------------------------------------------

__all__: list[str] = [
    # Version info
    "__version__",
    "__license__",
    # Orchestration
    "CompilationOutput",
    "CompilationSession",
    "GenerationReport",
    "GraphGenerator",
    "compile_models",
    "generate_from_data",
    "generate_from_text",
    "configure_logging",
    # Generators
    "TypeRegistry",
    "SchemaGenerator",
    "DocumentGenerator",
    "ResolverGenerator",
    # Models
    "Argument",
    "GenerationConfig",
    "GenerationResult",
    "Model",
    "ModelDefinitions",
    "Operation",
    "OperationKind",
    "Permission",
    "Property",
    "Relationship",
    "ScalarType",
    "Validator",
    "parse_models",
    "parse_model_text",
    # Validation
    "ValidationResult",
    "validate_full",
    # Errors
    "GraphGenError",
    "ModelNotFoundError",
    "ModelValidationError",
    "SessionFinalizedError",
    "UnknownTypeError",
    "UnknownValidatorError",
    "UnsupportedOperationError",
]
