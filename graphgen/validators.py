# File: graphgen/validators.py
"""
GraphGen - Semantic Model Validators
======================================
Pydantic already guarantees the *shape* of every model (see
``graphgen.models``).  This module adds **cross-entity semantic checks**
run before compilation: name collisions between models, scalars and the
compiler's own types, duplicate field names, relationship targets, and
operation collisions that the compiler would otherwise resolve silently.

None of these checks change what the compiler does.  Collisions the compiler
resolves by last-write-wins are only reported as warnings.

Usage::

    from graphgen.validators import validate_full
    result = validate_full(definitions)
    if not result:
        print(result.format_report())
"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Tuple

from graphgen.models import QUERY_KINDS, ModelDefinitions
from graphgen.scalars import DEFAULT_SCALAR_TYPES, RESERVED_TYPE_NAMES
from graphgen.utils import (
    is_pascal_case,
    operation_field_name,
    operation_kind,
    operation_label,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("graphgen.validators")

# ---------------------------------------------------------------------------
# Validation result container
# ---------------------------------------------------------------------------


class ValidationIssue:
    """Lightweight issue descriptor (no Pydantic overhead)."""

    __slots__ = ("level", "code", "message", "context")

    def __init__(
        self,
        level: str,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.level: str = level  # "error" | "warning" | "info"
        self.code: str = code
        self.message: str = message
        self.context: Dict[str, Any] = context or {}

    @property
    def is_error(self) -> bool:
        return self.level == "error"

    @property
    def is_warning(self) -> bool:
        return self.level == "warning"

    def __repr__(self) -> str:
        return f"[{self.level.upper()}] {self.code}: {self.message}"

    def __str__(self) -> str:
        return self.__repr__()


class ValidationResult:
    """Accumulates ``ValidationIssue`` instances produced by the checks."""

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: List[ValidationIssue] = []

    # -- Mutation -----------------------------------------------------------

    def add_error(
        self,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._items.append(ValidationIssue("error", code, message, context))

    def add_warning(
        self,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._items.append(ValidationIssue("warning", code, message, context))

    def add_info(
        self,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._items.append(ValidationIssue("info", code, message, context))

    def merge(self, other: "ValidationResult") -> None:
        self._items.extend(other._items)

    # -- Query --------------------------------------------------------------

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self._items if i.is_error]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self._items if i.is_warning]

    @property
    def codes(self) -> List[str]:
        return [i.code for i in self._items]

    @property
    def has_errors(self) -> bool:
        return any(i.is_error for i in self._items)

    @property
    def has_warnings(self) -> bool:
        return any(i.is_warning for i in self._items)

    @property
    def error_count(self) -> int:
        return sum(1 for i in self._items if i.is_error)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self._items if i.is_warning)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    def summary(self) -> str:
        return (
            f"Validation: {self.error_count} error(s), "
            f"{self.warning_count} warning(s), "
            f"{len(self._items)} total item(s)."
        )

    def __repr__(self) -> str:
        return f"<ValidationResult {self.summary()}>"

    def __bool__(self) -> bool:
        """Truthy when there are NO errors (i.e. valid)."""
        return self.is_valid

    def __len__(self) -> int:
        return len(self._items)

    def format_report(self, include_info: bool = False) -> str:
        """Human-readable multi-line report."""
        lines: List[str] = [self.summary(), ""]
        for item in self._items:
            if not include_info and item.level == "info":
                continue
            lines.append(f"  {item.level.upper():<7s} [{item.code}] {item.message}")
            for k, v in item.context.items():
                lines.append(f"          {k}: {v}")
        return "\n".join(lines)


def _repeated(names: Iterable[str]) -> List[str]:
    """Names occurring more than once, in first-seen order."""
    counts: Counter = Counter(names)
    return [name for name in counts if counts[name] > 1]


def _scalar_names(scalar_names: Optional[Iterable[str]]) -> Set[str]:
    """The scalar set a session resolves against; the built-ins by default."""
    return set(DEFAULT_SCALAR_TYPES if scalar_names is None else scalar_names)


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------


def validate_model_names(
    definitions: ModelDefinitions,
    scalar_names: Optional[Iterable[str]] = None,
) -> ValidationResult:
    """
    Validate every model name for:
    - no duplicates (the second object type would replace the first)
    - no collision with a scalar or with ``Query`` / ``Mutation`` / ``Sort``
      / ``Paginate``
    - PascalCase convention
    """
    result: ValidationResult = ValidationResult()
    scalars: Set[str] = _scalar_names(scalar_names)

    for name in _repeated(m.name for m in definitions.models):
        result.add_error(
            "DUPLICATE_MODEL_NAME",
            f"Model name '{name}' is defined more than once.",
            {"model": name},
        )

    for model in definitions.models:
        ctx: Dict[str, Any] = {"model": model.name}

        if model.name in scalars:
            result.add_error(
                "MODEL_NAME_IS_SCALAR",
                f"Model name '{model.name}' collides with a scalar type.",
                ctx,
            )
        elif model.name in RESERVED_TYPE_NAMES:
            result.add_error(
                "MODEL_NAME_RESERVED",
                f"Model name '{model.name}' is reserved by the compiler.",
                ctx,
            )

        if not is_pascal_case(model.name):
            result.add_warning(
                "MODEL_NAME_NOT_PASCAL_CASE",
                f"Model name '{model.name}' is not PascalCase. "
                f"Generated type names may look odd.",
                ctx,
            )

    logger.debug(
        "validate_model_names: checked %d models, %d issue(s).",
        len(definitions.models),
        len(result),
    )
    return result


def validate_field_names(definitions: ModelDefinitions) -> ValidationResult:
    """
    Properties and relationships share the object type's field map together
    with the implicit ``id`` field, so their names must be distinct.
    """
    result: ValidationResult = ValidationResult()

    for model in definitions.models:
        names: List[str] = [p.name for p in model.properties]
        names.extend(r.name for r in model.relationships)

        if "id" in names:
            result.add_warning(
                "FIELD_SHADOWS_ID",
                f"Model '{model.name}' declares a field named 'id', which "
                f"replaces the generated id field.",
                {"model": model.name, "field": "id"},
            )

        for name in _repeated(names):
            result.add_error(
                "DUPLICATE_FIELD_NAME",
                f"Field '{name}' is declared more than once on model "
                f"'{model.name}'.",
                {"model": model.name, "field": name},
            )

    return result


def validate_relationships(
    definitions: ModelDefinitions,
    scalar_names: Optional[Iterable[str]] = None,
) -> ValidationResult:
    """Every relationship must target a scalar or a model of this run."""
    result: ValidationResult = ValidationResult()
    known: Set[str] = _scalar_names(scalar_names) | set(definitions.model_names)

    for model in definitions.models:
        for rel in model.relationships:
            if rel.type not in known:
                result.add_error(
                    "RELATIONSHIP_TARGET_MISSING",
                    f"Relationship '{rel.name}' on model '{model.name}' "
                    f"targets unknown type '{rel.type}'.",
                    {"model": model.name, "relationship": rel.name, "target": rel.type},
                )

    return result


def validate_operations(definitions: ModelDefinitions) -> ValidationResult:
    """
    Report operations whose generated names collide.

    Two operations of the same kind on one model produce the same input and
    result type names.  Two operations with the same name and kind produce
    the same root field; the compiler keeps the last one.
    """
    result: ValidationResult = ValidationResult()

    for model in definitions.models:
        kinds: List[str] = [operation_label(op.type) for op in model.operations]
        for kind in _repeated(kinds):
            result.add_warning(
                "DUPLICATE_OPERATION_KIND",
                f"Model '{model.name}' declares more than one {kind} "
                f"operation; their input and result type names collide.",
                {"model": model.name, "kind": kind},
            )

        if not model.operations:
            result.add_info(
                "MODEL_WITHOUT_OPERATIONS",
                f"Model '{model.name}' has no operations and is left out of "
                f"the example document.",
                {"model": model.name},
            )
        elif not model.properties:
            result.add_warning(
                "EMPTY_FRAGMENT",
                f"Model '{model.name}' has operations but no properties; its "
                f"document fragment has an empty selection set.",
                {"model": model.name},
            )

    return result


def validate_root_fields(definitions: ModelDefinitions) -> ValidationResult:
    """Root field names must be unique within ``Query`` and within ``Mutation``."""
    result: ValidationResult = ValidationResult()
    owners: Dict[Tuple[str, str], List[str]] = defaultdict(list)

    for model in definitions.models:
        for op in model.operations:
            root: str = "Query" if operation_kind(op.type) in QUERY_KINDS else "Mutation"
            owners[(root, operation_field_name(op.name, model.name))].append(model.name)

    for (root, field_name), models in owners.items():
        if len(models) > 1:
            result.add_warning(
                "DUPLICATE_ROOT_FIELD",
                f"Root field '{root}.{field_name}' is produced {len(models)} "
                f"times; the last definition wins.",
                {"root": root, "field": field_name, "models": models},
            )

    return result


# ---------------------------------------------------------------------------
# Composite entry point
# ---------------------------------------------------------------------------

ValidatorFn = Callable[[ModelDefinitions], ValidationResult]
ScalarAwareValidatorFn = Callable[[ModelDefinitions, Optional[Iterable[str]]], ValidationResult]

# Checks that depend on the scalar set of the session.
_SCALAR_CHECKS: List[ScalarAwareValidatorFn] = [
    validate_model_names,
    validate_relationships,
]

_CHECKS: List[ValidatorFn] = [
    validate_field_names,
    validate_operations,
    validate_root_fields,
]


def validate_full(
    definitions: ModelDefinitions,
    scalar_names: Optional[Iterable[str]] = None,
) -> ValidationResult:
    """
    **Master validation entry point.**

    Runs every semantic check and returns the merged result.  This is what
    ``graphgen.generator`` calls before compiling.

    Args:
        definitions: The parsed models.
        scalar_names: Scalar names the compilation session will resolve.
            Defaults to the built-in scalars.
    """
    logger.info("Starting semantic validation: %d model(s).", len(definitions.models))
    result: ValidationResult = ValidationResult()
    scalars: Set[str] = _scalar_names(scalar_names)

    for scalar_check in _SCALAR_CHECKS:
        logger.debug("Running check: %s", scalar_check.__name__)
        result.merge(scalar_check(definitions, scalars))

    for check in _CHECKS:
        logger.debug("Running check: %s", check.__name__)
        result.merge(check(definitions))

    if result.has_errors:
        logger.error(
            "Validation FAILED with %d error(s). %s",
            result.error_count,
            result.summary(),
        )
    else:
        logger.info("Validation PASSED. %s", result.summary())
    return result


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "ValidationIssue",
    "ValidationResult",
    "validate_model_names",
    "validate_field_names",
    "validate_relationships",
    "validate_operations",
    "validate_root_fields",
    "validate_full",
]

logger.debug("graphgen.validators loaded, %d public symbols.", len(__all__))
