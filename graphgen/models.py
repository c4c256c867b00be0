# File: graphgen/models.py
"""
GraphGen - Core Data Models
=============================
Pydantic V2 models describing the declarative model definitions fed to the
compiler, plus the generation configuration and result manifest.

These models are the structural boundary of the pipeline:

    Raw input (YAML / JSON / dict) → ``parse_models`` → ``ModelDefinitions``
    → semantic validation → compilation

Anything that gets past ``parse_models`` has the right keys, the right value
types and closed-enum values, so the compiler never partially consumes an
invalid model.  Semantic problems (unknown relationship targets, duplicate
names) are left to ``graphgen.validators`` and to the compiler itself.
"""

from __future__ import annotations

import builtins
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)

from graphgen.errors import ModelValidationError
from graphgen.validator_registry import VALIDATOR_KINDS

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("graphgen.models")

# ---------------------------------------------------------------------------
# Enums: closed sets used across the project
# ---------------------------------------------------------------------------


class ScalarType(str, Enum):
    """Built-in scalar types a property or argument may use."""

    INT = "Int"
    FLOAT = "Float"
    STRING = "String"
    BOOLEAN = "Boolean"
    ID = "ID"
    DATETIME = "DateTime"


class OperationKind(str, Enum):
    """The five operation kinds; each has its own input/output shape."""

    SHOW = "Show"
    LIST = "List"
    CREATE = "Create"
    UPDATE = "Update"
    REMOVE = "Remove"


class PermissionType(str, Enum):
    """Advisory permission effect (not interpreted by the compiler)."""

    ALLOW = "allow"
    DENY = "deny"


QUERY_KINDS: Tuple[OperationKind, ...] = (OperationKind.SHOW, OperationKind.LIST)
MUTATION_KINDS: Tuple[OperationKind, ...] = (
    OperationKind.CREATE,
    OperationKind.UPDATE,
    OperationKind.REMOVE,
)

# ---------------------------------------------------------------------------
# Shared model configuration
# ---------------------------------------------------------------------------

_SHARED_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    populate_by_name=True,
    validate_assignment=True,
    use_enum_values=True,
    frozen=False,
    extra="forbid",
)

_IDENTIFIER_PATTERN: str = r"^[A-Za-z_][A-Za-z0-9_]*$"


# ---------------------------------------------------------------------------
# Definition primitives
# ---------------------------------------------------------------------------


class Permission(BaseModel):
    """Role-based permission carried through for a downstream auth layer."""

    model_config = _SHARED_CONFIG

    role: str = Field(..., min_length=1, description="Role the rule applies to.")
    type: PermissionType = Field(..., description="allow or deny.")


class Validator(BaseModel):
    """A field-constraint rule attached to an operation argument."""

    model_config = _SHARED_CONFIG

    type: str = Field(..., min_length=1, description="Validator kind.")
    properties: Dict[str, Any] = Field(
        default_factory=dict,
        description="Kind-specific parameter bag.",
    )

    @field_validator("type")
    @classmethod
    def _known_kind(cls, v: str) -> str:
        if v not in VALIDATOR_KINDS:
            raise ValueError(f"Unknown validator kind '{v}'.")
        return v

    def __repr__(self) -> str:
        return f"<Validator {self.type} {self.properties}>"


class Argument(BaseModel):
    """An input argument declared on an operation."""

    model_config = _SHARED_CONFIG

    name: str = Field(..., pattern=_IDENTIFIER_PATTERN, description="Argument name.")
    type: ScalarType = Field(..., description="Scalar type.")
    list: bool = Field(default=False, description="Wrap the type in a list.")
    required: bool = Field(
        default=True,
        description="Non-null unless explicitly false.",
    )
    # ``list`` names a field from here on; the builtin comes from ``builtins``.
    validators: List[Validator] = Field(
        default_factory=builtins.list, description="Constraints for generated handlers."
    )


class Property(BaseModel):
    """
    A scalar field of a model.

    ``required`` defaults to True: an omitted flag yields a non-null type.
    ``unique`` and ``permissions`` are advisory and not enforced here.
    """

    model_config = _SHARED_CONFIG

    name: str = Field(..., pattern=_IDENTIFIER_PATTERN, description="Field name.")
    type: ScalarType = Field(..., description="Scalar type.")
    list: bool = Field(default=False, description="Wrap the type in a list.")
    required: bool = Field(default=True, description="Non-null unless false.")
    unique: bool = Field(default=False, description="Advisory uniqueness flag.")
    # ``list`` is shadowed by the field above.
    permissions: List[Permission] = Field(default_factory=builtins.list)

    def __repr__(self) -> str:
        return f"<Property {self.name}: {self.type}>"


class Relationship(BaseModel):
    """A reference from one model to another model (or a scalar)."""

    model_config = _SHARED_CONFIG

    name: str = Field(..., pattern=_IDENTIFIER_PATTERN, description="Field name.")
    type: str = Field(..., min_length=1, description="Target model or scalar name.")
    list: bool = Field(default=False, description="Wrap the type in a list.")
    required: bool = Field(default=True, description="Non-null unless false.")

    def __repr__(self) -> str:
        return f"<Relationship {self.name} → {self.type}>"


class Operation(BaseModel):
    """A CRUD-style operation exposed for a model."""

    model_config = _SHARED_CONFIG

    name: str = Field(..., pattern=_IDENTIFIER_PATTERN, description="Operation name.")
    type: OperationKind = Field(..., description="Operation kind.")
    arguments: List[Argument] = Field(default_factory=list)
    permissions: List[Permission] = Field(default_factory=list)

    def __repr__(self) -> str:
        return f"<Operation {self.name} ({self.type})>"


class Model(BaseModel):
    """
    A declarative entity definition.

    One ``Model`` drives: one object type, one input/result type pair per
    operation, one fragment plus operation documents, and one resolver class.
    """

    model_config = _SHARED_CONFIG

    name: str = Field(..., pattern=_IDENTIFIER_PATTERN, description="Model name.")
    properties: List[Property] = Field(
        ..., description="Scalar fields (may be empty but must be present)."
    )
    relationships: List[Relationship] = Field(default_factory=list)
    operations: List[Operation] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def property_names(self) -> List[str]:
        return [p.name for p in self.properties]

    @computed_field  # type: ignore[misc]
    @property
    def has_operations(self) -> bool:
        return len(self.operations) > 0

    def __repr__(self) -> str:
        return (
            f"<Model {self.name} "
            f"({len(self.properties)} props, {len(self.relationships)} rels, "
            f"{len(self.operations)} ops)>"
        )


class ModelDefinitions(BaseModel):
    """Root container for every model handed to one compilation run."""

    model_config = _SHARED_CONFIG

    models: List[Model] = Field(default_factory=list)

    _model_map: Dict[str, Model] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        self._model_map = {m.name: m for m in self.models}

    def get_model(self, name: str) -> Optional[Model]:
        """O(1) model lookup."""
        return self._model_map.get(name)

    @computed_field  # type: ignore[misc]
    @property
    def model_names(self) -> List[str]:
        return [m.name for m in self.models]

    def __repr__(self) -> str:
        return f"<ModelDefinitions {len(self.models)} models>"


# ---------------------------------------------------------------------------
# Generation configuration
# ---------------------------------------------------------------------------


class GenerationConfig(BaseModel):
    """Settings that shape the generated handler source."""

    model_config = _SHARED_CONFIG

    project_name: str = Field(default="graph", min_length=1, max_length=128)
    service_package: str = Field(
        default="services",
        min_length=1,
        description="Package the generated resolvers import services from.",
    )
    validator_module: str = Field(
        default="validation",
        min_length=1,
        description="Module the generated validator calls are imported from.",
    )
    format_source: bool = Field(
        default=True, description="Run generated Python through black."
    )
    line_length: int = Field(default=99, ge=40, le=200)
    strict_validation: bool = Field(
        default=True, description="Abort generation on semantic errors."
    )
    fail_on_warnings: bool = Field(
        default=False, description="Treat semantic warnings as errors."
    )


# ---------------------------------------------------------------------------
# Generation result manifest
# ---------------------------------------------------------------------------


class GeneratedArtifact(BaseModel):
    """A single text artifact produced by a compilation run."""

    model_config = _SHARED_CONFIG

    name: str = Field(..., min_length=1, description="Artifact file name.")
    content: str = Field(..., description="Full artifact text.")
    line_count: int = Field(default=0, ge=0)
    size_bytes: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _compute_metrics(self) -> "GeneratedArtifact":
        object.__setattr__(
            self,
            "line_count",
            self.content.count("\n")
            + (1 if self.content and not self.content.endswith("\n") else 0),
        )
        object.__setattr__(self, "size_bytes", len(self.content.encode("utf-8")))
        return self


class GenerationResult(BaseModel):
    """Manifest of every artifact produced by one run."""

    model_config = _SHARED_CONFIG

    artifacts: List[GeneratedArtifact] = Field(default_factory=list)
    success: bool = Field(default=True)
    errors: List[str] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def total_lines(self) -> int:
        return sum(a.line_count for a in self.artifacts)

    def add_artifact(self, name: str, content: str) -> None:
        self.artifacts.append(GeneratedArtifact(name=name, content=content))

    def get(self, name: str) -> Optional[str]:
        for artifact in self.artifacts:
            if artifact.name == name:
                return artifact.content
        return None

    def __repr__(self) -> str:
        return (
            f"<GenerationResult {len(self.artifacts)} artifacts, "
            f"{'OK' if self.success else 'FAILED'}>"
        )


# ---------------------------------------------------------------------------
# Parsing helpers: the structural validation boundary
# ---------------------------------------------------------------------------


def _error_batch(exc: ValidationError) -> List[Dict[str, Any]]:
    return [
        {"loc": tuple(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


def parse_models(
    raw: Union[List[Any], Dict[str, Any]],
) -> Tuple[ModelDefinitions, GenerationConfig]:
    """
    Parse raw data into validated definitions and configuration.

    Accepts either a bare list of model mappings or a mapping with a
    ``models`` key and an optional ``config`` key.

    Raises:
        ModelValidationError: with every field-level error found.
    """
    config_data: Dict[str, Any] = {}
    if isinstance(raw, list):
        models_data: Any = raw
    elif isinstance(raw, dict):
        if "models" not in raw:
            raise ModelValidationError(
                [{"loc": ("models",), "msg": "Field required", "type": "missing"}]
            )
        models_data = raw["models"]
        config_data = raw.get("config") or {}
    else:
        raise ModelValidationError(
            [
                {
                    "loc": (),
                    "msg": f"Expected a list or mapping, got {type(raw).__name__}",
                    "type": "type_error",
                }
            ]
        )

    errors: List[Dict[str, Any]] = []
    definitions: Optional[ModelDefinitions] = None
    config: Optional[GenerationConfig] = None

    try:
        definitions = ModelDefinitions.model_validate({"models": models_data})
    except ValidationError as exc:
        errors.extend(_error_batch(exc))

    try:
        config = GenerationConfig.model_validate(config_data)
    except ValidationError as exc:
        errors.extend(
            {**err, "loc": ("config",) + err["loc"]} for err in _error_batch(exc)
        )

    if errors:
        logger.error("Structural validation failed with %d error(s).", len(errors))
        raise ModelValidationError(errors)

    assert definitions is not None and config is not None
    logger.debug("Parsed %d model definition(s).", len(definitions.models))
    return definitions, config


def parse_model_text(text: str) -> Tuple[ModelDefinitions, GenerationConfig]:
    """
    Parse YAML (or JSON, which is a YAML subset) text into definitions.

    Raises:
        ModelValidationError: if the text cannot be parsed or is invalid.
    """
    try:
        data: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ModelValidationError(
            [{"loc": (), "msg": f"Invalid YAML: {exc}", "type": "yaml_error"}]
        ) from exc
    return parse_models(data)


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "ScalarType",
    "OperationKind",
    "PermissionType",
    "QUERY_KINDS",
    "MUTATION_KINDS",
    "Permission",
    "Validator",
    "Argument",
    "Property",
    "Relationship",
    "Operation",
    "Model",
    "ModelDefinitions",
    "GenerationConfig",
    "GeneratedArtifact",
    "GenerationResult",
    "parse_models",
    "parse_model_text",
]

logger.debug("graphgen.models loaded, %d public symbols.", len(__all__))
