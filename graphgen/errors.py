# File: graphgen/errors.py
"""
GraphGen - Compiler Errors
============================
Every failure the compiler can report.  All of them are fatal to the public
operation that detected them (``add_model``, ``finalize`` or resolver
synthesis) and propagate to the caller unchanged: there is no partial-output
mode.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence


class GraphGenError(Exception):
    """Base class for all graphgen errors."""


class UnknownTypeError(GraphGenError):
    """A property, relationship or argument names an unregistered type."""

    def __init__(self, type_name: str) -> None:
        self.type_name: str = type_name
        super().__init__(f"Unsupported type: {type_name}")


class UnsupportedOperationError(GraphGenError):
    """An operation kind outside Show / List / Create / Update / Remove."""

    def __init__(self, operation_type: Any) -> None:
        self.operation_type: Any = operation_type
        super().__init__(f"Unsupported operation type: {operation_type}")


class UnknownValidatorError(GraphGenError):
    """An argument validator names a kind absent from the signature registry."""

    def __init__(self, kind: str) -> None:
        self.kind: str = kind
        super().__init__(f"Unknown validator: {kind}")


class ModelNotFoundError(GraphGenError):
    """An operation refers to a model whose object type is not registered."""

    def __init__(self, model_name: str) -> None:
        self.model_name: str = model_name
        super().__init__(f"Model {model_name} not found")


class SessionFinalizedError(GraphGenError):
    """A model was added to a compilation session that was already finalized."""

    def __init__(self, model_name: str) -> None:
        self.model_name: str = model_name
        super().__init__(
            f"Cannot add model {model_name}: the session is already finalized"
        )


class ModelValidationError(GraphGenError):
    """
    Structural validation of the input failed.

    Carries the whole batch of field-level errors so callers can report all
    of them at once instead of fixing one at a time.
    """

    def __init__(self, errors: Sequence[Dict[str, Any]]) -> None:
        self.errors: List[Dict[str, Any]] = list(errors)
        super().__init__(self._format())

    def _format(self) -> str:
        lines: List[str] = [
            f"Model definitions are invalid ({len(self.errors)} error(s)):"
        ]
        for err in self.errors:
            loc: str = ".".join(str(part) for part in err.get("loc", ()))
            lines.append(f"  {loc or '<root>'}: {err.get('msg', '')}")
        return "\n".join(lines)


__all__: List[str] = [
    "GraphGenError",
    "UnknownTypeError",
    "UnsupportedOperationError",
    "UnknownValidatorError",
    "ModelNotFoundError",
    "SessionFinalizedError",
    "ModelValidationError",
]
