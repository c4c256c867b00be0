# File: graphgen/utils.py
"""
GraphGen - Naming & Helper Functions
======================================
Pure naming-derivation functions shared by every generator, plus a few
small helpers (step timer, ordered de-duplication, indentation).

Every name the compiler emits (type names, root field names, resolver class
and method names) comes from a function in this module, so the schema, the
document and the resolver source can never disagree about a name.

Performance strategy:
- String conversions are decorated with ``@lru_cache(maxsize=None)``; the
  same model and operation names are converted many times per run.
"""

from __future__ import annotations

import functools
import logging
import re
import time
from typing import Any, Hashable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from graphgen.errors import UnsupportedOperationError
from graphgen.models import OperationKind

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("graphgen.utils")

T = TypeVar("T", bound=Hashable)

# ---------------------------------------------------------------------------
# Pre-compiled regex patterns
# ---------------------------------------------------------------------------

_CAMEL_TO_SNAKE_RE1: re.Pattern[str] = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_TO_SNAKE_RE2: re.Pattern[str] = re.compile(r"([a-z0-9])([A-Z])")
_NON_ALPHANUM_RE: re.Pattern[str] = re.compile(r"[^a-zA-Z0-9]")
_MULTI_UNDERSCORE_RE: re.Pattern[str] = re.compile(r"_{2,}")
_LEADING_TRAILING_UNDERSCORE_RE: re.Pattern[str] = re.compile(r"^_+|_+$")
_SPLIT_WORDS_RE: re.Pattern[str] = re.compile(
    r"[A-Z]?[a-z]+|[A-Z]+(?=[A-Z][a-z]|\d|\b)|[A-Z]|\d+"
)


# ---------------------------------------------------------------------------
# Cached case conversions
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def to_snake_case(name: str) -> str:
    """
    Convert any string to snake_case.

    Examples:
        >>> to_snake_case("BookService")
        'book_service'
        >>> to_snake_case("Show_getHTTPStatus")
        'show_get_http_status'
    """
    if not name:
        return ""
    s: str = _CAMEL_TO_SNAKE_RE1.sub(r"\1_\2", name)
    s = _CAMEL_TO_SNAKE_RE2.sub(r"\1_\2", s)
    s = _NON_ALPHANUM_RE.sub("_", s)
    s = _MULTI_UNDERSCORE_RE.sub("_", s)
    s = _LEADING_TRAILING_UNDERSCORE_RE.sub("", s)
    return s.lower()


@functools.lru_cache(maxsize=None)
def to_pascal_case(name: str) -> str:
    """
    Convert any string to PascalCase.

    Examples:
        >>> to_pascal_case("book-resolver")
        'BookResolver'
        >>> to_pascal_case("BookAuthorResolver")
        'BookAuthorResolver'
    """
    if not name:
        return ""
    return "".join(word.capitalize() for word in _extract_words(name))


@functools.lru_cache(maxsize=None)
def to_camel_case(name: str) -> str:
    """
    Convert any string to camelCase.

    Examples:
        >>> to_camel_case("Show-get")
        'showGet'
    """
    words: Tuple[str, ...] = _extract_words(name) if name else ()
    if not words:
        return ""
    return words[0] + "".join(w.capitalize() for w in words[1:])


@functools.lru_cache(maxsize=None)
def _extract_words(name: str) -> Tuple[str, ...]:
    """Split any casing style into a tuple of lowercase words."""
    cleaned: str = _NON_ALPHANUM_RE.sub(" ", name)
    words: List[str] = _SPLIT_WORDS_RE.findall(cleaned)
    return tuple(w.lower() for w in words if w)


def is_pascal_case(name: str) -> bool:
    return bool(name) and name[0].isupper() and "_" not in name and "-" not in name


# ---------------------------------------------------------------------------
# Operation-kind dispatch helpers
# ---------------------------------------------------------------------------


def operation_kind(value: Any) -> OperationKind:
    """
    Coerce *value* to an ``OperationKind``.

    Raises:
        UnsupportedOperationError: for anything outside the five kinds.
    """
    if isinstance(value, OperationKind):
        return value
    try:
        return OperationKind(value)
    except ValueError:
        raise UnsupportedOperationError(value) from None


def operation_label(value: Any) -> str:
    """Canonical label of an operation kind as used in type names."""
    return operation_kind(value).value


# ---------------------------------------------------------------------------
# Name derivation
# ---------------------------------------------------------------------------


def operation_type_name(model_name: str, kind: Any) -> str:
    """``Book`` + ``Show`` → ``BookShow``; the stem of input and result names."""
    return f"{model_name}{operation_label(kind)}"


def input_type_name(model_name: str, kind: Any) -> str:
    return f"{operation_type_name(model_name, kind)}Input"


def result_type_name(model_name: str, kind: Any) -> str:
    return f"{operation_type_name(model_name, kind)}Result"


def operation_field_name(operation_name: str, model_name: str) -> str:
    """Root field name: operation name followed by model name."""
    return f"{operation_name}{model_name}"


def fragment_name(model_name: str) -> str:
    return f"{model_name}Fragment"


@functools.lru_cache(maxsize=None)
def resolver_class_name(model_name: str) -> str:
    return to_pascal_case(f"{model_name}Resolver")


@functools.lru_cache(maxsize=None)
def service_class_name(model_name: str) -> str:
    return to_pascal_case(f"{model_name}Service")


@functools.lru_cache(maxsize=None)
def service_attribute_name(model_name: str) -> str:
    return to_snake_case(service_class_name(model_name))


def resolver_method_name(kind: Any, operation_name: str) -> str:
    """``Show`` + ``get`` → ``show_get``."""
    return to_snake_case(f"{operation_label(kind)}_{operation_name}")


# ---------------------------------------------------------------------------
# Collection & text helpers
# ---------------------------------------------------------------------------


def dedupe_preserving_order(items: Iterable[T]) -> List[T]:
    """Drop repeated items, keeping the first occurrence of each."""
    seen: set = set()
    result: List[T] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


def indent_lines(lines: Sequence[str], level: int = 1, size: int = 2) -> List[str]:
    """Indent a list of lines, leaving blank lines untouched."""
    prefix: str = " " * (level * size)
    return [prefix + line if line.strip() else line for line in lines]


# ---------------------------------------------------------------------------
# Timer context manager
# ---------------------------------------------------------------------------


class Timer:
    """
    Context-manager timer for profiling pipeline steps.

    Usage:
        with Timer("compile") as t:
            ...
        print(t.elapsed)
    """

    __slots__ = ("label", "start_time", "end_time", "elapsed")

    def __init__(self, label: str = "operation") -> None:
        self.label: str = label
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self.end_time = time.perf_counter()
        self.elapsed = self.end_time - self.start_time
        logger.info("Timer [%s]: %.4f seconds", self.label, self.elapsed)

    def __repr__(self) -> str:
        return f"<Timer {self.label}: {self.elapsed:.4f}s>"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "to_snake_case",
    "to_pascal_case",
    "to_camel_case",
    "is_pascal_case",
    "operation_kind",
    "operation_label",
    "operation_type_name",
    "input_type_name",
    "result_type_name",
    "operation_field_name",
    "fragment_name",
    "resolver_class_name",
    "service_class_name",
    "service_attribute_name",
    "resolver_method_name",
    "dedupe_preserving_order",
    "indent_lines",
    "Timer",
]

logger.debug("graphgen.utils loaded, %d public symbols.", len(__all__))
