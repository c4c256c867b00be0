# File: graphgen/validator_registry.py
"""
GraphGen - Validator Signature Registry
=========================================
A fixed mapping from validator kind to the code-emission rule used by the
resolver source generator.

Every entry is a callable ``(target_name, field_name, validator) -> str``
producing one Python statement that attaches the validator to a field of a
generated input type, e.g.::

    Length(3, 120)("BookCreateInput", "title")

Entries are built from a handful of parameter-shape factories; the bag of
``validator.properties`` is only read through the keys an entry names.

The registry is populated once at import time and exposed through a
read-only ``MappingProxyType``, so concurrent readers need no locking.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional, Sequence

from graphgen.errors import UnknownValidatorError

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("graphgen.validator_registry")

ValidatorEmitter = Callable[[str, str, Any], str]

_MISSING: object = object()


# ---------------------------------------------------------------------------
# Literal rendering
# ---------------------------------------------------------------------------


def _literal(value: Any) -> str:
    """Render a JSON-like value as a Python literal."""
    if value is _MISSING or value is None:
        return "None"
    return repr(value)


def _properties(validator: Any) -> Dict[str, Any]:
    return dict(getattr(validator, "properties", None) or {})


def _attach(kind: str, params: Sequence[str], target_name: str, field_name: str) -> str:
    return f"{kind}({', '.join(params)})({target_name!r}, {field_name!r})"


# ---------------------------------------------------------------------------
# Parameter-shape factories
# ---------------------------------------------------------------------------


def _no_params(kind: str) -> ValidatorEmitter:
    """Validator takes no parameters: ``IsEmpty()``."""

    def emit(target_name: str, field_name: str, validator: Any) -> str:
        return _attach(kind, (), target_name, field_name)

    return emit


def _positional(kind: str, *keys: str) -> ValidatorEmitter:
    """
    Validator takes positional parameters read from the named keys.

    Trailing parameters absent from the bag are dropped; absent parameters
    followed by present ones are emitted as ``None``.
    """

    def emit(target_name: str, field_name: str, validator: Any) -> str:
        props: Dict[str, Any] = _properties(validator)
        values: List[Any] = [props.get(key, _MISSING) for key in keys]
        while values and values[-1] is _MISSING:
            values.pop()
        return _attach(kind, [_literal(v) for v in values], target_name, field_name)

    return emit


def _options(kind: str, *leading: str) -> ValidatorEmitter:
    """
    Validator takes optional leading parameters plus an options object.

    Every key of the bag not consumed by ``leading`` is collected into one
    dict literal passed last, e.g. ``IsMobilePhone('en-GB', {'strict_mode': True})``.
    """

    def emit(target_name: str, field_name: str, validator: Any) -> str:
        props: Dict[str, Any] = _properties(validator)
        params: List[str] = []
        for key in leading:
            params.append(_literal(props.pop(key, _MISSING)))
        if props:
            params.append(_literal(props))
        while params and params[-1] == "None":
            params.pop()
        return _attach(kind, params, target_name, field_name)

    return emit


def _reference(kind: str, key: str) -> ValidatorEmitter:
    """Validator takes the name of another type, emitted as a string."""

    def emit(target_name: str, field_name: str, validator: Any) -> str:
        props: Dict[str, Any] = _properties(validator)
        ref: Any = props.get(key)
        params: List[str] = [repr(str(ref))] if ref is not None else []
        return _attach(kind, params, target_name, field_name)

    return emit


# ---------------------------------------------------------------------------
# Registry population
# ---------------------------------------------------------------------------

_NO_PARAM_KINDS: Sequence[str] = (
    "Allow",
    "ArrayNotEmpty",
    "ArrayUnique",
    "IsArray",
    "IsAscii",
    "IsBIC",
    "IsBase32",
    "IsBoolean",
    "IsBooleanString",
    "IsBtcAddress",
    "IsCreditCard",
    "IsDataURI",
    "IsDate",
    "IsDefined",
    "IsEAN",
    "IsEmpty",
    "IsEthereumAddress",
    "IsFirebasePushId",
    "IsFullWidth",
    "IsHSLColor",
    "IsHalfWidth",
    "IsHexColor",
    "IsHexadecimal",
    "IsIBAN",
    "IsISIN",
    "IsISO31661Alpha2",
    "IsISO31661Alpha3",
    "IsISRC",
    "IsInt",
    "IsJSON",
    "IsJWT",
    "IsLatLong",
    "IsLatitude",
    "IsLocale",
    "IsLongitude",
    "IsLowercase",
    "IsMagnetURI",
    "IsMilitaryTime",
    "IsMimeType",
    "IsMongoId",
    "IsMultibyte",
    "IsNegative",
    "IsNotEmpty",
    "IsObject",
    "IsOctal",
    "IsOptional",
    "IsPort",
    "IsPositive",
    "IsRFC3339",
    "IsSemVer",
    "IsString",
    "IsSurrogatePair",
    "IsUppercase",
    "IsVariableWidth",
)

_OPTIONS_KINDS: Sequence[str] = (
    "IsBase64",
    "IsCurrency",
    "IsDateString",
    "IsDecimal",
    "IsEmail",
    "IsFQDN",
    "IsISO8601",
    "IsISSN",
    "IsMACAddress",
    "IsNotEmptyObject",
    "IsNumber",
    "IsNumberString",
    "IsUrl",
)

# kind → ordered parameter keys
_POSITIONAL_KINDS: Dict[str, Sequence[str]] = {
    "ArrayContains": ("values",),
    "ArrayMaxSize": ("max",),
    "ArrayMinSize": ("min",),
    "ArrayNotContains": ("values",),
    "Contains": ("seed",),
    "Equals": ("comparison",),
    "IsAlpha": ("locale",),
    "IsAlphanumeric": ("locale",),
    "IsByteLength": ("min", "max"),
    "IsDivisibleBy": ("num",),
    "IsHash": ("algorithm",),
    "IsIP": ("version",),
    "IsISBN": ("version",),
    "IsIdentityCard": ("locale",),
    "IsIn": ("values",),
    "IsNotIn": ("values",),
    "IsPassportNumber": ("countryCode",),
    "IsPhoneNumber": ("region",),
    "IsPostalCode": ("locale",),
    "IsRgbColor": ("includePercentValues",),
    "IsUUID": ("version",),
    "Length": ("min", "max"),
    "Matches": ("pattern", "modifiers"),
    "Max": ("max",),
    "MaxDate": ("date",),
    "MaxLength": ("max",),
    "Min": ("min",),
    "MinDate": ("date",),
    "MinLength": ("min",),
    "NotContains": ("seed",),
    "NotEquals": ("comparison",),
}


def _build_registry() -> Mapping[str, ValidatorEmitter]:
    registry: Dict[str, ValidatorEmitter] = {}
    for kind in _NO_PARAM_KINDS:
        registry[kind] = _no_params(kind)
    for kind in _OPTIONS_KINDS:
        registry[kind] = _options(kind)
    for kind, keys in _POSITIONAL_KINDS.items():
        registry[kind] = _positional(kind, *keys)
    registry["IsMobilePhone"] = _options("IsMobilePhone", "locale")
    registry["IsEnum"] = _reference("IsEnum", "entity")
    registry["IsInstance"] = _reference("IsInstance", "targetType")
    return MappingProxyType(registry)


VALIDATOR_SIGNATURES: Mapping[str, ValidatorEmitter] = _build_registry()
VALIDATOR_KINDS: FrozenSet[str] = frozenset(VALIDATOR_SIGNATURES)


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def get_emitter(kind: str) -> ValidatorEmitter:
    """Return the emitter for *kind* or raise ``UnknownValidatorError``."""
    emitter: Optional[ValidatorEmitter] = VALIDATOR_SIGNATURES.get(kind)
    if emitter is None:
        raise UnknownValidatorError(kind)
    return emitter


def emit_validator(target_name: str, field_name: str, validator: Any) -> str:
    """Render the statement attaching *validator* to ``target_name.field_name``."""
    return get_emitter(validator.type)(target_name, field_name, validator)


__all__: List[str] = [
    "ValidatorEmitter",
    "VALIDATOR_SIGNATURES",
    "VALIDATOR_KINDS",
    "get_emitter",
    "emit_validator",
]

logger.debug(
    "graphgen.validator_registry loaded, %d validator kinds.", len(VALIDATOR_KINDS)
)
