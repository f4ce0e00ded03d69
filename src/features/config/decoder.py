"""TOML decoding into caller-supplied target types."""

import tomllib
import types
from collections.abc import Mapping
from enum import Enum
from typing import (
    Annotated,
    Any,
    Literal,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from pydantic import BaseModel, TypeAdapter, ValidationError
from typing_extensions import is_typeddict

from src.features.config.constants import OP_DECODE, PAYLOAD_ENCODING
from src.features.config.errors import ConfigParseError


T = TypeVar("T")

# Zero values for scalar types; bool precedes int because it subclasses int
SCALAR_ZERO_VALUES: dict[type, object] = {
    bool: False,
    int: 0,
    float: 0.0,
    str: "",
    bytes: b"",
}


def decode(data: bytes, target: type[T]) -> T:
    """Decode a TOML payload into an instance of ``target``.

    The target may be anything pydantic can validate into: a ``BaseModel``
    subclass, a ``TypedDict`` or a mapping type such as ``dict``. Its schema is
    never inspected here beyond building zero values.

    Validation is strict: a TOML value must already have the field's type,
    so ``port = "8080"`` does not fill an ``int`` field and ``8080.0`` does
    not fill one either.

    An empty payload is a valid configuration and yields the target's zero
    value: declared defaults where present, otherwise ``0``, ``""``,
    ``False``, empty containers and nested zero values. String values are
    passed through as decoded, with no normalization.

    Args:
        data: Raw UTF-8 TOML bytes.
        target: Type to validate the parsed document into.

    Returns:
        The decoded configuration.

    Raises:
        ConfigParseError: If the payload is not UTF-8, is not valid TOML, or
            does not fit the target type.
    """
    document: object = _parse_toml(data)
    if not document:
        document = zero_value(target)

    try:
        return TypeAdapter(target).validate_python(document, strict=True)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(loc) for loc in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        summary = "; ".join(f"{err['loc']}: {err['msg']}" for err in errors)
        raise ConfigParseError(summary, OP_DECODE, errors=errors) from e


def zero_value(annotation: Any) -> Any:
    """Build the zero-valued input for ``annotation``.

    Models and TypedDicts become mappings holding zero values for their
    required fields only, so declared defaults still apply on validation.
    Optional types are ``None``; enums take their first member and
    literals their first value. Unknown types yield ``None``.

    Args:
        annotation: Target type or field annotation.

    Returns:
        Python data that validates into the zero value of ``annotation``.
    """
    origin = get_origin(annotation)

    if origin is Annotated:
        return zero_value(get_args(annotation)[0])
    if origin is Literal:
        return get_args(annotation)[0]
    if origin is Union or origin is types.UnionType:
        args = get_args(annotation)
        if type(None) in args:
            return None
        return zero_value(args[0])

    container = origin or annotation
    if not isinstance(container, type):
        return None

    if issubclass(container, BaseModel):
        return {
            field.alias or name: zero_value(field.annotation)
            for name, field in container.model_fields.items()
            if field.is_required()
        }

    if is_typeddict(container):
        hints = get_type_hints(container, include_extras=True)
        return {key: zero_value(hints[key]) for key in container.__required_keys__}

    if issubclass(container, Enum):
        return next(iter(container))

    for scalar, zero in SCALAR_ZERO_VALUES.items():
        if issubclass(container, scalar):
            return zero

    if issubclass(container, Mapping):
        return {}
    if issubclass(container, (list, tuple, set, frozenset)):
        return container()
    return None


def _parse_toml(data: bytes) -> dict[str, object]:
    """Parse raw bytes into a TOML document.

    Raises:
        ConfigParseError: On invalid UTF-8 or TOML syntax errors.
    """
    try:
        text = data.decode(PAYLOAD_ENCODING)
    except UnicodeDecodeError as e:
        msg = f"payload is not valid UTF-8: {e}"
        raise ConfigParseError(msg, OP_DECODE) from e

    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        # lineno/colno are only present on newer interpreters
        raise ConfigParseError(
            str(e),
            OP_DECODE,
            line=getattr(e, "lineno", None),
            column=getattr(e, "colno", None),
        ) from e
