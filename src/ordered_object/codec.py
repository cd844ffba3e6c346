"""Generic deterministic value marshalling on top of the token encoder."""

import dataclasses
from collections.abc import Mapping
from contextlib import contextmanager
from typing import Any, List, Optional, Set, Tuple
from .io.token import Token, BEGIN_OBJECT, END_OBJECT, BEGIN_ARRAY, END_ARRAY, NULL
from .io.encoder import TokenEncoder
from .types import OrderedMarshaler, EncodeError


def marshal_value(encoder: TokenEncoder, value: Any) -> None:
    """
    Write a single value to the encoder.

    Values implementing OrderedMarshaler write themselves. Everything
    else goes through the generic marshaller, which always runs in
    deterministic mode: plain mappings are written with their keys
    sorted, so embedded dicts produce the same bytes on every run.

    Args:
        encoder: Token encoder to write to
        value: Value to marshal

    Raises:
        EncodeError: If the value (or something inside it) is not supported
    """
    _marshal(encoder, value, set())


def dumps(value: Any, indent: Optional[int] = None) -> str:
    """
    Encode a value as JSON text using the same rules as ordered objects.

    Args:
        value: Value to encode
        indent: Spaces per nesting level, or None for compact output

    Returns:
        JSON text
    """
    encoder = TokenEncoder(indent=indent)
    try:
        marshal_value(encoder, value)
    except RecursionError as e:
        raise EncodeError("value nested too deeply or self-referencing") from e
    return encoder.getvalue()


def _marshal(encoder: TokenEncoder, value: Any, active: Set[int]) -> None:
    if isinstance(value, OrderedMarshaler):
        value.marshal_to(encoder)
    elif value is None:
        encoder.write_token(NULL)
    elif isinstance(value, bool):
        encoder.write_token(Token.boolean(value))
    elif isinstance(value, (int, float)):
        encoder.write_token(Token.number(value))
    elif isinstance(value, str):
        encoder.write_token(Token.string(value))
    elif isinstance(value, Mapping):
        with _guard(value, active):
            encoder.write_token(BEGIN_OBJECT)
            for name, item in _sorted_items(value):
                encoder.write_token(Token.string(name))
                _marshal(encoder, item, active)
            encoder.write_token(END_OBJECT)
    elif isinstance(value, (list, tuple)):
        with _guard(value, active):
            encoder.write_token(BEGIN_ARRAY)
            for item in value:
                _marshal(encoder, item, active)
            encoder.write_token(END_ARRAY)
    elif dataclasses.is_dataclass(value) and not isinstance(value, type):
        # Declared field order, like a record; only mappings are sorted.
        with _guard(value, active):
            encoder.write_token(BEGIN_OBJECT)
            for field in dataclasses.fields(value):
                encoder.write_token(Token.string(field.name))
                _marshal(encoder, getattr(value, field.name), active)
            encoder.write_token(END_OBJECT)
    else:
        raise EncodeError(f"cannot marshal value of type {type(value).__name__}")


def _sorted_items(mapping: Mapping) -> List[Tuple[str, Any]]:
    items = {}
    for key, item in mapping.items():
        name = _key_to_name(key)
        if name in items:
            raise EncodeError(f"duplicate object name {name!r}")
        items[name] = item
    return sorted(items.items(), key=lambda pair: pair[0])


def _key_to_name(key: Any) -> str:
    """Convert a mapping key to an object name the way the json module does."""
    if isinstance(key, str):
        return key
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, (int, float)):
        return Token.number(key).to_json()
    raise EncodeError(f"object keys must be str, int, float, bool or None, not {type(key).__name__}")


@contextmanager
def _guard(value: Any, active: Set[int]):
    """Track containers being written to detect circular references."""
    ident = id(value)
    if ident in active:
        raise EncodeError("circular reference detected")
    active.add(ident)
    try:
        yield
    finally:
        active.discard(ident)
