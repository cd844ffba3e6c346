"""
Ordered Object - insertion-ordered JSON objects.

A string-keyed container that keeps keys in the order they were first
inserted, with a streaming JSON codec that writes and reads objects in
that same order.
"""

from .ordered_object import OrderedObject, new_object, from_map, from_json
from .models import Entry
from .codec import marshal_value, dumps
from .io import Token, TokenEncoder, TokenDecoder
from .types import (
    TokenKind,
    ErrorType,
    OrderedMarshaler,
    OrderedObjectError,
    DecodeError,
    EncodeError,
    ExpectedObjectStartError,
    ExpectedStringKeyError,
    TokenSyntaxError,
)

__version__ = "1.0.0"
__all__ = [
    "OrderedObject",
    "new_object",
    "from_map",
    "from_json",
    "Entry",
    "marshal_value",
    "dumps",
    "Token",
    "TokenEncoder",
    "TokenDecoder",
    "TokenKind",
    "ErrorType",
    "OrderedMarshaler",
    "OrderedObjectError",
    "DecodeError",
    "EncodeError",
    "ExpectedObjectStartError",
    "ExpectedStringKeyError",
    "TokenSyntaxError",
]
