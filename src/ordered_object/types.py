"""Core type definitions for ordered objects."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional


class TokenKind(Enum):
    """Enumeration of JSON token kinds."""
    BEGIN_OBJECT = "{"
    END_OBJECT = "}"
    BEGIN_ARRAY = "["
    END_ARRAY = "]"
    STRING = '"'
    NUMBER = "0"
    BOOL = "t"
    NULL = "n"

    def __str__(self) -> str:
        return self.value


class ErrorType(Enum):
    """Enumeration of error types."""
    EXPECTED_OBJECT_START = "expected_object_start"
    EXPECTED_STRING_KEY = "expected_string_key"
    SYNTAX = "syntax"
    VALUE = "value"
    ENCODE = "encode"


class OrderedObjectError(Exception):
    """Base exception for ordered object errors."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


class DecodeError(OrderedObjectError, ValueError):
    """Raised when JSON input cannot be decoded into an ordered object."""


class ExpectedObjectStartError(DecodeError):
    """Raised when the first token of an object is not '{'."""

    def __init__(self, kind: Optional[TokenKind]):
        super().__init__(f"expected object start, got {kind}", ErrorType.EXPECTED_OBJECT_START)
        self.kind = kind


class ExpectedStringKeyError(DecodeError):
    """Raised when an object name position holds something other than a string."""

    def __init__(self, kind: Optional[TokenKind]):
        super().__init__(f"expected string key, got {kind}", ErrorType.EXPECTED_STRING_KEY)
        self.kind = kind


class TokenSyntaxError(DecodeError):
    """Raised when the JSON text itself is malformed."""

    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} (at offset {offset})", ErrorType.SYNTAX, context={"offset": offset})
        self.offset = offset


class EncodeError(OrderedObjectError, ValueError):
    """Raised when a value or token stream cannot be encoded as JSON."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message, ErrorType.ENCODE, context)


# Abstract base classes for interfaces

class OrderedMarshaler(ABC):
    """
    A value that writes itself into a token encoder in its own order.

    Any class defining a callable ``marshal_to`` is treated as an
    ordered marshaler, whether or not it inherits from this class.
    """

    @abstractmethod
    def marshal_to(self, encoder: Any) -> None:
        """Write this value into the given token encoder."""
        pass

    @classmethod
    def __subclasshook__(cls, subclass):
        if cls is OrderedMarshaler:
            method = getattr(subclass, "marshal_to", None)
            if method is not None and callable(method):
                return True
        return NotImplemented
