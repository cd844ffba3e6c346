"""JSON token value type."""

import json
from dataclasses import dataclass
from typing import Any, Union
from ..types import TokenKind, EncodeError


@dataclass(frozen=True)
class Token:
    """
    A single JSON token.

    Structural tokens carry no value. Scalars carry the decoded Python
    value: ``str`` for strings, ``int``/``float`` for numbers, ``bool``
    for booleans and ``None`` for null.
    """

    kind: TokenKind
    value: Any = None

    @classmethod
    def string(cls, value: str) -> "Token":
        if not isinstance(value, str):
            raise EncodeError(f"string token requires str, got {type(value).__name__}")
        return cls(TokenKind.STRING, value)

    @classmethod
    def number(cls, value: Union[int, float]) -> "Token":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise EncodeError(f"number token requires int or float, got {type(value).__name__}")
        return cls(TokenKind.NUMBER, value)

    @classmethod
    def boolean(cls, value: bool) -> "Token":
        return cls(TokenKind.BOOL, bool(value))

    @classmethod
    def null(cls) -> "Token":
        return cls(TokenKind.NULL)

    def is_structural(self) -> bool:
        return self.kind in (TokenKind.BEGIN_OBJECT, TokenKind.END_OBJECT,
                             TokenKind.BEGIN_ARRAY, TokenKind.END_ARRAY)

    def to_json(self) -> str:
        """
        Render the token as JSON text.

        Returns:
            JSON text for this token

        Raises:
            EncodeError: If the token value cannot be represented in JSON
        """
        if self.is_structural():
            return self.kind.value
        if self.kind is TokenKind.NULL:
            return "null"
        if self.kind is TokenKind.BOOL:
            return "true" if self.value else "false"
        if self.kind is TokenKind.NUMBER:
            if isinstance(self.value, int):
                try:
                    return int.__repr__(self.value)
                except ValueError as e:
                    raise EncodeError(f"invalid number of {self.value.bit_length()} bits: {e}") from e
            try:
                return json.dumps(float(self.value), allow_nan=False)
            except ValueError as e:
                raise EncodeError(f"invalid number {self.value!r}: {e}") from e
        try:
            self.value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncodeError(f"string is not valid UTF-8: {e}") from e
        return json.dumps(self.value, ensure_ascii=False)

    def __str__(self) -> str:
        return self.to_json()


BEGIN_OBJECT = Token(TokenKind.BEGIN_OBJECT)
END_OBJECT = Token(TokenKind.END_OBJECT)
BEGIN_ARRAY = Token(TokenKind.BEGIN_ARRAY)
END_ARRAY = Token(TokenKind.END_ARRAY)
NULL = Token(TokenKind.NULL)
TRUE = Token(TokenKind.BOOL, True)
FALSE = Token(TokenKind.BOOL, False)
