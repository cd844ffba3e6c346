"""Streaming JSON token decoder."""

import json
import logging
from dataclasses import dataclass
from typing import Any, BinaryIO, Callable, Dict, List, Optional, TextIO, Tuple, Union
from .token import Token
from ..types import TokenKind, TokenSyntaxError

PairsHook = Callable[[List[Tuple[str, Any]]], Any]

_WHITESPACE = " \t\n\r"

_KIND_BY_CHAR = {
    "{": TokenKind.BEGIN_OBJECT,
    "}": TokenKind.END_OBJECT,
    "[": TokenKind.BEGIN_ARRAY,
    "]": TokenKind.END_ARRAY,
    '"': TokenKind.STRING,
    "t": TokenKind.BOOL,
    "f": TokenKind.BOOL,
    "n": TokenKind.NULL,
    "-": TokenKind.NUMBER,
}
_KIND_BY_CHAR.update({digit: TokenKind.NUMBER for digit in "0123456789"})


class _NonStandardConstant(ValueError):
    pass


def _reject_constant(name: str) -> Any:
    raise _NonStandardConstant(f"{name} is not valid JSON")


@dataclass
class _Frame:
    is_object: bool
    count: int = 0

    def separator(self) -> Optional[str]:
        if self.is_object and self.count % 2 == 1:
            return ":"
        return "," if self.count > 0 else None


class TokenDecoder:
    """
    Incremental JSON reader working one token at a time.

    The decoder tracks nesting and consumes ',' and ':' separators on its
    own. It does not check which token kind sits in an object name
    position; that is left to the caller reading the object.
    """

    def __init__(self, source: Union[str, bytes, bytearray, TextIO, BinaryIO],
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the token decoder.

        Args:
            source: JSON text, UTF-8 bytes, or a readable stream (read fully)
            logger: Optional logger instance

        Raises:
            TokenSyntaxError: If byte input is not valid UTF-8
        """
        self.logger = logger or logging.getLogger(__name__)
        if hasattr(source, "read"):
            source = source.read()
        if isinstance(source, (bytes, bytearray)):
            try:
                source = bytes(source).decode("utf-8")
            except UnicodeDecodeError as e:
                raise TokenSyntaxError(f"input is not valid UTF-8: {e.reason}", e.start) from e
        if not isinstance(source, str):
            raise TypeError(f"cannot decode JSON from {type(source).__name__}")

        self._text = source[1:] if source.startswith("\ufeff") else source
        self._pos = 0
        self._ready = False
        self._stack: List[_Frame] = []
        self._json_decoders: Dict[Optional[PairsHook], json.JSONDecoder] = {}
        self.logger.debug(f"Decoding {len(self._text)} characters of JSON")

    @property
    def offset(self) -> int:
        """Character offset of the next unread input."""
        return self._pos

    @property
    def depth(self) -> int:
        """Current nesting depth."""
        return len(self._stack)

    def peek_kind(self) -> Optional[TokenKind]:
        """
        Return the kind of the next token without consuming it.

        Returns:
            The next TokenKind, or None at end of input or before an
            invalid character
        """
        char = self._next_start()
        return _KIND_BY_CHAR.get(char)

    def read_token(self) -> Token:
        """
        Consume and return the next token.

        Returns:
            The next Token

        Raises:
            TokenSyntaxError: If the input is malformed at this point
        """
        char = self._next_start()
        kind = self._expect_kind(char)

        if kind is TokenKind.BEGIN_OBJECT or kind is TokenKind.BEGIN_ARRAY:
            self._pos += 1
            self._ready = False
            self._stack.append(_Frame(is_object=kind is TokenKind.BEGIN_OBJECT))
            return Token(kind)

        if kind is TokenKind.END_OBJECT or kind is TokenKind.END_ARRAY:
            self._close(kind)
            return Token(kind)

        value = self._decode(self._json_decoder(None))
        return Token(kind, value)

    def read_value(self, object_pairs_hook: Optional[PairsHook] = None) -> Any:
        """
        Consume one complete JSON value and return it as Python data.

        Args:
            object_pairs_hook: Optional hook building each decoded object
                from its (key, value) pairs, as in ``json.loads``

        Returns:
            The decoded value

        Raises:
            TokenSyntaxError: If the value is malformed
        """
        char = self._next_start()
        kind = self._expect_kind(char)
        if kind is TokenKind.END_OBJECT or kind is TokenKind.END_ARRAY:
            raise TokenSyntaxError(f"expected value, found {char!r}", self._pos)
        return self._decode(self._json_decoder(object_pairs_hook))

    def at_end(self) -> bool:
        """Whether only whitespace remains and no container is open."""
        self._skip_whitespace()
        return not self._stack and self._pos >= len(self._text)

    def _next_start(self) -> str:
        if self._ready:
            return self._char()

        self._skip_whitespace()
        char = self._char()
        if self._stack and char not in ("}", "]"):
            separator = self._stack[-1].separator()
            if separator is not None:
                if char != separator:
                    found = repr(char) if char else "end of input"
                    raise TokenSyntaxError(f"expected {separator!r}, found {found}", self._pos)
                self._pos += 1
                self._skip_whitespace()
                char = self._char()
                if char in ("}", "]"):
                    raise TokenSyntaxError(f"unexpected {char!r} after {separator!r}", self._pos)
        self._ready = True
        return char

    def _expect_kind(self, char: str) -> TokenKind:
        if not char:
            raise TokenSyntaxError("unexpected end of input", self._pos)
        kind = _KIND_BY_CHAR.get(char)
        if kind is None:
            raise TokenSyntaxError(f"invalid character {char!r}", self._pos)
        return kind

    def _close(self, kind: TokenKind) -> None:
        if not self._stack:
            raise TokenSyntaxError(f"unexpected {kind} at top level", self._pos)
        frame = self._stack[-1]
        if frame.is_object != (kind is TokenKind.END_OBJECT):
            raise TokenSyntaxError(f"mismatched closing {kind}", self._pos)
        if frame.is_object and frame.count % 2 == 1:
            raise TokenSyntaxError("expected ':' after object name", self._pos)
        self._stack.pop()
        self._pos += 1
        self._value_done()

    def _decode(self, decoder: json.JSONDecoder) -> Any:
        try:
            value, end = decoder.raw_decode(self._text, self._pos)
        except json.JSONDecodeError as e:
            raise TokenSyntaxError(e.msg, e.pos) from e
        except _NonStandardConstant as e:
            raise TokenSyntaxError(str(e), self._pos) from e
        except RecursionError as e:
            raise TokenSyntaxError("value nested too deeply", self._pos) from e
        except ValueError as e:
            raise TokenSyntaxError(str(e), self._pos) from e
        self._pos = end
        self._value_done()
        return value

    def _json_decoder(self, hook: Optional[PairsHook]) -> json.JSONDecoder:
        decoder = self._json_decoders.get(hook)
        if decoder is None:
            decoder = json.JSONDecoder(object_pairs_hook=hook, parse_constant=_reject_constant)
            self._json_decoders[hook] = decoder
        return decoder

    def _value_done(self) -> None:
        self._ready = False
        if self._stack:
            self._stack[-1].count += 1

    def _skip_whitespace(self) -> None:
        text = self._text
        pos = self._pos
        while pos < len(text) and text[pos] in _WHITESPACE:
            pos += 1
        self._pos = pos

    def _char(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""
