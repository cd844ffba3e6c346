"""Streaming JSON token encoder."""

import io
import logging
from dataclasses import dataclass
from typing import List, Optional, TextIO
from .token import Token
from ..types import TokenKind, EncodeError


@dataclass
class _Frame:
    is_object: bool
    count: int = 0


class TokenEncoder:
    """
    Incremental JSON writer working one token at a time.

    Separators between values and between object names and values are
    inserted from the encoder's nesting state, so callers only write
    the tokens themselves.
    """

    def __init__(self, sink: Optional[TextIO] = None, indent: Optional[int] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the token encoder.

        Args:
            sink: Text stream to write to (defaults to an in-memory buffer)
            indent: Spaces per nesting level, or None for compact output
            logger: Optional logger instance
        """
        if indent is not None and indent < 0:
            raise ValueError("indent must be non-negative")
        self.sink = sink if sink is not None else io.StringIO()
        self.indent = indent
        self.logger = logger or logging.getLogger(__name__)
        self._stack: List[_Frame] = []
        self._top_level_count = 0

    @property
    def depth(self) -> int:
        """Current nesting depth."""
        return len(self._stack)

    def write_token(self, token: Token) -> None:
        """
        Append one token to the output.

        Args:
            token: Token to write

        Raises:
            EncodeError: If the token is not valid at this position
        """
        if token.kind in (TokenKind.END_OBJECT, TokenKind.END_ARRAY):
            self._write_closer(token)
            return

        frame = self._stack[-1] if self._stack else None
        if frame is not None and frame.is_object and frame.count % 2 == 0 \
                and token.kind is not TokenKind.STRING:
            raise EncodeError(f"object names must be strings, got {token.kind}")

        text = token.to_json()
        self.sink.write(self._separator(frame) + text)

        if token.kind is TokenKind.BEGIN_OBJECT:
            self._stack.append(_Frame(is_object=True))
        elif token.kind is TokenKind.BEGIN_ARRAY:
            self._stack.append(_Frame(is_object=False))
        else:
            self._value_done()

    def getvalue(self) -> str:
        """Return everything written so far (in-memory sinks only)."""
        if not hasattr(self.sink, "getvalue"):
            raise TypeError("sink does not support getvalue()")
        return self.sink.getvalue()

    def _write_closer(self, token: Token) -> None:
        if not self._stack:
            raise EncodeError(f"unexpected {token.kind} at top level")
        frame = self._stack[-1]
        if token.kind is TokenKind.END_OBJECT:
            if not frame.is_object:
                raise EncodeError("cannot close an array with '}'")
            if frame.count % 2 == 1:
                raise EncodeError("object name has no value")
        elif frame.is_object:
            raise EncodeError("cannot close an object with ']'")

        self._stack.pop()
        if self.indent is not None and frame.count > 0:
            self.sink.write(self._newline())
        self.sink.write(token.kind.value)
        self._value_done()
        if not self._stack:
            self.logger.debug(f"Finished top-level value #{self._top_level_count}")

    def _separator(self, frame: Optional[_Frame]) -> str:
        if frame is None:
            return "\n" if self._top_level_count > 0 else ""
        if frame.is_object and frame.count % 2 == 1:
            return ":" if self.indent is None else ": "
        separator = "," if frame.count > 0 else ""
        if self.indent is not None:
            separator += self._newline()
        return separator

    def _newline(self) -> str:
        return "\n" + " " * (self.indent * len(self._stack))

    def _value_done(self) -> None:
        if self._stack:
            self._stack[-1].count += 1
        else:
            self._top_level_count += 1
