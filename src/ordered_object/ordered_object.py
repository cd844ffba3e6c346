"""Ordered JSON object implementation."""

import io
import logging
from typing import (
    Any, BinaryIO, Callable, Dict, Generic, Iterable, Iterator, List,
    Mapping, Optional, TextIO, Tuple, TypeVar, Union
)
from .codec import marshal_value
from .io.decoder import TokenDecoder
from .io.encoder import TokenEncoder
from .io.token import Token, BEGIN_OBJECT, END_OBJECT
from .models import Entry
from .types import (
    OrderedMarshaler,
    OrderedObjectError,
    DecodeError,
    EncodeError,
    ExpectedObjectStartError,
    ExpectedStringKeyError,
    TokenSyntaxError,
    TokenKind,
    ErrorType
)

V = TypeVar("V")

JSONInput = Union[str, bytes, bytearray, TextIO, BinaryIO]

logger = logging.getLogger(__name__)


class OrderedObject(OrderedMarshaler, Generic[V]):
    """
    String-keyed container that keeps keys in insertion order.

    Updating an existing key keeps its position; deleting a key closes
    the gap. The same order is used for iteration and for JSON output.

    Lookups are a linear scan over the entries. Objects are expected to
    stay small (a few hundred keys at most), appending is the common
    case, and there is no side index to keep in step on delete.

    Not safe for concurrent mutation; mutating an object from inside its
    own ``for_each`` callback is undefined.
    """

    def __init__(self, capacity: int = 0,
                 value_decoder: Optional[Callable[[Any], V]] = None):
        """
        Initialize an empty ordered object.

        Args:
            capacity: Expected number of keys (a sizing hint only)
            value_decoder: Optional callable turning each decoded JSON value
                into a V, e.g. ``lambda data: User(**data)``
        """
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self._entries: List[Entry[V]] = []
        self._capacity = capacity
        self.value_decoder = value_decoder

    @classmethod
    def from_map(cls, mapping: Mapping[str, V]) -> "OrderedObject[V]":
        """
        Create an ordered object from a mapping.

        Keys are inserted in the mapping's iteration order.
        """
        obj = cls(capacity=len(mapping))
        for key, value in mapping.items():
            obj.set(key, value)
        return obj

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, V]]) -> "OrderedObject[V]":
        """Create an ordered object from (key, value) pairs; a repeated key keeps its first position."""
        obj = cls()
        for key, value in pairs:
            obj.set(key, value)
        return obj

    @classmethod
    def from_json(cls, data: JSONInput, value_decoder: Optional[Callable[[Any], V]] = None,
                  nested_ordered: bool = False) -> "OrderedObject[V]":
        """
        Parse a JSON object into a new ordered object.

        Args:
            data: JSON text, UTF-8 bytes or a readable stream
            value_decoder: Optional callable converting each decoded value
            nested_ordered: Decode nested objects as OrderedObject too

        Returns:
            OrderedObject with keys in source order

        Raises:
            DecodeError: If the input is not a valid JSON object
        """
        obj = cls(value_decoder=value_decoder)
        try:
            obj.unmarshal(data, nested_ordered=nested_ordered)
        except (OrderedObjectError, ValueError, TypeError) as e:
            error_type = e.error_type if isinstance(e, OrderedObjectError) else ErrorType.VALUE
            raise DecodeError(f"failed to unmarshal JSON: {e}", error_type, context=e) from e
        return obj

    @property
    def capacity(self) -> int:
        """Sizing hint given at construction, never less than the current length."""
        return max(self._capacity, len(self._entries))

    def _find_key_index(self, key: str) -> int:
        for index, entry in enumerate(self._entries):
            if entry.key == key:
                return index
        return -1

    def set(self, key: str, value: V) -> "OrderedObject[V]":
        """
        Set the value for a key.

        An existing key is updated in place; a new key is appended.

        Returns:
            This object, for chaining
        """
        if not isinstance(key, str):
            raise TypeError(f"keys must be str, not {type(key).__name__}")
        index = self._find_key_index(key)
        if index >= 0:
            self._entries[index].value = value
        else:
            self._entries.append(Entry(key, value))
        return self

    def get(self, key: str) -> Tuple[Optional[V], bool]:
        """
        Look up a key.

        Returns:
            Tuple of (value, True) if present, otherwise (None, False)
        """
        index = self._find_key_index(key)
        if index >= 0:
            return self._entries[index].value, True
        return None, False

    def has(self, key: str) -> bool:
        return self._find_key_index(key) >= 0

    def delete(self, key: str) -> "OrderedObject[V]":
        """
        Remove a key, shifting later entries forward. Missing keys are ignored.

        Returns:
            This object, for chaining
        """
        index = self._find_key_index(key)
        if index >= 0:
            del self._entries[index]
        return self

    def length(self) -> int:
        return len(self._entries)

    def keys(self) -> List[str]:
        return [entry.key for entry in self._entries]

    def values(self) -> List[V]:
        return [entry.value for entry in self._entries]

    def entries(self) -> List[Entry[V]]:
        """Return copies of all entries in order."""
        return [entry.copy() for entry in self._entries]

    def for_each(self, fn: Callable[[str, V], Any]) -> None:
        """Call fn(key, value) for every entry in order."""
        for entry in self._entries:
            fn(entry.key, entry.value)

    def clone(self) -> "OrderedObject[V]":
        """
        Create a shallow copy.

        The entry sequence is copied, so set/delete on the clone never
        affect this object. Values themselves are shared, not copied.
        """
        clone = type(self)(capacity=self._capacity, value_decoder=self.value_decoder)
        clone._entries = [entry.copy() for entry in self._entries]
        return clone

    def to_map(self) -> Dict[str, V]:
        """Return a new plain dict with all entries."""
        return {entry.key: entry.value for entry in self._entries}

    def marshal(self, indent: Optional[int] = None) -> bytes:
        """
        Encode the object as UTF-8 JSON bytes, keys in insertion order.

        Args:
            indent: Spaces per nesting level, or None for compact output

        Raises:
            EncodeError: If a value cannot be encoded
        """
        buffer = io.StringIO()
        encoder = TokenEncoder(buffer, indent=indent)
        try:
            self.marshal_to(encoder)
        except RecursionError as e:
            raise EncodeError("object nested too deeply or self-referencing") from e
        return buffer.getvalue().encode("utf-8")

    def to_json(self, indent: Optional[int] = None) -> str:
        return self.marshal(indent=indent).decode("utf-8")

    def marshal_to(self, encoder: TokenEncoder) -> None:
        """
        Write the object to a token encoder.

        Each value that is itself an ordered marshaler writes itself;
        other values go through the deterministic generic marshaller.
        """
        encoder.write_token(BEGIN_OBJECT)
        for entry in self._entries:
            encoder.write_token(Token.string(entry.key))
            marshal_value(encoder, entry.value)
        encoder.write_token(END_OBJECT)

    def unmarshal(self, data: JSONInput, nested_ordered: bool = False) -> None:
        """
        Replace the contents of this object with a decoded JSON object.

        Args:
            data: JSON text, UTF-8 bytes or a readable stream
            nested_ordered: Decode nested objects as OrderedObject too

        Raises:
            DecodeError: If the input is not a single valid JSON object
        """
        decoder = TokenDecoder(data)
        self.unmarshal_from(decoder, nested_ordered=nested_ordered)
        if not decoder.at_end():
            self._entries = []
            raise TokenSyntaxError("unexpected data after JSON object", decoder.offset)

    def unmarshal_from(self, decoder: TokenDecoder, nested_ordered: bool = False) -> None:
        """
        Read one JSON object from a token decoder into this object.

        Keys are stored in source order. A key repeated in the input keeps
        the position of its first occurrence and the value of its last.
        On error the object is left empty and should be discarded.

        Args:
            decoder: Token decoder positioned at an object
            nested_ordered: Decode nested objects as OrderedObject too

        Raises:
            ExpectedObjectStartError: If the next token is not '{'
            ExpectedStringKeyError: If a name position holds a non-string
            TokenSyntaxError: If the JSON text is malformed
        """
        self._entries = []

        token = decoder.read_token()
        if token.kind is not TokenKind.BEGIN_OBJECT:
            raise ExpectedObjectStartError(token.kind)

        hook = _ordered_pairs_hook if nested_ordered else None
        entries: List[Entry[V]] = []
        positions: Dict[str, int] = {}
        while decoder.peek_kind() is not TokenKind.END_OBJECT:
            token = decoder.read_token()
            if token.kind is not TokenKind.STRING:
                raise ExpectedStringKeyError(token.kind)
            key = token.value

            value = decoder.read_value(object_pairs_hook=hook)
            if self.value_decoder is not None:
                value = self.value_decoder(value)

            if key in positions:
                logger.debug(f"Duplicate key {key!r} in JSON input, keeping last value")
                entries[positions[key]].value = value
            else:
                positions[key] = len(entries)
                entries.append(Entry(key, value))

        decoder.read_token()
        self._entries = entries

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __getitem__(self, key: str) -> V:
        index = self._find_key_index(key)
        if index < 0:
            raise KeyError(key)
        return self._entries[index].value

    def __setitem__(self, key: str, value: V) -> None:
        self.set(key, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedObject):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        items = ", ".join(f"{entry.key!r}: {entry.value!r}" for entry in self._entries)
        return f"OrderedObject({{{items}}})"


def _ordered_pairs_hook(pairs: List[Tuple[str, Any]]) -> "OrderedObject[Any]":
    return OrderedObject.from_pairs(pairs)


def new_object(capacity: int = 0) -> OrderedObject[Any]:
    """Create an empty ordered object."""
    return OrderedObject(capacity=capacity)


def from_map(mapping: Mapping[str, V]) -> OrderedObject[V]:
    """Create an ordered object from a mapping, in its iteration order."""
    return OrderedObject.from_map(mapping)


def from_json(data: JSONInput, value_decoder: Optional[Callable[[Any], V]] = None,
              nested_ordered: bool = False) -> OrderedObject[V]:
    """Parse a JSON object into a new ordered object, keeping source order."""
    return OrderedObject.from_json(data, value_decoder=value_decoder, nested_ordered=nested_ordered)
