"""Entry model implementation."""

from dataclasses import dataclass
from typing import Generic, Tuple, TypeVar

V = TypeVar("V")


@dataclass
class Entry(Generic[V]):
    """
    A single key/value pair of an ordered object.

    Entries handed out by an ordered object are copies; changing one
    does not change the object it came from.
    """

    key: str
    value: V

    def copy(self) -> "Entry[V]":
        """Create a shallow copy of this entry."""
        return Entry(self.key, self.value)

    def as_tuple(self) -> Tuple[str, V]:
        return self.key, self.value
