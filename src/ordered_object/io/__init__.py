"""Token-level JSON I/O for ordered objects."""

from .token import Token
from .encoder import TokenEncoder
from .decoder import TokenDecoder

__all__ = ["Token", "TokenEncoder", "TokenDecoder"]
