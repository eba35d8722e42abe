"""
Binary Encoding of Knowledge Objects

This module contains the byte buffer used to ship entities and solutions
between processes, together with the registry that maps type tags back to
the classes able to decode them.

Wire conventions (little-endian):
- int: 4-byte signed integer
- double: 8-byte IEEE float
- char: 1 ASCII byte
- array: int length followed by the items
- raw: items only, the reader must know the length
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Sequence

import numpy as np

logger = logging.getLogger(__name__)

INT_DTYPE = np.dtype("<i4")
DOUBLE_DTYPE = np.dtype("<f8")


class DecodeError(ValueError):
    """Raised when a stream is truncated or malformed."""


class Encoded:
    """An append-only byte buffer with a read cursor."""

    def __init__(self, type_tag: str = "", data: bytes = b""):
        self.type_tag = type_tag
        self._buffer = bytearray(data)
        self._pos = 0

    @property
    def size(self) -> int:
        return len(self._buffer)

    @property
    def remaining(self) -> int:
        return len(self._buffer) - self._pos

    def rewind(self) -> None:
        self._pos = 0

    def data(self) -> bytes:
        return bytes(self._buffer)

    # ------------------------------------------------------------------ write

    def write_int(self, value: int) -> None:
        self._buffer += np.array(int(value), dtype=INT_DTYPE).tobytes()

    def write_double(self, value: float) -> None:
        self._buffer += np.array(float(value), dtype=DOUBLE_DTYPE).tobytes()

    def write_char(self, value: str) -> None:
        if len(value) != 1:
            raise ValueError(f"Expected a single character, got {value!r}")
        self._buffer += value.encode("ascii")

    def write_raw(self, values: Sequence[float], dtype=DOUBLE_DTYPE) -> None:
        self._buffer += np.ascontiguousarray(values, dtype=dtype).tobytes()

    def write_array(self, values: Sequence[float], dtype=DOUBLE_DTYPE) -> None:
        arr = np.ascontiguousarray(values, dtype=dtype).ravel()
        self.write_int(arr.size)
        self._buffer += arr.tobytes()

    def write_rep(self, value) -> None:
        """Write a value, choosing the representation from its Python type."""
        if isinstance(value, str):
            self.write_char(value)
        elif isinstance(value, Enum):
            self.write_int(value.value)
        elif isinstance(value, (bool, int, np.integer)):
            self.write_int(value)
        elif isinstance(value, (float, np.floating)):
            self.write_double(value)
        elif isinstance(value, (np.ndarray, list, tuple)):
            arr = np.asarray(value)
            dtype = INT_DTYPE if np.issubdtype(arr.dtype, np.integer) else DOUBLE_DTYPE
            self.write_array(arr, dtype=dtype)
        else:
            raise TypeError(f"Cannot encode value of type {type(value).__name__}")

    # ------------------------------------------------------------------- read

    def _take(self, nbytes: int) -> bytes:
        if nbytes < 0 or self._pos + nbytes > len(self._buffer):
            raise DecodeError(
                f"Truncated stream: need {nbytes} bytes at offset {self._pos}, "
                f"only {self.remaining} left"
            )
        chunk = bytes(self._buffer[self._pos : self._pos + nbytes])
        self._pos += nbytes
        return chunk

    def read_int(self) -> int:
        return int(np.frombuffer(self._take(INT_DTYPE.itemsize), dtype=INT_DTYPE)[0])

    def read_double(self) -> float:
        return float(
            np.frombuffer(self._take(DOUBLE_DTYPE.itemsize), dtype=DOUBLE_DTYPE)[0]
        )

    def read_char(self) -> str:
        try:
            return self._take(1).decode("ascii")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid character at offset {self._pos - 1}") from e

    def read_raw(self, length: int, dtype=DOUBLE_DTYPE) -> np.ndarray:
        dtype = np.dtype(dtype)
        if length < 0:
            raise DecodeError(f"Negative sequence length {length}")
        chunk = self._take(length * dtype.itemsize)
        return np.frombuffer(chunk, dtype=dtype).copy()

    def read_array(self, dtype=DOUBLE_DTYPE) -> np.ndarray:
        return self.read_raw(self.read_int(), dtype=dtype)

    # ---------------------------------------------------------------- framing

    def pack(self) -> bytes:
        """Frame the buffer as a length-prefixed type tag plus payload."""
        tag = self.type_tag.encode("utf-8")
        header = np.array(len(tag), dtype=INT_DTYPE).tobytes()
        return header + tag + bytes(self._buffer)

    @classmethod
    def unpack(cls, blob: bytes) -> "Encoded":
        if len(blob) < INT_DTYPE.itemsize:
            raise DecodeError("Stream too short to hold a type tag")
        tag_len = int(np.frombuffer(blob[: INT_DTYPE.itemsize], dtype=INT_DTYPE)[0])
        start = INT_DTYPE.itemsize
        if tag_len < 0 or start + tag_len > len(blob):
            raise DecodeError(f"Malformed type tag length {tag_len}")
        try:
            tag = blob[start : start + tag_len].decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError("Type tag is not valid UTF-8") from e
        return cls(tag, blob[start + tag_len :])

    def __repr__(self):
        return f"Encoded(type_tag={self.type_tag!r}, size={self.size})"


_KNOWLEDGE_TYPES: Dict[str, type] = {}


def register_knowledge_type(type_tag: str, cls: type) -> None:
    _KNOWLEDGE_TYPES[type_tag] = cls


def get_knowledge_type(type_tag: str) -> type:
    if type_tag not in _KNOWLEDGE_TYPES:
        raise ValueError(f"No knowledge type registered for tag '{type_tag}'")
    return _KNOWLEDGE_TYPES[type_tag]


def decode_knowledge(encoded: Encoded):
    """Decode an object using the class registered for its type tag."""
    cls = get_knowledge_type(encoded.type_tag)
    logger.debug(f"Decoding {encoded.type_tag} from {encoded.size} bytes")
    return cls.decode(encoded)
