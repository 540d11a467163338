"""Byte buffer values for strcalc strings."""

from __future__ import annotations

# Repetition counts wrap like an unsigned 64-bit accumulator.
_UNSIGNED_MASK = (1 << 64) - 1


class Buffer:
    """An immutable, length-tagged byte string.

    Every operation returns a new Buffer; operands are never modified, so no
    two Buffers can observe each other's storage.
    """

    __slots__ = ("_data",)

    def __init__(self, data: bytes = b"") -> None:
        self._data = bytes(data)

    @classmethod
    def new(cls, data: bytes, length: int) -> Buffer:
        """Copy the first *length* bytes of *data* into a new Buffer."""
        if length < 0 or length > len(data):
            raise ValueError(f"length {length} out of range for {len(data)} bytes")
        return cls(data[:length])

    def duplicate(self) -> Buffer:
        return Buffer(self._data)

    def concat(self, other: Buffer) -> Buffer:
        return Buffer(self._data + other._data)

    def repeat(self, count: int) -> Buffer:
        """Return this buffer repeated *count* times (empty when count is 0)."""
        if count < 0:
            raise ValueError("repeat count must be unsigned")
        return Buffer(self._data * count)

    def as_unsigned(self) -> int:
        """Interpret the bytes as a base-10 unsigned integer.

        Accumulates left to right and wraps modulo 2**64. Only digit bytes
        have a defined meaning.
        """
        num = 0
        for byte in self._data:
            num = (num * 10 + (byte - 0x30)) & _UNSIGNED_MASK
        return num

    def decode(self) -> str:
        return self._data.decode("ascii", errors="replace")

    def __bytes__(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Buffer):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"Buffer({self._data!r})"
