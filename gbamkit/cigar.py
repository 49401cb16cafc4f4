"""CIGAR operations as stored in BAM/GBAM records."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Iterable, Iterator

_OP_CHARS = "MIDNSHP=X"
_REFERENCE_CONSUMING = frozenset({0, 2, 3, 7, 8})
_READ_CONSUMING = frozenset({0, 1, 4, 7, 8})
_OP_SIZE = 4


@dataclass(frozen=True)
class Op:
    """A single packed CIGAR operation: length in the high 28 bits, kind in the low 4."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFFFFFFFF:
            raise ValueError(f"CIGAR operation out of 32-bit range: {self.value}")

    def is_consuming_reference(self) -> bool:
        """True if the operation is one of M, D, N, = or X."""
        return (self.value & 0xF) in _REFERENCE_CONSUMING

    def consumes_read(self) -> bool:
        """True if the operation is one of M, I, S, = or X."""
        return (self.value & 0xF) in _READ_CONSUMING

    def length(self) -> int:
        """Length of the operation."""
        return self.value >> 4

    def op_type(self) -> str:
        """Character naming the kind of operation."""
        code = self.value & 0xF
        if code >= len(_OP_CHARS):
            raise ValueError(f"Unexpected cigar operation: {code}")
        return _OP_CHARS[code]


def base_coverage(ops: Iterable[Op]) -> int:
    """Number of reference bases covered by the given operations."""
    return sum(op.length() for op in ops if op.is_consuming_reference())


@dataclass
class Cigar:
    """An ordered sequence of CIGAR operations."""

    ops: list[Op] = field(default_factory=list)

    def __iter__(self) -> Iterator[Op]:
        return iter(self.ops)

    def __len__(self) -> int:
        return len(self.ops)

    def read_length(self) -> int:
        """Sum of the lengths of operations that consume the read (M, I, S, =, X)."""
        return sum(op.length() for op in self.ops if op.consumes_read())

    def to_bytes(self) -> bytes:
        """Little-endian packed representation of the operations."""
        return struct.pack(f"<{len(self.ops)}I", *(op.value for op in self.ops))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Cigar":
        """Parse packed little-endian 32-bit operations."""
        if len(data) % _OP_SIZE:
            raise ValueError(
                f"CIGAR data length {len(data)} is not a multiple of {_OP_SIZE}"
            )
        return cls([Op(value) for (value,) in struct.iter_unpack("<I", data)])

    def __str__(self) -> str:
        return "".join(f"{op.length()}{op.op_type()}" for op in self.ops)