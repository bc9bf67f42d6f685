"""Core value objects shared by the parser, codec, and service."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from coectl.core.errors import MalformedLiteralError, MalformedObjectIndexError


@dataclass(frozen=True)
class ObjectIndex:
    """One object-dictionary entry: 16-bit index plus 8-bit sub-index."""

    address: int
    sub_index: int

    def __post_init__(self) -> None:
        if not 0 <= self.address <= 0xFFFF:
            raise MalformedObjectIndexError(
                f"Object address {self.address:#x} does not fit 16 bits"
            )
        if not 0 <= self.sub_index <= 0xFF:
            raise MalformedObjectIndexError(
                f"Sub-index {self.sub_index} does not fit 8 bits"
            )

    def as_tuple(self) -> tuple[int, int]:
        return self.address, self.sub_index

    def __str__(self) -> str:
        return f"{self.address:#06x}:{self.sub_index}"


class LiteralKind(str, Enum):
    INT8 = "i8"
    INT16 = "i16"
    INT32 = "i32"
    INT64 = "i64"
    FLOAT = "float"
    STRING = "string"

    @property
    def bits(self) -> int | None:
        return _INT_BITS.get(self)

    def bounds(self) -> tuple[int, int]:
        """Inclusive signed range of an integer kind."""
        bits = self.bits
        if bits is None:
            raise ValueError(f"{self.value} is not an integer kind")
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1


_INT_BITS: dict[LiteralKind, int] = {
    LiteralKind.INT8: 8,
    LiteralKind.INT16: 16,
    LiteralKind.INT32: 32,
    LiteralKind.INT64: 64,
}

INT_SUFFIXES: dict[str, LiteralKind] = {kind.value: kind for kind in _INT_BITS}


@dataclass(frozen=True)
class Literal:
    """A write value: exactly one of IntN, Float or String."""

    kind: LiteralKind
    value: int | float | str

    def __post_init__(self) -> None:
        if self.kind.bits is not None:
            if isinstance(self.value, bool) or not isinstance(self.value, int):
                raise MalformedLiteralError(f"{self.kind.value} literal needs an integer, got {self.value!r}")
            low, high = self.kind.bounds()
            if not low <= self.value <= high:
                raise MalformedLiteralError(
                    f"{self.value} does not fit {self.kind.value} (range {low}..{high})",
                    fragment=str(self.value),
                )
        elif self.kind is LiteralKind.FLOAT:
            if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
                raise MalformedLiteralError(f"float literal needs a number, got {self.value!r}")
            object.__setattr__(self, "value", float(self.value))
        elif not isinstance(self.value, str):
            raise MalformedLiteralError(f"string literal needs text, got {self.value!r}")

    @classmethod
    def int8(cls, value: int) -> Literal:
        return cls(LiteralKind.INT8, value)

    @classmethod
    def int16(cls, value: int) -> Literal:
        return cls(LiteralKind.INT16, value)

    @classmethod
    def int32(cls, value: int) -> Literal:
        return cls(LiteralKind.INT32, value)

    @classmethod
    def int64(cls, value: int) -> Literal:
        return cls(LiteralKind.INT64, value)

    @classmethod
    def float64(cls, value: float) -> Literal:
        return cls(LiteralKind.FLOAT, value)

    @classmethod
    def string(cls, value: str) -> Literal:
        return cls(LiteralKind.STRING, value)

    def __str__(self) -> str:
        if self.kind is LiteralKind.STRING:
            return f"String({self.value!r})"
        if self.kind is LiteralKind.FLOAT:
            return f"Float({self.value!r})"
        return f"Int{self.kind.bits}({self.value})"
