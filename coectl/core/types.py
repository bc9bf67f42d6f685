"""Type tag registry for CoE wire types."""

from __future__ import annotations

from enum import Enum

from coectl.core.errors import UnknownTypeTagError


class WireType(str, Enum):
    """Declared interpretation of a raw SDO buffer, keyed by its type tag."""

    BOOL = "bool"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    ARRAY_U8 = "[u8]"
    ARRAY_U16 = "[u16]"
    ARRAY_U32 = "[u32]"
    ARRAY_U64 = "[u64]"
    ARRAY_I8 = "[i8]"
    ARRAY_I16 = "[i16]"
    ARRAY_I32 = "[i32]"
    ARRAY_I64 = "[i64]"
    F32 = "f32"
    F64 = "f64"
    STRING = "String"

    @property
    def tag(self) -> str:
        return self.value

    @property
    def is_array(self) -> bool:
        return self in _ARRAY_ELEMENTS

    @property
    def element(self) -> WireType:
        """Scalar type of one array element; scalars return themselves."""
        return _ARRAY_ELEMENTS.get(self, self)

    @property
    def width(self) -> int | None:
        """Width in bytes of one value (one element for arrays), None for String."""
        return _WIDTHS.get(self.element)


INT_TYPES: tuple[WireType, ...] = (
    WireType.U8,
    WireType.U16,
    WireType.U32,
    WireType.U64,
    WireType.I8,
    WireType.I16,
    WireType.I32,
    WireType.I64,
)

_WIDTHS: dict[WireType, int] = {
    WireType.BOOL: 1,
    WireType.U8: 1,
    WireType.U16: 2,
    WireType.U32: 4,
    WireType.U64: 8,
    WireType.I8: 1,
    WireType.I16: 2,
    WireType.I32: 4,
    WireType.I64: 8,
    WireType.F32: 4,
    WireType.F64: 8,
}

_ARRAY_ELEMENTS: dict[WireType, WireType] = {
    WireType(f"[{scalar.value}]"): scalar for scalar in INT_TYPES
}


def type_tags() -> tuple[str, ...]:
    return tuple(wire_type.tag for wire_type in WireType)


def resolve(tag: str) -> WireType:
    """Map a textual type tag such as ``u16`` or ``[i32]`` to its WireType.

    Array tags only accept integer element types, so ``[f32]`` or
    ``[String]`` are rejected like any other unknown tag.
    """
    try:
        return WireType(tag)
    except ValueError:
        allowed = ", ".join(type_tags())
        raise UnknownTypeTagError(
            f"Unknown type tag '{tag}'. Allowed: {allowed}",
            fragment=tag,
        ) from None
