"""Little-endian value codec for CoE SDO payloads.

CoE numbers are little-endian (CiA 301 §7.1.1). Every multi-byte value,
including each element of an array, is unpacked from its own byte slice with
an explicit ``<`` struct format so the result never depends on host byte order
or buffer alignment.
"""

from __future__ import annotations

import math
import struct

from coectl.core.errors import ArrayLengthMisalignedError, InvalidUtf8Error, ShortBufferError
from coectl.core.model import Literal, LiteralKind
from coectl.core.types import WireType

_SCALAR_FORMATS: dict[WireType, str] = {
    WireType.U8: "<B",
    WireType.U16: "<H",
    WireType.U32: "<I",
    WireType.U64: "<Q",
    WireType.I8: "<b",
    WireType.I16: "<h",
    WireType.I32: "<i",
    WireType.I64: "<q",
    WireType.F32: "<f",
    WireType.F64: "<d",
}

_LITERAL_FORMATS: dict[LiteralKind, str] = {
    LiteralKind.INT8: "<b",
    LiteralKind.INT16: "<h",
    LiteralKind.INT32: "<i",
    LiteralKind.INT64: "<q",
    LiteralKind.FLOAT: "<d",
}


def decode(wire_type: WireType, data: bytes) -> str:
    """Render raw SDO bytes as display text according to ``wire_type``."""
    data = bytes(data)

    if wire_type is WireType.STRING:
        # VISIBLE_STRING is ASCII per CiA 301; UNICODE_STRING encoding is
        # vendor-defined, UTF-8 covers both in practice.
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidUtf8Error(
                f"String payload is not valid UTF-8 at byte {exc.start}",
                wire_type=wire_type,
            ) from None

    if wire_type is WireType.BOOL:
        # Only 0 is defined as FALSE; anything else reads as TRUE.
        _require(wire_type, data, 1)
        return "true" if data[0] != 0 else "false"

    if wire_type.is_array:
        return _render_array(wire_type, data)

    width = _require(wire_type, data, wire_type.width)
    (value,) = struct.unpack(_SCALAR_FORMATS[wire_type], data[:width])
    return _render(wire_type, value)


def decode_array(wire_type: WireType, data: bytes) -> list[int]:
    """Unpack an integer array payload element by element."""
    element = wire_type.element
    width = element.width
    if len(data) % width != 0:
        raise ArrayLengthMisalignedError(
            f"{wire_type.tag} payload of {len(data)} bytes is not a multiple of {width}",
            wire_type=wire_type,
        )
    fmt = _SCALAR_FORMATS[element]
    return [
        struct.unpack(fmt, data[offset : offset + width])[0]
        for offset in range(0, len(data), width)
    ]


def encode(literal: Literal) -> bytes:
    """Exact wire bytes for a write value."""
    if literal.kind is LiteralKind.STRING:
        return literal.value.encode("utf-8")
    return struct.pack(_LITERAL_FORMATS[literal.kind], literal.value)


def display(literal: Literal) -> str:
    """Render a literal the way :func:`decode` renders its encoding."""
    if literal.kind is LiteralKind.STRING:
        return literal.value
    if literal.kind is LiteralKind.FLOAT:
        return repr(literal.value)
    return str(literal.value)


def _require(wire_type: WireType, data: bytes, width: int) -> int:
    if len(data) < width:
        raise ShortBufferError(
            f"{wire_type.tag} needs {width} byte(s), got {len(data)}",
            wire_type=wire_type,
        )
    return width


def _render_array(wire_type: WireType, data: bytes) -> str:
    return "[" + ", ".join(str(item) for item in decode_array(wire_type, data)) + "]"


def _render(wire_type: WireType, value: int | float) -> str:
    if wire_type is WireType.F32:
        return _format_f32(value)
    if wire_type is WireType.F64:
        return repr(value)
    return str(value)


def _format_f32(value: float) -> str:
    """Shortest decimal text that maps back to the same 32-bit float."""
    if math.isnan(value) or math.isinf(value):
        return repr(value)
    for digits in range(1, 10):
        candidate = float(f"{value:.{digits}g}")
        try:
            (narrowed,) = struct.unpack("<f", struct.pack("<f", candidate))
        except OverflowError:
            continue
        if narrowed == value:
            return repr(candidate)
    return repr(value)
