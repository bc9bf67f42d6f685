r"""Recursive-descent parser for the SDO explorer command language.

Grammar::

    command      ::= read | write
    read         ::= "r " name " " object_index " " type_tag
    write        ::= "w " name " " object_index " " value
    name         ::= [A-Za-z0-9]+
    object_index ::= "0x" hex_digit{1,4} ":" decimal_digit{1,3}
    value        ::= string | number
    string       ::= '"' (escaped_char | [^\\"])* '"'
    escaped_char ::= "\\" ("\\" | '"' | "n" | "t" | "r")
    number       ::= int_with_suffix | float
    int_with_suffix ::= (hex_int | decimal_int) [" "] ("i8" | "i16" | "i32" | "i64")
    hex_int      ::= "0x" hex_digit{1,16}
    decimal_int  ::= decimal_digit+
    type_tag     ::= "bool" | int_type | "[" int_type "]" | "f32" | "f64" | "String"

Alternatives are ordered: once a clause's keyword matched, the parser is
committed to it and reports that clause's error instead of trying the next
one. The whole line must be consumed; only a trailing ``\n`` or ``\r\n``
is dropped.

Examples::

    r EK1100 0x1008:0 String
    w EL1008 0x7000:1 5 i8
    w EL1008 0x8000:2 "he said \"hi\""
"""

from __future__ import annotations

import logging
import math
import re
from enum import Enum

from coectl.core.commands import Command, ReadCommand, WriteCommand
from coectl.core.errors import (
    CommandParseError,
    MalformedLiteralError,
    MalformedObjectIndexError,
    UnrecognizedCommandError,
)
from coectl.core.model import INT_SUFFIXES, Literal, ObjectIndex
from coectl.core.types import WireType, resolve

LOGGER = logging.getLogger(__name__)

_NAME_RE = re.compile(r"[A-Za-z0-9]+")
_OBJECT_INDEX_RE = re.compile(r"0x([0-9A-Fa-f]+):([0-9]+)")
_HEX_INT_RE = re.compile(r"0x([0-9A-Fa-f]{1,16})")
_DECIMAL_INT_RE = re.compile(r"[0-9]+")
_SUFFIX_RE = re.compile(r" ?(i8|i16|i32|i64)")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_ESCAPES = {"\\": "\\", '"': '"', "n": "\n", "t": "\t", "r": "\r"}
_I64_MAX = (1 << 63) - 1
# digits needed for i64 max in each base
_I64_DIGITS = {10: 19, 16: 16}


class OverflowPolicy(str, Enum):
    """What to do with an integer literal wider than its suffix."""

    REJECT = "reject"
    SATURATE = "saturate"


def parse(line: str, *, overflow: OverflowPolicy | str = OverflowPolicy.REJECT) -> Command:
    """Parse one operator line into a ReadCommand or WriteCommand."""
    policy = OverflowPolicy(overflow)
    text = _strip_terminator(line)
    try:
        for clause in (_read_command, _write_command):
            command = clause(text, policy)
            if command is not None:
                return command
        raise UnrecognizedCommandError(
            "Unrecognized command; expected 'r <name> <0xINDEX:SUB> <type>' "
            "or 'w <name> <0xINDEX:SUB> <value>'",
            fragment=text,
            column=1,
        )
    except CommandParseError as exc:
        LOGGER.debug("Rejected command %r: %s", line, exc)
        raise


def parse_value(text: str, *, overflow: OverflowPolicy | str = OverflowPolicy.REJECT) -> Literal:
    """Parse a standalone write value such as ``5 i8``, ``0x10i16`` or ``"abc"``."""
    if not text:
        raise MalformedLiteralError("Empty value", fragment=text, column=1)
    return _value(text, 0, OverflowPolicy(overflow))


def parse_object_index(text: str) -> ObjectIndex:
    """Parse a standalone ``0xINDEX:SUB`` token."""
    index, end = _object_index(text, 0)
    if end != len(text):
        raise MalformedObjectIndexError(
            f"Unexpected input after object index: {text[end:]!r}",
            fragment=text[end:],
            column=end + 1,
        )
    return index


def _strip_terminator(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


def _read_command(text: str, overflow: OverflowPolicy) -> ReadCommand | None:
    if not text.startswith("r "):
        return None
    name, pos = _name(text, 2)
    pos = _separator(text, pos, "object index")
    index, pos = _object_index(text, pos)
    pos = _separator(text, pos, "type tag")
    data_type, pos = _type_tag(text, pos)
    _expect_end(text, pos)
    return ReadCommand(name=name, object=index, data_type=data_type)


def _write_command(text: str, overflow: OverflowPolicy) -> WriteCommand | None:
    if not text.startswith("w "):
        return None
    name, pos = _name(text, 2)
    pos = _separator(text, pos, "object index")
    index, pos = _object_index(text, pos)
    pos = _separator(text, pos, "value")
    if pos == len(text):
        raise UnrecognizedCommandError("Missing value", fragment="", column=pos + 1)
    value = _value(text, pos, overflow)
    return WriteCommand(name=name, object=index, value=value)


def _name(text: str, pos: int) -> tuple[str, int]:
    match = _NAME_RE.match(text, pos)
    if match is None:
        raise UnrecognizedCommandError(
            "Expected an alphanumeric device name",
            fragment=text[pos:],
            column=pos + 1,
        )
    return match.group(), match.end()


def _separator(text: str, pos: int, expected: str) -> int:
    if text[pos : pos + 1] != " ":
        raise UnrecognizedCommandError(
            f"Expected a single space before the {expected}",
            fragment=text[pos:],
            column=pos + 1,
        )
    return pos + 1


def _token_end(text: str, pos: int) -> int:
    end = text.find(" ", pos)
    return len(text) if end == -1 else end


def _object_index(text: str, pos: int) -> tuple[ObjectIndex, int]:
    end = _token_end(text, pos)
    token = text[pos:end]
    match = _OBJECT_INDEX_RE.fullmatch(token)
    if match is None:
        error = MalformedObjectIndexError if token.startswith("0x") else UnrecognizedCommandError
        raise error(
            f"Expected an object index like 0x1008:0, got {token!r}",
            fragment=token,
            column=pos + 1,
        )
    address_digits, sub_digits = match.groups()
    if len(address_digits) > 4:
        raise MalformedObjectIndexError(
            f"Object address {token!r} has more than 4 hex digits",
            fragment=token,
            column=pos + 1,
        )
    if len(sub_digits) > 3 or int(sub_digits) > 0xFF:
        raise MalformedObjectIndexError(
            f"Sub-index in {token!r} must be 0-255",
            fragment=token,
            column=pos + 1,
        )
    return ObjectIndex(address=int(address_digits, 16), sub_index=int(sub_digits)), end


def _type_tag(text: str, pos: int) -> tuple[WireType, int]:
    end = _token_end(text, pos)
    if end == pos:
        raise UnrecognizedCommandError("Missing type tag", fragment="", column=pos + 1)
    tag = text[pos:end]
    try:
        return resolve(tag), end
    except CommandParseError as exc:
        exc.column = pos + 1
        raise


def _expect_end(text: str, pos: int, error: type[CommandParseError] = UnrecognizedCommandError) -> None:
    if pos != len(text):
        raise error(
            f"Unexpected trailing input: {text[pos:]!r}",
            fragment=text[pos:],
            column=pos + 1,
        )


def _value(text: str, pos: int, overflow: OverflowPolicy) -> Literal:
    if text[pos] == '"':
        value, end = _string(text, pos)
    else:
        value, end = _number(text, pos, overflow)
    _expect_end(text, end, MalformedLiteralError)
    return value


def _string(text: str, pos: int) -> tuple[Literal, int]:
    chars: list[str] = []
    cursor = pos + 1
    while cursor < len(text):
        char = text[cursor]
        if char == '"':
            return Literal.string("".join(chars)), cursor + 1
        if char == "\\":
            escaped = text[cursor + 1 : cursor + 2]
            if escaped not in _ESCAPES:
                raise MalformedLiteralError(
                    f"Invalid escape sequence '\\{escaped}'",
                    fragment=text[cursor : cursor + 2],
                    column=cursor + 1,
                )
            chars.append(_ESCAPES[escaped])
            cursor += 2
            continue
        chars.append(char)
        cursor += 1
    raise MalformedLiteralError("Unterminated string literal", fragment=text[pos:], column=pos + 1)


def _number(text: str, pos: int, overflow: OverflowPolicy) -> tuple[Literal, int]:
    integer = _int_with_suffix(text, pos, overflow)
    if integer is not None:
        return integer
    match = _FLOAT_RE.match(text, pos)
    if match is None:
        raise MalformedLiteralError(
            f"Expected a quoted string or a number, got {text[pos:]!r}",
            fragment=text[pos:],
            column=pos + 1,
        )
    value = float(match.group())
    if math.isinf(value):
        raise MalformedLiteralError(
            "Number is out of range for a 64-bit float",
            fragment=match.group(),
            column=pos + 1,
        )
    return Literal.float64(value), match.end()


def _int_with_suffix(text: str, pos: int, overflow: OverflowPolicy) -> tuple[Literal, int] | None:
    match = _HEX_INT_RE.match(text, pos)
    base = 16
    if match is not None:
        digits = match.group(1)
    else:
        match = _DECIMAL_INT_RE.match(text, pos)
        if match is None:
            return None
        digits = match.group()
        base = 10

    suffix = _SUFFIX_RE.match(text, match.end())
    if suffix is None:
        return None

    significant = digits.lstrip("0") or "0"
    if len(significant) > _I64_DIGITS[base] or int(significant, base) > _I64_MAX:
        raise MalformedLiteralError(
            f"Integer {match.group()} does not fit a signed 64-bit value",
            fragment=match.group(),
            column=pos + 1,
        )
    value = int(significant, base)
    kind = INT_SUFFIXES[suffix.group(1)]
    _, high = kind.bounds()
    if value > high:
        if overflow is OverflowPolicy.REJECT:
            raise MalformedLiteralError(
                f"Integer {match.group()} does not fit {kind.value} (max {high})",
                fragment=text[pos : suffix.end()],
                column=pos + 1,
            )
        LOGGER.debug("Saturating %s to %s max %d", match.group(), kind.value, high)
        value = high
    return Literal(kind, value), suffix.end()
