from __future__ import annotations

import pytest

from coectl.core.commands import ReadCommand, WriteCommand
from coectl.core.errors import (
    MalformedLiteralError,
    MalformedObjectIndexError,
    UnknownTypeTagError,
    UnrecognizedCommandError,
)
from coectl.core.model import Literal, ObjectIndex
from coectl.core.types import WireType

INDEX = ObjectIndex(0x7000, 1)


def test_valid_commands_construct() -> None:
    read = ReadCommand(name="EK1100", object=ObjectIndex(0x1008, 0), data_type=WireType.STRING)
    assert read.format(b"EK1100") == "EK1100"

    write = WriteCommand(name="EL1008", object=INDEX, value=Literal.int8(5))
    assert write.to_bytes() == b"\x05"


@pytest.mark.parametrize("name", ["", "EL 1008", "EL-1008", "ÄL1008", "EL1008\n", 1008, None])
def test_invalid_device_names_are_rejected(name: object) -> None:
    with pytest.raises(UnrecognizedCommandError):
        ReadCommand(name=name, object=INDEX, data_type=WireType.U8)  # type: ignore[arg-type]
    with pytest.raises(UnrecognizedCommandError):
        WriteCommand(name=name, object=INDEX, value=Literal.int8(1))  # type: ignore[arg-type]


@pytest.mark.parametrize("index", [(0x7000, 1), "0x7000:1", None])
def test_object_must_be_an_object_index(index: object) -> None:
    with pytest.raises(MalformedObjectIndexError):
        ReadCommand(name="EL1008", object=index, data_type=WireType.U8)  # type: ignore[arg-type]
    with pytest.raises(MalformedObjectIndexError):
        WriteCommand(name="EL1008", object=index, value=Literal.int8(1))  # type: ignore[arg-type]


def test_read_data_type_must_be_a_wire_type() -> None:
    with pytest.raises(UnknownTypeTagError):
        ReadCommand(name="EL1008", object=INDEX, data_type="u8")  # type: ignore[arg-type]


@pytest.mark.parametrize("value", [5, b"\x05", "5 i8", None])
def test_write_value_must_be_a_literal(value: object) -> None:
    with pytest.raises(MalformedLiteralError):
        WriteCommand(name="EL1008", object=INDEX, value=value)  # type: ignore[arg-type]
