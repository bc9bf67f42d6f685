from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from coectl.core.codec import decode, encode
from coectl.core.errors import (
    MalformedLiteralError,
    MalformedObjectIndexError,
    UnknownTypeTagError,
    UnrecognizedCommandError,
)
from coectl.core.model import Literal, ObjectIndex
from coectl.core.types import WireType

_NAME_RE = re.compile(r"[A-Za-z0-9]+")


def _check_target(name: object, index: object) -> None:
    if not isinstance(name, str) or _NAME_RE.fullmatch(name) is None:
        raise UnrecognizedCommandError(
            f"Device name must be non-empty ASCII letters and digits, got {name!r}",
            fragment=str(name),
        )
    if not isinstance(index, ObjectIndex):
        raise MalformedObjectIndexError(f"Expected an ObjectIndex, got {index!r}", fragment=str(index))


@dataclass(frozen=True)
class ReadCommand:
    name: str
    object: ObjectIndex
    data_type: WireType

    def __post_init__(self) -> None:
        _check_target(self.name, self.object)
        if not isinstance(self.data_type, WireType):
            raise UnknownTypeTagError(f"Expected a WireType, got {self.data_type!r}", fragment=str(self.data_type))

    def format(self, data: bytes) -> str:
        """Render the bytes returned by the SDO upload."""
        return decode(self.data_type, data)

    def __str__(self) -> str:
        return f"read {self.name} {self.object} {self.data_type.tag}"


@dataclass(frozen=True)
class WriteCommand:
    name: str
    object: ObjectIndex
    value: Literal

    def __post_init__(self) -> None:
        _check_target(self.name, self.object)
        if not isinstance(self.value, Literal):
            raise MalformedLiteralError(f"Expected a Literal, got {self.value!r}", fragment=str(self.value))

    def to_bytes(self) -> bytes:
        """Payload for the SDO download."""
        return encode(self.value)

    def __str__(self) -> str:
        return f"write {self.name} {self.object} {self.value}"


Command = Union[ReadCommand, WriteCommand]
