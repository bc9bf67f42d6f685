"""Stable public API for building tooling on top of coectl.

This module is the supported integration surface for field-bus front-ends:
parse operator lines, render SDO uploads, build SDO download payloads, and
drive a :class:`DictionaryBus` through :class:`ExplorerService`.
"""

from __future__ import annotations

from coectl.bus.base import DictionaryBus
from coectl.core.codec import decode, display, encode
from coectl.core.commands import Command, ReadCommand, WriteCommand
from coectl.core.errors import (
    ArrayLengthMisalignedError,
    CoectlError,
    CommandParseError,
    DecodeError,
    DeviceNotFoundError,
    ExchangeError,
    InvalidUtf8Error,
    MalformedLiteralError,
    MalformedObjectIndexError,
    SettingsLoadError,
    SettingsValidationError,
    ShortBufferError,
    UnknownTypeTagError,
    UnrecognizedCommandError,
)
from coectl.core.model import Literal, LiteralKind, ObjectIndex
from coectl.core.parser import OverflowPolicy, parse, parse_object_index, parse_value
from coectl.core.service import ExchangeResult, ExplorerService
from coectl.core.settings import Settings, load_settings
from coectl.core.types import WireType, resolve, type_tags

__all__ = [
    "CoectlError",
    "CommandParseError",
    "UnrecognizedCommandError",
    "MalformedObjectIndexError",
    "UnknownTypeTagError",
    "MalformedLiteralError",
    "DecodeError",
    "ShortBufferError",
    "InvalidUtf8Error",
    "ArrayLengthMisalignedError",
    "SettingsLoadError",
    "SettingsValidationError",
    "DeviceNotFoundError",
    "ExchangeError",
    "Command",
    "ReadCommand",
    "WriteCommand",
    "Literal",
    "LiteralKind",
    "ObjectIndex",
    "WireType",
    "OverflowPolicy",
    "Settings",
    "DictionaryBus",
    "ExchangeResult",
    "ExplorerService",
    "decode",
    "display",
    "encode",
    "load_settings",
    "parse",
    "parse_object_index",
    "parse_value",
    "resolve",
    "type_tags",
]
