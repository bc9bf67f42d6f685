"""Domain-specific errors for coectl."""

from __future__ import annotations


class CoectlError(Exception):
    """Base error for coectl."""


class CommandParseError(CoectlError):
    """Raised when a command line cannot be turned into a command."""

    def __init__(self, message: str, *, fragment: str = "", column: int | None = None) -> None:
        super().__init__(message)
        self.fragment = fragment
        self.column = column


class UnrecognizedCommandError(CommandParseError):
    """Raised when no grammar alternative matches the line."""


class MalformedObjectIndexError(CommandParseError):
    """Raised when an address/sub-index pair is present but out of range."""


class UnknownTypeTagError(CommandParseError):
    """Raised when a type tag is not in the registry."""


class MalformedLiteralError(CommandParseError):
    """Raised when a write value is neither a valid string nor number."""


class DecodeError(CoectlError):
    """Base error for rendering raw bytes."""

    def __init__(self, message: str, *, wire_type: object = None) -> None:
        super().__init__(message)
        self.wire_type = wire_type


class ShortBufferError(DecodeError):
    """Raised when fewer bytes than the type width were supplied."""


class InvalidUtf8Error(DecodeError):
    """Raised when a string buffer is not valid UTF-8."""


class ArrayLengthMisalignedError(DecodeError):
    """Raised when an array buffer is not a multiple of the element width."""


class SettingsLoadError(CoectlError):
    """Raised when the settings file cannot be read."""


class SettingsValidationError(CoectlError):
    """Raised when the settings file does not conform to schema."""


class DeviceNotFoundError(CoectlError):
    """Raised when no connected device carries the requested name."""


class ExchangeError(CoectlError):
    """Raised by bus implementations when an SDO exchange fails."""
