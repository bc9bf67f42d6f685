"""Service layer used by the CLI and by field-bus front-ends."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from coectl.bus.base import DictionaryBus
from coectl.core.commands import Command, ReadCommand, WriteCommand
from coectl.core.errors import CoectlError, DeviceNotFoundError, ExchangeError
from coectl.core.parser import parse
from coectl.core.settings import Settings, load_settings

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ExchangeResult:
    command: Command
    payload_hex: str
    rendered: str | None = None


class ExplorerService:
    def __init__(
        self,
        bus: DictionaryBus,
        *,
        settings: Settings | None = None,
    ) -> None:
        if settings is None:
            loaded = load_settings()
            settings = loaded.settings
            self.load_warnings = loaded.warnings
        else:
            self.load_warnings = ()
        self.settings = settings
        self.bus = bus

    def parse(self, line: str) -> Command:
        return parse(line, overflow=self.settings.integer_overflow)

    def run_line(self, line: str) -> ExchangeResult:
        return self.execute(self.parse(line))

    def execute(self, command: Command) -> ExchangeResult:
        self._require_device(command.name)
        address, sub_index = command.object.as_tuple()

        if isinstance(command, ReadCommand):
            data = self._exchange(
                "read",
                command,
                lambda: self.bus.sdo_read(command.name, address, sub_index),
            )
            LOGGER.debug("Read %d byte(s) from %s %s", len(data), command.name, command.object)
            return ExchangeResult(
                command=command,
                payload_hex=data.hex(),
                rendered=command.format(data),
            )

        if isinstance(command, WriteCommand):
            payload = command.to_bytes()
            self._exchange(
                "write",
                command,
                lambda: self.bus.sdo_write(command.name, address, sub_index, payload),
            )
            LOGGER.info("Wrote %s to %s %s", payload.hex(), command.name, command.object)
            return ExchangeResult(command=command, payload_hex=payload.hex())

        raise TypeError(f"Unsupported command type {type(command).__name__}")

    def _require_device(self, name: str) -> None:
        names = list(self.bus.device_names())
        if not names:
            raise DeviceNotFoundError("No EtherCAT devices connected")
        if name not in names:
            available = ", ".join(sorted(names))
            raise DeviceNotFoundError(f"No device named '{name}'. Connected: {available}")

    def _exchange(self, action: str, command: Command, call: Callable[[], T]) -> T:
        try:
            return call()
        except CoectlError:
            raise
        except Exception as exc:
            raise ExchangeError(
                f"SDO {action} of {command.object} on {command.name} failed: {exc}"
            ) from exc
