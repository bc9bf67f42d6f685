"""Dictionary exchange interface provided by a field-bus master."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class DictionaryBus(Protocol):
    def device_names(self) -> Sequence[str]:
        """Names of the SubDevices currently reachable on the bus."""

    def sdo_read(self, name: str, address: int, sub_index: int) -> bytes:
        """Upload one object-dictionary entry from the named device."""

    def sdo_write(self, name: str, address: int, sub_index: int, payload: bytes) -> None:
        """Download ``payload`` into one entry; raise ExchangeError on failure."""
