from __future__ import annotations

from pathlib import Path

import pytest

from coectl.core.errors import DeviceNotFoundError, ExchangeError, ShortBufferError, UnrecognizedCommandError
from coectl.core.model import Literal
from coectl.core.parser import OverflowPolicy
from coectl.core.service import ExplorerService
from coectl.core.settings import Settings


class FakeBus:
    def __init__(self, dictionaries: dict[str, dict[tuple[int, int], bytes]] | None = None) -> None:
        self.dictionaries = dictionaries if dictionaries is not None else {
            "EK1100": {(0x1008, 0): b"EK1100", (0x1018, 1): bytes.fromhex("02000000")},
            "EL1008": {(0x7000, 1): b"\x00"},
        }
        self.writes: list[tuple[str, int, int, bytes]] = []

    def device_names(self) -> list[str]:
        return list(self.dictionaries)

    def sdo_read(self, name: str, address: int, sub_index: int) -> bytes:
        return self.dictionaries[name][(address, sub_index)]

    def sdo_write(self, name: str, address: int, sub_index: int, payload: bytes) -> None:
        self.writes.append((name, address, sub_index, payload))
        self.dictionaries[name][(address, sub_index)] = payload


def test_read_renders_device_name() -> None:
    service = ExplorerService(FakeBus(), settings=Settings())

    result = service.run_line("r EK1100 0x1008:0 String")
    assert result.rendered == "EK1100"
    assert result.payload_hex == b"EK1100".hex()


def test_read_vendor_id_as_u32() -> None:
    service = ExplorerService(FakeBus(), settings=Settings())

    result = service.run_line("r EK1100 0x1018:1 u32")
    assert result.rendered == "2"


def test_write_sends_exact_payload() -> None:
    bus = FakeBus()
    service = ExplorerService(bus, settings=Settings())

    result = service.run_line("w EL1008 0x7000:1 5 i8")
    assert result.payload_hex == "05"
    assert result.rendered is None
    assert bus.writes == [("EL1008", 0x7000, 1, b"\x05")]


def test_unknown_device_lists_connected() -> None:
    service = ExplorerService(FakeBus(), settings=Settings())

    with pytest.raises(DeviceNotFoundError) as exc:
        service.run_line("r EL3062 0x1008:0 String")
    assert "Connected: EK1100, EL1008" in str(exc.value)


def test_empty_bus_reports_no_devices() -> None:
    service = ExplorerService(FakeBus({}), settings=Settings())

    with pytest.raises(DeviceNotFoundError, match="No EtherCAT devices connected"):
        service.run_line("r EK1100 0x1008:0 String")


def test_bus_failures_become_exchange_errors() -> None:
    service = ExplorerService(FakeBus(), settings=Settings())

    with pytest.raises(ExchangeError) as exc:
        service.run_line("r EK1100 0x2000:0 u8")
    assert "0x2000:0" in str(exc.value)


def test_exchange_error_from_bus_passes_through() -> None:
    class FailingBus(FakeBus):
        def sdo_write(self, name: str, address: int, sub_index: int, payload: bytes) -> None:
            raise ExchangeError("SDO abort 0x06010002: attempt to write a read only object")

    service = ExplorerService(FailingBus(), settings=Settings())

    with pytest.raises(ExchangeError, match="read only object"):
        service.run_line("w EL1008 0x7000:1 1 i8")


def test_short_payload_surfaces_decode_error() -> None:
    service = ExplorerService(FakeBus(), settings=Settings())

    with pytest.raises(ShortBufferError):
        service.run_line("r EL1008 0x7000:1 u32")


def test_parse_errors_propagate_before_bus_access() -> None:
    bus = FakeBus()
    service = ExplorerService(bus, settings=Settings())

    with pytest.raises(UnrecognizedCommandError):
        service.run_line("r EK1100 0x1008:0")
    assert bus.writes == []


def test_settings_overflow_policy_applies() -> None:
    service = ExplorerService(FakeBus(), settings=Settings(integer_overflow=OverflowPolicy.SATURATE))

    command = service.parse("w EL1008 0x7000:1 1000 i8")
    assert command.value == Literal.int8(127)


def test_settings_loaded_from_config_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    settings_file = tmp_path / "coectl" / "settings.yaml"
    settings_file.parent.mkdir(parents=True)
    settings_file.write_text("integer_overflow: saturate\n", encoding="utf-8")

    service = ExplorerService(FakeBus())
    assert service.settings.integer_overflow is OverflowPolicy.SATURATE
    assert service.load_warnings
