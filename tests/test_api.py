from __future__ import annotations

from coectl import api


class FakeBus:
    def __init__(self) -> None:
        self.writes: list[tuple[str, int, int, bytes]] = []

    def device_names(self) -> list[str]:
        return ["EL3062"]

    def sdo_read(self, name: str, address: int, sub_index: int) -> bytes:
        return bytes.fromhex("0100ffff")

    def sdo_write(self, name: str, address: int, sub_index: int, payload: bytes) -> None:
        self.writes.append((name, address, sub_index, payload))


def test_public_api_exports_resolve() -> None:
    for name in api.__all__:
        assert getattr(api, name) is not None


def test_public_api_parse_and_render() -> None:
    command = api.parse("r EL3062 0x6000:1 [i16]")
    assert isinstance(command, api.ReadCommand)
    assert command.format(bytes.fromhex("0100ffff")) == "[1, -1]"
    assert api.encode(api.parse_value("0x1234 i16")) == b"\x34\x12"
    assert api.resolve("f64") is api.WireType.F64


def test_public_service_round_trip() -> None:
    bus = FakeBus()
    service = api.ExplorerService(bus, settings=api.Settings())

    read = service.run_line("r EL3062 0x6000:1 [i16]")
    assert isinstance(read, api.ExchangeResult)
    assert read.rendered == "[1, -1]"

    write = service.run_line('w EL3062 0x8000:1 "abc"')
    assert write.payload_hex == "616263"
    assert bus.writes == [("EL3062", 0x8000, 1, b"abc")]


def test_parse_errors_share_a_base() -> None:
    try:
        api.parse("r EL3062 0x6000:1 [String]")
    except api.CoectlError as exc:
        assert isinstance(exc, api.UnknownTypeTagError)
    else:
        raise AssertionError("expected UnknownTypeTagError")
