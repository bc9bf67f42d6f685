"""Typer CLI entrypoint."""

from __future__ import annotations

import logging
from dataclasses import replace

import typer

from coectl.core.codec import decode, encode
from coectl.core.commands import WriteCommand
from coectl.core.errors import CoectlError
from coectl.core.parser import OverflowPolicy, parse, parse_value
from coectl.core.settings import Settings, load_settings
from coectl.core.types import WireType, resolve

app = typer.Typer(help="EtherCAT CoE object-dictionary command parser and value codec")

_SATURATE_HELP = "Clamp integer literals that overflow their suffix instead of rejecting them"


def _load_settings(saturate: bool = False) -> Settings:
    loaded = load_settings()
    for warning in loaded.warnings:
        typer.echo(f"Warning: {warning}", err=True)
    settings = loaded.settings
    logging.basicConfig(level=settings.log_level)
    if saturate:
        settings = replace(settings, integer_overflow=OverflowPolicy.SATURATE)
    return settings


def _parse_hex(text: str) -> bytes:
    normalized = text.strip().lower().replace(" ", "").replace(":", "")
    if normalized.startswith("0x"):
        normalized = normalized[2:]
    try:
        return bytes.fromhex(normalized)
    except ValueError:
        raise typer.BadParameter(f"'{text}' is not a hex byte string") from None


@app.command("parse")
def parse_command(
    line: str,
    saturate: bool = typer.Option(False, "--saturate", help=_SATURATE_HELP),
) -> None:
    """Parse a read/write command line and show the resulting request."""
    try:
        settings = _load_settings(saturate)
        command = parse(line, overflow=settings.integer_overflow)
        typer.echo(str(command))
        if isinstance(command, WriteCommand):
            typer.echo(f"payload={command.to_bytes().hex()}")
    except CoectlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("decode")
def decode_command(
    type_tag: str = typer.Argument(..., metavar="TYPE"),
    payload: str = typer.Argument(..., metavar="HEX"),
) -> None:
    """Render raw SDO bytes (hex) as TYPE."""
    data = _parse_hex(payload)
    try:
        typer.echo(decode(resolve(type_tag), data))
    except CoectlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("encode")
def encode_command(
    value: str,
    saturate: bool = typer.Option(False, "--saturate", help=_SATURATE_HELP),
) -> None:
    """Show the SDO payload (hex) a write VALUE such as '5 i8' produces."""
    try:
        settings = _load_settings(saturate)
        literal = parse_value(value, overflow=settings.integer_overflow)
        typer.echo(f"{literal} payload={encode(literal).hex()}")
    except CoectlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("types")
def list_types() -> None:
    """List the type tags accepted by read commands."""
    for wire_type in WireType:
        if wire_type.width is None:
            size = "variable length, UTF-8"
        elif wire_type.is_array:
            size = f"{wire_type.width} byte(s) per element"
        else:
            size = f"{wire_type.width} byte(s)"
        typer.echo(f"{wire_type.tag}: {size}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
