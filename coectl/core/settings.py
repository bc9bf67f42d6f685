"""Settings loading and validation for the YAML coectl settings file."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from coectl.core.errors import SettingsLoadError, SettingsValidationError
from coectl.core.parser import OverflowPolicy

LOGGER = logging.getLogger(__name__)
_SETTINGS_NAMES = ("settings.yaml", "settings.yml")


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise SettingsValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class Settings:
    integer_overflow: OverflowPolicy = OverflowPolicy.REJECT
    log_level: str = "WARNING"


@dataclass(frozen=True)
class LoadedSettings:
    settings: Settings
    source: Path | None
    warnings: tuple[str, ...]


def _load_schema_validator() -> Any:
    schema_text = resources.files("coectl.schemas").joinpath("settings.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def settings_dir() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "coectl"


def _find_settings_file() -> Path | None:
    directory = settings_dir()
    for name in _SETTINGS_NAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SettingsLoadError(f"Could not read settings file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise SettingsValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise SettingsValidationError(f"Settings file {path} must contain a mapping at root")
    return loaded


def _build_settings(doc: dict[str, Any], source: Path) -> Settings:
    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise SettingsValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    defaults = Settings()
    return Settings(
        integer_overflow=OverflowPolicy(doc.get("integer_overflow", defaults.integer_overflow)),
        log_level=doc.get("log_level", defaults.log_level),
    )


def load_settings(path: Path | None = None) -> LoadedSettings:
    """Load settings from ``path`` or the XDG config directory.

    A missing file yields the defaults.
    """
    source = path if path is not None else _find_settings_file()
    if source is None:
        return LoadedSettings(settings=Settings(), source=None, warnings=())

    settings = _build_settings(_read_yaml(source), source)
    warnings: list[str] = []
    if settings.integer_overflow is OverflowPolicy.SATURATE:
        warning = f"{source}: integer literals wider than their suffix will be clamped to the maximum"
        LOGGER.warning(warning)
        warnings.append(warning)

    return LoadedSettings(settings=settings, source=source, warnings=tuple(warnings))
