from __future__ import annotations

from pathlib import Path

import pytest

from coectl.core.errors import SettingsValidationError
from coectl.core.parser import OverflowPolicy
from coectl.core.settings import Settings, load_settings


def _write_settings(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_missing_file_yields_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))

    loaded = load_settings()
    assert loaded.settings == Settings()
    assert loaded.settings.integer_overflow is OverflowPolicy.REJECT
    assert loaded.source is None
    assert loaded.warnings == ()


def test_user_settings_loaded(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    path = _write_settings(
        tmp_path / "cfg" / "coectl" / "settings.yaml",
        """
integer_overflow: saturate
log_level: DEBUG
""",
    )

    loaded = load_settings()
    assert loaded.source == path
    assert loaded.settings.integer_overflow is OverflowPolicy.SATURATE
    assert loaded.settings.log_level == "DEBUG"
    assert any("clamped" in warning for warning in loaded.warnings)


def test_yml_extension_and_empty_document(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    _write_settings(tmp_path / "cfg" / "coectl" / "settings.yml", "")

    loaded = load_settings()
    assert loaded.settings == Settings()
    assert loaded.source is not None


def test_explicit_path(tmp_path: Path) -> None:
    path = _write_settings(tmp_path / "custom.yaml", "log_level: ERROR\n")

    loaded = load_settings(path)
    assert loaded.settings.log_level == "ERROR"
    assert loaded.settings.integer_overflow is OverflowPolicy.REJECT


@pytest.mark.parametrize(
    "content",
    [
        "integer_overflow: wrap\n",
        "log_level: TRACE\n",
        "colour: true\n",
        "- integer_overflow\n",
        "integer_overflow: [reject\n",
        "integer_overflow: reject\ninteger_overflow: saturate\n",
    ],
)
def test_invalid_settings_rejected(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, content: str) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    _write_settings(tmp_path / "cfg" / "coectl" / "settings.yaml", content)

    with pytest.raises(SettingsValidationError):
        load_settings()
