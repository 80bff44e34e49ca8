"""
Tests for enerx/config.py — TOML loading, local overrides, and ENERX_* env vars.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from enerx.config import AppConfig, LoggingConfig, load_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("ENERX_LOG_LEVEL", "ENERX_GENERATION_LATENCY", "ENERX_TELEMETRY_FILE", "ENERX_DEBUG"):
        monkeypatch.delenv(var, raising=False)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults():
    config = AppConfig()
    assert config.generator.latency_seconds == 1.5
    assert config.telemetry.seed_file == ""
    assert config.logging.level == "INFO"
    assert config.debug is False


def test_repository_default_file_loads():
    config = load_config()
    assert config.generator.latency_seconds == 1.5
    assert config.export.output_dir == "data/outputs"


def test_explicit_file(tmp_path):
    path = _write(tmp_path / "app.toml", "[project]\ndebug = true\n\n[generator]\nlatency_seconds = 0.3\n")
    config = load_config(path)
    assert config.generator.latency_seconds == 0.3
    assert config.debug is True


def test_local_toml_overrides(tmp_path):
    path = _write(tmp_path / "app.toml", "[logging]\nlevel = \"INFO\"\njson_format = false\n")
    _write(tmp_path / "local.toml", "[logging]\nlevel = \"DEBUG\"\n")
    config = load_config(path)
    assert config.logging.level == "DEBUG"
    assert config.logging.json_format is False


def test_env_overrides(tmp_path, monkeypatch):
    path = _write(tmp_path / "app.toml", "[generator]\nlatency_seconds = 2.0\n")
    monkeypatch.setenv("ENERX_GENERATION_LATENCY", "0.1")
    monkeypatch.setenv("ENERX_LOG_LEVEL", "warning")
    monkeypatch.setenv("ENERX_TELEMETRY_FILE", "seed.json")
    monkeypatch.setenv("ENERX_DEBUG", "yes")
    config = load_config(path)
    assert config.generator.latency_seconds == 0.1
    assert config.logging.level == "WARNING"
    assert config.telemetry.seed_file == "seed.json"
    assert config.debug is True


def test_missing_explicit_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.toml")


def test_negative_latency_rejected(tmp_path):
    path = _write(tmp_path / "app.toml", "[generator]\nlatency_seconds = -0.5\n")
    with pytest.raises(ValidationError):
        load_config(path)


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        LoggingConfig(level="LOUD")
