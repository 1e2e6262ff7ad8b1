from __future__ import annotations

from pathlib import Path

from fuel_core.config import DEFAULT_CORS_ORIGINS, DEFAULT_CSV_PATH, load_settings


def test_defaults(monkeypatch) -> None:
    monkeypatch.delenv("FUEL_PRICES_CSV", raising=False)
    monkeypatch.delenv("FUEL_API_CORS_ORIGINS", raising=False)
    settings = load_settings()
    assert settings.csv_path == DEFAULT_CSV_PATH
    assert settings.cors_origins == DEFAULT_CORS_ORIGINS


def test_env_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("FUEL_PRICES_CSV", str(tmp_path / "prices.csv"))
    monkeypatch.setenv("FUEL_API_CORS_ORIGINS", "https://a.example, https://b.example,")
    settings = load_settings()
    assert settings.csv_path == tmp_path / "prices.csv"
    assert settings.cors_origins == ("https://a.example", "https://b.example")
