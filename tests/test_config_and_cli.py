"""Tests for settings, logging setup and the command line entry point."""
from __future__ import annotations

import json
import logging

import pytest

import main
from kpi_alignment.config import AnalysisConfig, Settings, configure_logging, get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    for name in ("DEBUG", "LOG_LEVEL", "DATA_URL", "DATA_CSV_PATH"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    package_logger = logging.getLogger("kpi_alignment")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


class TestSettings:
    def test_defaults(self):
        settings = Settings.from_env()
        assert settings.app_name == "KPI Alignment Tool"
        assert settings.analysis.overlap_severity_threshold == 0.2
        assert settings.analysis.overlap_penalty == 5.0
        assert settings.analysis.clear_definition_min_words == 8
        assert settings.data.url is None
        assert settings.data.fetch_timeout == 10.0

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ANALYSIS_OVERLAP_PENALTY", "10")
        monkeypatch.setenv("DATA_URL", "https://example.com/kpis.csv")
        settings = get_settings()
        assert settings.analysis.overlap_penalty == 10.0
        assert settings.data.url == "https://example.com/kpis.csv"

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_threshold_validation(self):
        with pytest.raises(ValueError):
            AnalysisConfig(overlap_severity_threshold=1.5)


class TestConfigureLogging:
    def test_single_handler(self):
        configure_logging("DEBUG")
        logger = configure_logging("warning")
        assert logger.name == "kpi_alignment"
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1


class TestMain:
    def test_runs_on_sample_file(self, sample_csv_path, capsys):
        assert main.main([str(sample_csv_path)]) == 0
        out = capsys.readouterr().out
        assert "KPI ALIGNMENT TOOL" in out
        assert "KPI CONFLICT ANALYSIS" in out
        assert "Active User: Inconsistent time frames" in out
        assert "KPI GLOSSARY" in out

    def test_missing_source(self, tmp_path, capsys):
        assert main.main([str(tmp_path / "missing.csv")]) == 1
        assert "Failed to load KPI data. Please try again later." in capsys.readouterr().out

    def test_export(self, sample_csv_path, tmp_path):
        export_dir = tmp_path / "out"
        assert main.main([str(sample_csv_path), "--export-dir", str(export_dir)]) == 0

        report = json.loads((export_dir / "kpi_alignment_report.json").read_text(encoding="utf-8"))
        assert report["counts"]["records"] == 15
        assert (export_dir / "kpi_glossary.csv").read_text(encoding="utf-8").startswith("Family,")
