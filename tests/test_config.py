"""Tests for ecoindex_analyzer.config — environment-bound settings."""

from __future__ import annotations

from unittest import mock

import pydantic
import pytest

from ecoindex_analyzer.config import AnalyzerSettings, get_settings


class TestAnalyzerSettings:
    def test_defaults(self) -> None:
        with mock.patch.dict("os.environ", {}, clear=True):
            cfg = AnalyzerSettings()
        assert cfg.chrome_path == ""
        assert cfg.headless is True
        assert cfg.render_timeout_ms == 45000
        assert cfg.first_paint_timeout_ms == 30000
        assert cfg.report_dir == ".reports"

    def test_environment_overrides(self) -> None:
        env = {
            "ECOINDEX_CHROME_PATH": "/usr/bin/chromium",
            "ECOINDEX_HEADLESS": "false",
            "ECOINDEX_RENDER_TIMEOUT_MS": "60000",
            "ECOINDEX_SIDECAR_TIMEOUT_S": "30.5",
        }
        with mock.patch.dict("os.environ", env, clear=True):
            cfg = AnalyzerSettings()
        assert cfg.chrome_path == "/usr/bin/chromium"
        assert cfg.headless is False
        assert cfg.render_timeout_ms == 60000
        assert cfg.sidecar_timeout_s == 30.5

    def test_rejects_non_positive_timeouts(self) -> None:
        with mock.patch.dict("os.environ", {"ECOINDEX_RENDER_TIMEOUT_MS": "0"}, clear=True):
            with pytest.raises(pydantic.ValidationError):
                AnalyzerSettings()

    def test_keyword_construction(self) -> None:
        with mock.patch.dict("os.environ", {}, clear=True):
            cfg = AnalyzerSettings(scroll_timeout_ms=1234)
        assert cfg.scroll_timeout_ms == 1234


class TestGetSettings:
    def test_cached(self) -> None:
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
