"""Tests for ecoindex_analyzer.pipeline.analyze — end to end without a browser."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from unittest import mock

import pytest

from ecoindex_analyzer import config
from ecoindex_analyzer.models import network
from ecoindex_analyzer.pipeline import analyze
from ecoindex_analyzer.utils import errors

NOW = datetime(2026, 1, 1, tzinfo=UTC)


def _settings(**overrides: object) -> config.AnalyzerSettings:
    with mock.patch.dict("os.environ", {}, clear=True):
        return config.AnalyzerSettings(**overrides)


class TestBuildResult:
    def test_scores_capture(self, sample_capture: network.PageCapture) -> None:
        result = analyze.build_result(sample_capture, NOW)
        eco = result.ecoindex
        assert result.url == "https://example.com/"
        assert result.timestamp == NOW.isoformat()
        # data: URIs are not measured.
        assert eco.requests == 3
        assert eco.dom_elements == 120
        assert eco.size_kb == 16.0
        assert 0 <= eco.score <= 100
        assert eco.grade in {"A", "B", "C", "D", "E", "F", "G"}
        assert result.html_report_path is None

    def test_cache_audit_flags_short_lifetimes(self, sample_capture: network.PageCapture) -> None:
        result = analyze.build_result(sample_capture, NOW)
        urls = [item.url for item in result.cache_analysis]
        assert "https://example.com/app.js" in urls
        assert "https://cdn.example.net/logo.png" not in urls

    def test_html_report(self, sample_capture: network.PageCapture, tmp_path) -> None:
        result = analyze.build_result(sample_capture, NOW, include_html=True, report_dir=str(tmp_path))
        assert result.html_report_path is not None
        assert result.html_report_path.startswith(str(tmp_path.resolve()))


class TestAnalyzeUrl:
    def test_runs_capture_and_builds_result(self, sample_capture: network.PageCapture) -> None:
        capture = mock.AsyncMock(return_value=sample_capture)
        settings = _settings()
        with mock.patch.object(analyze, "capture_page", capture):
            result = asyncio.run(analyze.analyze_url("  https://example.com  ", settings=settings))
        capture.assert_awaited_once_with("https://example.com", None, settings)
        assert result.ecoindex.requests == 3

    def test_invalid_url_never_launches(self) -> None:
        capture = mock.AsyncMock()
        with mock.patch.object(analyze, "capture_page", capture):
            with pytest.raises(errors.InvalidUrlError):
                asyncio.run(analyze.analyze_url("ftp://example.com", settings=_settings()))
        capture.assert_not_awaited()

    def test_capture_errors_propagate(self) -> None:
        capture = mock.AsyncMock(side_effect=errors.NetworkError("Navigation failed"))
        with mock.patch.object(analyze, "capture_page", capture):
            with pytest.raises(errors.NetworkError):
                asyncio.run(analyze.analyze_url("https://example.com", settings=_settings()))


class TestCapturePage:
    def test_browser_closed_on_failure(self) -> None:
        session = mock.MagicMock()
        session.launch = mock.AsyncMock(side_effect=errors.BrowserLaunchError("Failed to launch browser"))
        session.close = mock.AsyncMock()
        with mock.patch.object(analyze.browser_session, "BrowserSession", return_value=session):
            with pytest.raises(errors.BrowserLaunchError):
                asyncio.run(analyze.capture_page("https://example.com", None, _settings()))
        session.close.assert_awaited_once()

    def test_browser_closed_on_success(self, sample_capture: network.PageCapture) -> None:
        session = mock.MagicMock()
        session.launch = mock.AsyncMock()
        session.close = mock.AsyncMock()
        controller = mock.MagicMock()
        controller.run = mock.AsyncMock(return_value=sample_capture)
        with (
            mock.patch.object(analyze.browser_session, "BrowserSession", return_value=session),
            mock.patch.object(analyze.navigation, "NavigationController", return_value=controller),
        ):
            capture = asyncio.run(analyze.capture_page("https://example.com", "/usr/bin/chromium", _settings()))
        assert capture is sample_capture
        session.launch.assert_awaited_once_with("/usr/bin/chromium")
        session.close.assert_awaited_once()
