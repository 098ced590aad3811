"""Tests for ecoindex_analyzer.analysis.classification."""

from __future__ import annotations

import pytest

from ecoindex_analyzer.analysis.classification import classify_resource_type, normalize_protocol


class TestClassifyResourceType:
    @pytest.mark.parametrize(
        ("cdp_type", "mime", "url", "expected"),
        [
            ("Script", "", "https://a.com/x", "script"),
            ("Other", "application/javascript", "https://a.com/x", "script"),
            ("Stylesheet", "", "https://a.com/x", "stylesheet"),
            ("", "text/css", "https://a.com/x", "stylesheet"),
            ("Image", "", "https://a.com/x", "image"),
            ("", "image/webp", "https://a.com/x", "image"),
            ("Font", "", "https://a.com/x", "font"),
            ("", "font/woff2", "https://a.com/x", "font"),
            ("Other", "application/octet-stream", "https://a.com/f.woff2", "font"),
            ("Other", "", "https://a.com/f.TTF?v=2", "font"),
            ("XHR", "application/json", "https://a.com/api", "xhr"),
            ("Fetch", "application/json", "https://a.com/api", "xhr"),
            ("Document", "text/html", "https://a.com/", "other"),
            ("Media", "video/mp4", "https://a.com/v.mp4", "other"),
        ],
    )
    def test_classification(self, cdp_type: str, mime: str, url: str, expected: str) -> None:
        assert classify_resource_type(cdp_type, mime, url) == expected

    def test_script_wins_over_later_rules(self) -> None:
        assert classify_resource_type("XHR", "text/javascript", "https://a.com/x.woff") == "script"


class TestNormalizeProtocol:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("h3", "HTTP/3"),
            ("h3-29", "HTTP/3"),
            ("http/2+quic/46", "HTTP/3"),
            ("h2", "HTTP/2"),
            ("H2", "HTTP/2"),
            ("http/2.0", "HTTP/2"),
            ("http/1.1", "HTTP/1.1"),
            ("http/1.0", "HTTP/1.1"),
            ("", "Other"),
            ("data", "Other"),
            ("blob", "Other"),
        ],
    )
    def test_normalization(self, raw: str, expected: str) -> None:
        assert normalize_protocol(raw) == expected
