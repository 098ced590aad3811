"""Tests for ecoindex_analyzer.utils.url — URL helpers."""

from __future__ import annotations

import pytest

from ecoindex_analyzer.utils import errors
from ecoindex_analyzer.utils.url import extract_domain, extract_filename, is_measurable_url, validate_target_url


class TestExtractDomain:
    def test_simple(self) -> None:
        assert extract_domain("https://www.example.com/path") == "www.example.com"

    def test_port_dropped(self) -> None:
        assert extract_domain("http://localhost:8080/x") == "localhost"

    def test_no_host(self) -> None:
        assert extract_domain("not a url") == ""


class TestExtractFilename:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://example.com/js/app.js", "app.js"),
            ("https://example.com/js/app.js?v=3#x", "app.js"),
            ("https://example.com/", ""),
            ("https://example.com", ""),
            ("https://example.com/dir/", ""),
            ("https://example.com/my%20file.css", "my file.css"),
        ],
    )
    def test_last_segment(self, url: str, expected: str) -> None:
        assert extract_filename(url) == expected


class TestIsMeasurableUrl:
    def test_http(self) -> None:
        assert is_measurable_url("https://example.com/a.js") is True

    def test_data_and_blob_excluded(self) -> None:
        assert is_measurable_url("data:image/png;base64,AAAA") is False
        assert is_measurable_url("blob:https://example.com/123") is False
        assert is_measurable_url("DATA:text/plain,x") is False


class TestValidateTargetUrl:
    def test_accepts_http_and_https(self) -> None:
        assert validate_target_url(" https://example.com ") == "https://example.com"
        assert validate_target_url("http://example.com/a") == "http://example.com/a"

    @pytest.mark.parametrize("url", ["ftp://example.com", "example.com", "", "https://", "javascript:alert(1)"])
    def test_rejects_others(self, url: str) -> None:
        with pytest.raises(errors.InvalidUrlError):
            validate_target_url(url)
