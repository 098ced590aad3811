"""Tests for ecoindex_analyzer.sidecar.protocol — the stdout message contract."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from ecoindex_analyzer.models import analysis, network
from ecoindex_analyzer.pipeline import analyze
from ecoindex_analyzer.sidecar import protocol
from ecoindex_analyzer.utils import errors


@pytest.fixture()
def result(sample_capture: network.PageCapture) -> analysis.AnalysisResult:
    return analyze.build_result(sample_capture, datetime(2026, 1, 1, tzinfo=UTC))


class TestEncode:
    def test_result_is_one_line(self, result: analysis.AnalysisResult) -> None:
        document = protocol.encode_result(result)
        assert "\n" not in document
        assert json.loads(document)["ecoindex"]["grade"] == result.ecoindex.grade

    def test_error_document(self) -> None:
        document = json.loads(protocol.encode_error(errors.InvalidUrlError("Bad URL", "ftp://x")))
        assert document == {"error": True, "code": "INVALID_URL", "message": "Bad URL", "details": "ftp://x"}


class TestExitCodes:
    def test_mapping(self) -> None:
        assert protocol.exit_code_for(errors.NetworkError("x")) == protocol.EXIT_FAILURE
        assert protocol.exit_code_for(errors.InvalidArgumentsError("x")) == protocol.EXIT_USAGE
        assert protocol.exit_code_for(errors.AnalysisInterrupted("x")) == protocol.EXIT_INTERRUPTED


class TestDecodeOutput:
    def test_valid_result(self, result: analysis.AnalysisResult) -> None:
        decoded = protocol.decode_output(protocol.encode_result(result) + "\n", 0)
        assert decoded.url == result.url
        assert decoded.ecoindex.score == result.ecoindex.score
        assert len(decoded.requests) == len(result.requests)

    def test_error_document_becomes_typed_error(self) -> None:
        stdout = protocol.encode_error(errors.NavigationTimeout("Page did not load", "https://slow.example"))
        with pytest.raises(errors.NavigationTimeout) as exc_info:
            protocol.decode_output(stdout, 1)
        assert exc_info.value.message == "Page did not load"
        assert exc_info.value.details == "https://slow.example"

    def test_unknown_error_code_is_kept(self) -> None:
        stdout = json.dumps({"error": True, "code": "SOMETHING_NEW", "message": "?"})
        with pytest.raises(errors.EcoIndexError) as exc_info:
            protocol.decode_output(stdout, 1)
        assert exc_info.value.code == "SOMETHING_NEW"

    def test_empty_output(self) -> None:
        with pytest.raises(errors.ProcessCommunicationError) as exc_info:
            protocol.decode_output("", 1, "Traceback: boom")
        assert "boom" in (exc_info.value.details or "")

    def test_garbage_with_success_status(self) -> None:
        with pytest.raises(errors.ParseError):
            protocol.decode_output("not json", 0)

    def test_garbage_with_failure_status(self) -> None:
        with pytest.raises(errors.ProcessCommunicationError):
            protocol.decode_output("not json", 1)

    def test_result_with_failure_status(self, result: analysis.AnalysisResult) -> None:
        with pytest.raises(errors.ProcessCommunicationError):
            protocol.decode_output(protocol.encode_result(result), 1)

    def test_schema_mismatch(self) -> None:
        with pytest.raises(errors.ParseError):
            protocol.decode_output(json.dumps({"url": "https://example.com"}), 0)
