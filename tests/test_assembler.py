"""Tests for ecoindex_analyzer.pipeline.assembler and the result model."""

from __future__ import annotations

import pydantic
import pytest

from ecoindex_analyzer import analytics
from ecoindex_analyzer.models import analysis, ecoindex, metrics, requests
from ecoindex_analyzer.pipeline import assembler


def _result(records: list[requests.RequestRecord], **overrides: object) -> analysis.AnalysisResult:
    kwargs: dict[str, object] = {
        "url": "https://example.com/",
        "timestamp": "2026-01-01T00:00:00+00:00",
        "page": metrics.PageMetrics(dom_elements=120, requests=len(records), size_kb=12.3456),
        "score": ecoindex.ScoreResult(score=80.996, grade="B"),
        "impact": ecoindex.ImpactResult(ghg=2.380081, water=3.570121),
        "resource_breakdown": metrics.ResourceBreakdown(scripts=2, images=1, other=2),
        "performance": metrics.PerformanceMetrics(ttfb=85.0),
        "records": records,
        "cache_items": [
            requests.CacheItem(
                url="https://example.com/app.js",
                cache_lifetime_ms=600_000,
                cache_hit_probability=0.08,
                total_bytes=1000,
                wasted_bytes=920.0,
            )
        ],
        "request_analytics": analytics.compute_request_analytics(records),
    }
    kwargs.update(overrides)
    return assembler.assemble_result(**kwargs)  # type: ignore[arg-type]


class TestAssembleResult:
    def test_display_rounding(self, sample_records: list[requests.RequestRecord]) -> None:
        eco = _result(sample_records).ecoindex
        assert eco.score == 81.0
        assert eco.ghg == 2.38
        assert eco.water == 3.57
        assert eco.size_kb == 12.35

    def test_grade_from_unrounded_score(self, sample_records: list[requests.RequestRecord]) -> None:
        # 80.996 displays as 81.00 but stays a B.
        assert _result(sample_records).ecoindex.grade == "B"

    def test_payload_shape(self, sample_records: list[requests.RequestRecord]) -> None:
        payload = _result(sample_records).to_payload()
        assert set(payload) == {"url", "timestamp", "ecoindex", "performance", "requests", "cacheAnalysis", "analytics"}
        assert set(payload["ecoindex"]) == {
            "score", "grade", "ghg", "water", "domElements", "requests", "sizeKb", "resourceBreakdown",
        }
        assert payload["requests"][0]["cacheLifetimeMs"] == 0
        assert payload["cacheAnalysis"][0]["wastedBytes"] == 920.0
        assert "domainStats" in payload["analytics"]

    def test_report_path_only_when_present(self, sample_records: list[requests.RequestRecord]) -> None:
        result = _result(sample_records)
        assert "htmlReportPath" not in result.to_payload()
        with_path = assembler.with_report_path(result, "/tmp/report.html")
        assert with_path.to_payload()["htmlReportPath"] == "/tmp/report.html"
        assert assembler.with_report_path(result, None) is result

    def test_payload_round_trips(self, sample_records: list[requests.RequestRecord]) -> None:
        result = _result(sample_records)
        assert analysis.AnalysisResult.model_validate(result.to_payload()) == result

    def test_result_is_frozen(self, sample_records: list[requests.RequestRecord]) -> None:
        result = _result(sample_records)
        with pytest.raises(pydantic.ValidationError):
            result.url = "https://other.com"  # type: ignore[misc]


class TestModels:
    def test_page_metrics_reject_negative(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            metrics.PageMetrics(dom_elements=-1, requests=0, size_kb=0)

    def test_score_bounds(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ecoindex.ScoreResult(score=101, grade="A")

    def test_effective_size(self) -> None:
        record = requests.RequestRecord(url="https://a.com/x", domain="a.com", transfer_size=0, resource_size=50)
        assert record.effective_size == 50
        record = requests.RequestRecord(url="https://a.com/x", domain="a.com", transfer_size=10, resource_size=50)
        assert record.effective_size == 10
