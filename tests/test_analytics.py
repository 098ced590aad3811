"""Tests for ecoindex_analyzer.analytics.compute_request_analytics."""

from __future__ import annotations

from ecoindex_analyzer import analytics
from ecoindex_analyzer.models import requests


class TestComputeRequestAnalytics:
    def test_empty_input_gives_empty_views(self) -> None:
        result = analytics.compute_request_analytics([])
        assert result.domain_stats.domains == ()
        assert result.protocol_stats.protocols == ()
        assert result.cache_stats.groups == ()
        assert result.duplicate_stats.duplicates == ()
        assert result.cache_stats.total_resources == 0

    def test_all_views_see_the_same_requests(self, sample_records: list[requests.RequestRecord]) -> None:
        result = analytics.compute_request_analytics(sample_records)
        assert result.domain_stats.total_requests == 5
        assert result.protocol_stats.total_requests == 5
        assert result.cache_stats.total_resources == 5

    def test_serializes_camel_case(self, sample_records: list[requests.RequestRecord]) -> None:
        payload = analytics.compute_request_analytics(sample_records).model_dump(mode="json", by_alias=True)
        assert set(payload) == {"domainStats", "protocolStats", "cacheStats", "duplicateStats"}
        assert "problematicResources" in payload["cacheStats"]
        assert "totalTransferSize" in payload["domainStats"]["domains"][0]
