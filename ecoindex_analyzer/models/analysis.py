"""Pydantic model for the complete result of one measurement run."""

from __future__ import annotations

from typing import Any

import pydantic

from ecoindex_analyzer.models import analytics as analytics_models
from ecoindex_analyzer.models import ecoindex as ecoindex_models
from ecoindex_analyzer.models import metrics
from ecoindex_analyzer.models import requests as request_models
from ecoindex_analyzer.utils import serialization


class AnalysisResult(pydantic.BaseModel):
    """Everything a caller gets back from a successful run.

    Serializes (``to_payload``) to the camelCase JSON document the
    sidecar prints and the host runner parses back with
    ``model_validate_json``.
    """

    model_config = pydantic.ConfigDict(
        alias_generator=serialization.snake_to_camel, populate_by_name=True, frozen=True
    )

    url: str
    timestamp: str
    ecoindex: ecoindex_models.EcoIndexMetrics
    performance: metrics.PerformanceMetrics = metrics.PerformanceMetrics()
    requests: tuple[request_models.RequestRecord, ...] = ()
    cache_analysis: tuple[request_models.CacheItem, ...] = ()
    analytics: analytics_models.RequestAnalytics = analytics_models.RequestAnalytics()
    html_report_path: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready dict; ``htmlReportPath`` only when a report exists."""
        payload = self.model_dump(mode="json", by_alias=True)
        if payload.get("htmlReportPath") is None:
            payload.pop("htmlReportPath", None)
        return payload
