"""
Result assembly.

Joins the outputs of the extractor, the score engine and the
analytics views into one immutable :class:`AnalysisResult`.
"""

from __future__ import annotations

from collections.abc import Sequence

from ecoindex_analyzer.models import analysis, analytics, ecoindex, metrics, requests
from ecoindex_analyzer.utils import serialization


def build_ecoindex_metrics(
    page: metrics.PageMetrics,
    score: ecoindex.ScoreResult,
    impact: ecoindex.ImpactResult,
    resource_breakdown: metrics.ResourceBreakdown,
) -> ecoindex.EcoIndexMetrics:
    """Build the ``ecoindex`` block with display rounding applied.

    Score, impact and size are rounded to 2 decimals; the grade is
    kept as computed from the unrounded score.
    """
    return ecoindex.EcoIndexMetrics(
        score=serialization.round_display(score.score),
        grade=score.grade,
        ghg=serialization.round_display(impact.ghg),
        water=serialization.round_display(impact.water),
        dom_elements=page.dom_elements,
        requests=page.requests,
        size_kb=serialization.round_display(page.size_kb),
        resource_breakdown=resource_breakdown,
    )


def assemble_result(
    *,
    url: str,
    timestamp: str,
    page: metrics.PageMetrics,
    score: ecoindex.ScoreResult,
    impact: ecoindex.ImpactResult,
    resource_breakdown: metrics.ResourceBreakdown,
    performance: metrics.PerformanceMetrics,
    records: Sequence[requests.RequestRecord],
    cache_items: Sequence[requests.CacheItem],
    request_analytics: analytics.RequestAnalytics,
    html_report_path: str | None = None,
) -> analysis.AnalysisResult:
    """Combine every part of a run into the final result."""
    return analysis.AnalysisResult(
        url=url,
        timestamp=timestamp,
        ecoindex=build_ecoindex_metrics(page, score, impact, resource_breakdown),
        performance=performance,
        requests=tuple(records),
        cache_analysis=tuple(cache_items),
        analytics=request_analytics,
        html_report_path=html_report_path,
    )


def with_report_path(result: analysis.AnalysisResult, path: str | None) -> analysis.AnalysisResult:
    """Return a copy of *result* pointing at its HTML report."""
    if path is None:
        return result
    return result.model_copy(update={"html_report_path": path})
