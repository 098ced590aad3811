"""Request analytics package.

Four independent views over the same list of request records:
domains, protocols, cache lifetimes and duplicate downloads.  The
public API is :func:`compute_request_analytics`.
"""

from __future__ import annotations

from collections.abc import Sequence

from ecoindex_analyzer.analytics.cache_stats import compute_cache_stats
from ecoindex_analyzer.analytics.domain_stats import compute_domain_stats
from ecoindex_analyzer.analytics.duplicate_stats import compute_duplicate_stats
from ecoindex_analyzer.analytics.protocol_stats import compute_protocol_stats
from ecoindex_analyzer.models import analytics, requests


def compute_request_analytics(records: Sequence[requests.RequestRecord]) -> analytics.RequestAnalytics:
    """Compute all four analytics views over *records*."""
    return analytics.RequestAnalytics(
        domain_stats=compute_domain_stats(records),
        protocol_stats=compute_protocol_stats(records),
        cache_stats=compute_cache_stats(records),
        duplicate_stats=compute_duplicate_stats(records),
    )


__all__ = [
    "compute_cache_stats",
    "compute_domain_stats",
    "compute_duplicate_stats",
    "compute_protocol_stats",
    "compute_request_analytics",
]
