"""Distribution of requests over HTTP protocol versions."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from ecoindex_analyzer.analysis import classification
from ecoindex_analyzer.models import analytics, requests

PROTOCOL_COLORS: dict[str, str] = {
    "HTTP/3": "#10b981",
    "HTTP/2": "#3b82f6",
    "HTTP/1.1": "#f59e0b",
    "Other": "#6b7280",
}


def compute_protocol_stats(records: Sequence[requests.RequestRecord]) -> analytics.ProtocolAnalytics:
    """Count requests per normalized protocol.

    Entries always come in the order HTTP/3, HTTP/2, HTTP/1.1, Other;
    protocols no request used are left out.
    """
    if not records:
        return analytics.ProtocolAnalytics()

    counts = Counter(classification.normalize_protocol(record.protocol) for record in records)
    total = len(records)
    protocols = tuple(
        analytics.ProtocolStat(
            protocol=label,
            count=counts[label],
            percentage=counts[label] / total * 100,
            color=PROTOCOL_COLORS[label],
        )
        for label in classification.PROTOCOL_ORDER
        if counts[label] > 0
    )
    return analytics.ProtocolAnalytics(protocols=protocols, total_requests=total)
