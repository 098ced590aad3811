"""Requests and bytes per hostname."""

from __future__ import annotations

from collections.abc import Sequence

from ecoindex_analyzer.models import analytics, requests

UNKNOWN_DOMAIN = "(unknown)"

DOMAIN_PALETTE: tuple[str, ...] = (
    "#3b82f6",
    "#10b981",
    "#f59e0b",
    "#ef4444",
    "#8b5cf6",
    "#ec4899",
    "#06b6d4",
    "#84cc16",
)


def compute_domain_stats(records: Sequence[requests.RequestRecord]) -> analytics.DomainAnalytics:
    """Group requests by hostname.

    Domains are ranked by request count, then bytes, then name; the
    rank picks the colour from :data:`DOMAIN_PALETTE` (cycled).
    """
    if not records:
        return analytics.DomainAnalytics()

    counts: dict[str, int] = {}
    sizes: dict[str, int] = {}
    for record in records:
        domain = record.domain or UNKNOWN_DOMAIN
        counts[domain] = counts.get(domain, 0) + 1
        sizes[domain] = sizes.get(domain, 0) + record.effective_size

    total_requests = len(records)
    ranked = sorted(counts, key=lambda d: (-counts[d], -sizes[d], d))
    domains = tuple(
        analytics.DomainStat(
            domain=domain,
            request_count=counts[domain],
            total_transfer_size=sizes[domain],
            percentage=counts[domain] / total_requests * 100,
            color=DOMAIN_PALETTE[rank % len(DOMAIN_PALETTE)],
        )
        for rank, domain in enumerate(ranked)
    )
    return analytics.DomainAnalytics(
        domains=domains,
        total_requests=total_requests,
        total_size=sum(sizes.values()),
    )
