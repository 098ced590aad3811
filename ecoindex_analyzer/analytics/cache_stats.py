"""Cache-lifetime distribution and the resources cached for under a week."""

from __future__ import annotations

from collections.abc import Sequence

from ecoindex_analyzer.models import analytics, requests
from ecoindex_analyzer.utils import url as url_mod

MS_HOUR = 3_600_000
MS_DAY = 86_400_000
MS_WEEK = 604_800_000

# (bucket, label, colour) in display order.
_BUCKETS: tuple[tuple[analytics.CacheBucket, str, str], ...] = (
    ("none", "None", "#ef4444"),
    ("<1h", "< 1 hour", "#f59e0b"),
    ("<1day", "< 1 day", "#eab308"),
    ("<1week", "< 7 days", "#84cc16"),
    (">=1week", ">= 7 days", "#10b981"),
)


def classify_lifetime(ms: int) -> analytics.CacheBucket:
    """Return the bucket a cache lifetime falls into."""
    if ms <= 0:
        return "none"
    if ms < MS_HOUR:
        return "<1h"
    if ms < MS_DAY:
        return "<1day"
    if ms < MS_WEEK:
        return "<1week"
    return ">=1week"


def format_ttl(ms: int) -> str:
    """Human TTL label, truncated to the largest whole unit (``45s``, ``2min``, ``3h``, ``2d``)."""
    if ms <= 0:
        return "None"
    seconds = ms // 1000
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}min"
    if seconds < 86400:
        return f"{seconds // 3600}h"
    return f"{seconds // 86400}d"


def badge_for(ms: int) -> tuple[analytics.CacheBadge, str]:
    """Return ``(severity, text)`` for a problematic lifetime."""
    if ms <= 0:
        return "critical", "!"
    if ms < MS_HOUR:
        return "warning", "<1h"
    if ms < MS_DAY:
        return "warning", "<1d"
    return "notice", "<7d"


def _problematic(record: requests.RequestRecord) -> analytics.ProblematicResource:
    ms = record.cache_lifetime_ms
    badge, badge_text = badge_for(ms)
    return analytics.ProblematicResource(
        url=record.url,
        domain=record.domain,
        filename=url_mod.extract_filename(record.url) or record.url,
        resource_type=record.resource_type,
        cache_lifetime_ms=ms,
        cache_ttl_label=format_ttl(ms),
        badge=badge,
        badge_text=badge_text,
        resource_size=record.resource_size,
    )


def compute_cache_stats(records: Sequence[requests.RequestRecord]) -> analytics.CacheAnalytics:
    """Bucket requests by cache lifetime and list the short-lived ones.

    Only non-empty buckets are emitted, in fixed order.  Problematic
    resources (lifetime under a week) are sorted by ascending lifetime,
    keeping request order among equal lifetimes.
    """
    if not records:
        return analytics.CacheAnalytics()

    total = len(records)
    counts = dict.fromkeys((bucket for bucket, _, _ in _BUCKETS), 0)
    for record in records:
        counts[classify_lifetime(record.cache_lifetime_ms)] += 1

    groups = tuple(
        analytics.CacheGroup(
            bucket=bucket,
            label=label,
            count=counts[bucket],
            percentage=counts[bucket] / total * 100,
            color=color,
        )
        for bucket, label, color in _BUCKETS
        if counts[bucket] > 0
    )

    short_lived = sorted(
        (record for record in records if record.cache_lifetime_ms < MS_WEEK),
        key=lambda record: record.cache_lifetime_ms,
    )
    problematic = tuple(_problematic(record) for record in short_lived)
    return analytics.CacheAnalytics(
        groups=groups,
        problematic_resources=problematic,
        total_resources=total,
        problematic_count=len(problematic),
    )
