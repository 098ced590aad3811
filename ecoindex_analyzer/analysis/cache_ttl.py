"""
Long-cache-TTL audit.

Reproduces the Lighthouse ``uses-long-cache-ttl`` heuristic over the
captured network entries: every static, successfully fetched asset
that is allowed to be cached gets a cache lifetime (0 when no header
declares one) and an estimated probability that a returning visitor
still has it in cache.  Assets declaring a zero or past lifetime are
skipped, as are assets that are very likely cached; the rest are
reported with the bytes a repeat visit would re-download.
"""

from __future__ import annotations

import bisect
import math
from collections.abc import Iterable, Mapping
from datetime import datetime
from email import utils as email_utils

from ecoindex_analyzer.models import network, requests
from ecoindex_analyzer.utils import url as url_mod

# Lifetime assumed for requests the audit does not report on.
DEFAULT_CACHE_LIFETIME_MS = 31_536_000_000

CACHEABLE_STATUS_CODES = frozenset({200, 203, 206})
STATIC_RESOURCE_TYPES = frozenset({"font", "image", "media", "script", "stylesheet"})

# Resources more likely than this to be served from cache are not reported.
IGNORE_THRESHOLD = 0.925

# Distribution of cache lifetimes (hours) observed on the web, by decile.
_RESOURCE_AGE_IN_HOURS_DECILES: tuple[float, ...] = (
    0, 0.2, 1, 3, 8, 12, 24, 48, 72, 168, 8760, math.inf,
)

_UNCACHEABLE_DIRECTIVES = ("must-revalidate", "no-cache", "no-store", "stale-while-revalidate", "private")


def parse_cache_control(header: str) -> dict[str, str | None]:
    """Parse a ``Cache-Control`` header into ``{directive: value}``.

    Directive names are lowercased; valueless directives map to ``None``.
    """
    directives: dict[str, str | None] = {}
    for part in header.split(","):
        name, sep, value = part.strip().partition("=")
        name = name.strip().lower()
        if not name:
            continue
        directives[name] = value.strip().strip('"') if sep else None
    return directives


def get_cache_hit_probability(lifetime_s: float) -> float:
    """Probability that a resource cached for *lifetime_s* is still cached.

    Linear interpolation between the deciles of the lifetime
    distribution, clipped to ``[0, 1]``.
    """
    hours = lifetime_s / 3600
    deciles = _RESOURCE_AGE_IN_HOURS_DECILES
    upper = bisect.bisect_left(deciles, hours)
    if upper >= len(deciles) - 1:
        return 1.0
    if upper == 0:
        return 0.0

    lower_value, upper_value = deciles[upper - 1], deciles[upper]
    lower_p, upper_p = (upper - 1) / 10, upper / 10
    return lower_p + (hours - lower_value) * (upper_p - lower_p) / (upper_value - lower_value)


def _is_cacheable(entry: network.NetworkEntry) -> bool:
    return (
        entry.status_code in CACHEABLE_STATUS_CODES
        and entry.cdp_type.lower() in STATIC_RESOURCE_TYPES
        and url_mod.is_measurable_url(entry.url)
    )


def _caching_forbidden(headers: Mapping[str, str], cache_control: Mapping[str, str | None]) -> bool:
    if not cache_control and "no-cache" in headers.get("pragma", "").lower():
        return True
    return any(directive in cache_control for directive in _UNCACHEABLE_DIRECTIVES)


def compute_cache_lifetime_s(
    headers: Mapping[str, str],
    cache_control: Mapping[str, str | None],
    now: datetime,
) -> float | None:
    """Return the cache lifetime in seconds declared by the response headers.

    ``max-age`` wins over ``Expires``.  An ``Expires`` date that cannot
    be parsed counts as 0.  Returns ``None`` when neither header
    declares a lifetime.

    Args:
        headers: Response headers with lowercased names.
        cache_control: Parsed ``Cache-Control`` directives.
        now: Reference time for ``Expires`` (timezone-aware).
    """
    max_age = cache_control.get("max-age")
    if max_age is not None:
        try:
            return float(int(max_age))
        except ValueError:
            pass

    expires = headers.get("expires")
    if expires:
        try:
            expires_at = email_utils.parsedate_to_datetime(expires)
        except (TypeError, ValueError):
            return 0.0
        if expires_at.tzinfo is None:
            return 0.0
        return float(math.ceil((expires_at - now).total_seconds()))
    return None


def audit_cache_ttl(entries: Iterable[network.NetworkEntry], now: datetime) -> list[requests.CacheItem]:
    """Run the cache-TTL audit over captured network entries.

    Args:
        entries: Captured network entries.
        now: Reference time for ``Expires`` headers.

    Returns:
        Reported items sorted by ascending lifetime, then descending
        size, then URL.
    """
    items: list[requests.CacheItem] = []
    seen: set[str] = set()

    for entry in entries:
        if entry.failed or not _is_cacheable(entry) or entry.url in seen:
            continue

        headers = entry.response_headers
        cache_control = parse_cache_control(headers.get("cache-control", ""))
        if _caching_forbidden(headers, cache_control):
            continue

        lifetime_s = compute_cache_lifetime_s(headers, cache_control, now)
        # An explicit zero or past lifetime is an opt-out, not a short TTL.
        if lifetime_s is not None and lifetime_s <= 0:
            continue
        lifetime_s = lifetime_s or 0.0
        probability = get_cache_hit_probability(lifetime_s)
        if probability > IGNORE_THRESHOLD:
            continue

        seen.add(entry.url)
        total_bytes = entry.encoded_data_length
        items.append(
            requests.CacheItem(
                url=entry.url,
                cache_lifetime_ms=int(lifetime_s * 1000),
                cache_hit_probability=probability,
                total_bytes=total_bytes,
                wasted_bytes=total_bytes * (1 - probability),
            )
        )

    items.sort(key=lambda item: (item.cache_lifetime_ms, -item.total_bytes, item.url))
    return items


def build_lifetime_lookup(items: Iterable[requests.CacheItem]) -> dict[str, int]:
    """Map each audited URL to its cache lifetime in ms."""
    return {item.url: item.cache_lifetime_ms for item in items}


def lookup_cache_lifetime(lookup: Mapping[str, int], url: str) -> int:
    """Return the audited lifetime of *url*, or one year when it was not reported."""
    return lookup.get(url, DEFAULT_CACHE_LIFETIME_MS)
