"""
Metrics extraction.

Turns the raw :class:`~ecoindex_analyzer.models.network.PageCapture`
produced by the navigation protocol into the three score inputs, the
per-request records, the resource breakdown and the cache audit.
Pure functions; the capture itself is never modified.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime

from ecoindex_analyzer.analysis import cache_ttl, classification
from ecoindex_analyzer.models import metrics, network, requests
from ecoindex_analyzer.utils import logger
from ecoindex_analyzer.utils import url as url_mod

log = logger.create_logger("Extractor")

BYTES_PER_KB = 1000

_BREAKDOWN_FIELDS: dict[classification.ResourceKind, str] = {
    "script": "scripts",
    "stylesheet": "stylesheets",
    "image": "images",
    "font": "fonts",
    "xhr": "xhr",
    "other": "other",
}


@dataclass(frozen=True)
class ExtractedMetrics:
    """Everything derived from one capture."""

    page: metrics.PageMetrics
    records: tuple[requests.RequestRecord, ...]
    resource_breakdown: metrics.ResourceBreakdown
    cache_items: tuple[requests.CacheItem, ...]


def measurable_entries(entries: Iterable[network.NetworkEntry]) -> list[network.NetworkEntry]:
    """Drop ``data:`` and ``blob:`` entries, keeping capture order."""
    return [entry for entry in entries if url_mod.is_measurable_url(entry.url)]


def build_request_records(
    entries: Sequence[network.NetworkEntry],
    lifetimes: Mapping[str, int],
) -> list[requests.RequestRecord]:
    """Build one immutable record per entry.

    Times are rebased to milliseconds after the earliest request.

    Args:
        entries: Measurable entries (see :func:`measurable_entries`).
        lifetimes: Cache lifetimes from the cache-TTL audit, by URL.
    """
    if not entries:
        return []
    origin = min(entry.start_time for entry in entries)

    records: list[requests.RequestRecord] = []
    for entry in entries:
        start_ms = (entry.start_time - origin) * 1000
        end_ms = ((entry.end_time if entry.end_time is not None else entry.start_time) - origin) * 1000
        end_ms = max(end_ms, start_ms)
        records.append(
            requests.RequestRecord(
                url=entry.url,
                domain=url_mod.extract_domain(entry.url),
                protocol=entry.protocol,
                status_code=entry.status_code,
                mime_type=entry.mime_type,
                resource_type=classification.classify_resource_type(entry.cdp_type, entry.mime_type, entry.url),
                transfer_size=max(0, entry.encoded_data_length),
                resource_size=max(0, entry.decoded_data_length),
                priority=entry.priority,
                start_time=start_ms,
                end_time=end_ms,
                duration=end_ms - start_ms,
                from_cache=entry.from_cache,
                cache_lifetime_ms=cache_ttl.lookup_cache_lifetime(lifetimes, entry.url),
            )
        )
    return records


def count_requests(records: Sequence[requests.RequestRecord]) -> int:
    """Number of network requests counted toward the score."""
    return len(records)


def compute_size_kb(records: Sequence[requests.RequestRecord]) -> float:
    """Total transferred weight in KB (1 KB = 1000 bytes).

    A request reporting no transfer size counts with its resource size.
    """
    total = sum(record.effective_size for record in records)
    return total / BYTES_PER_KB


def build_resource_breakdown(records: Sequence[requests.RequestRecord]) -> metrics.ResourceBreakdown:
    """Count requests per classified resource type."""
    counts = dict.fromkeys(_BREAKDOWN_FIELDS.values(), 0)
    for record in records:
        field = _BREAKDOWN_FIELDS.get(record.resource_type, "other")  # type: ignore[call-overload]
        counts[field] += 1
    return metrics.ResourceBreakdown(**counts)


def extract_metrics(capture: network.PageCapture, now: datetime) -> ExtractedMetrics:
    """Derive the score inputs and per-request data from *capture*.

    Args:
        capture: Output of the navigation protocol.
        now: Reference time for ``Expires`` headers in the cache audit.

    Returns:
        The extracted metrics bundle.
    """
    log.start_timer("extract")
    entries = measurable_entries(capture.entries)
    cache_items = cache_ttl.audit_cache_ttl(entries, now)
    lifetimes = cache_ttl.build_lifetime_lookup(cache_items)
    records = build_request_records(entries, lifetimes)

    page = metrics.PageMetrics(
        dom_elements=capture.dom_elements,
        requests=count_requests(records),
        size_kb=compute_size_kb(records),
    )
    breakdown = build_resource_breakdown(records)
    log.end_timer("extract", "Metrics extracted")
    log.info("Page metrics", {
        "domElements": page.dom_elements,
        "requests": page.requests,
        "sizeKb": round(page.size_kb, 2),
        "cacheIssues": len(cache_items),
    })
    return ExtractedMetrics(
        page=page,
        records=tuple(records),
        resource_breakdown=breakdown,
        cache_items=tuple(cache_items),
    )
