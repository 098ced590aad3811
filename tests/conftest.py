"""Shared fixtures and factories for the test suite."""

from __future__ import annotations

import pytest

from ecoindex_analyzer.models import metrics, network, requests

# ── Factories ───────────────────────────────────────────────────


def make_record(
    url: str = "https://example.com/app.js",
    *,
    domain: str | None = None,
    protocol: str = "h2",
    resource_type: str = "script",
    transfer_size: int = 1000,
    resource_size: int = 2000,
    cache_lifetime_ms: int = 31_536_000_000,
    status_code: int = 200,
) -> requests.RequestRecord:
    """Build a request record; the domain defaults to the URL host."""
    if domain is None:
        domain = url.split("/")[2] if "://" in url else ""
    return requests.RequestRecord(
        url=url,
        domain=domain,
        protocol=protocol,
        status_code=status_code,
        mime_type="application/javascript",
        resource_type=resource_type,
        transfer_size=transfer_size,
        resource_size=resource_size,
        priority="High",
        start_time=0.0,
        end_time=10.0,
        duration=10.0,
        from_cache=False,
        cache_lifetime_ms=cache_lifetime_ms,
    )


def make_entry(
    url: str = "https://example.com/app.js",
    *,
    request_id: str = "1",
    cdp_type: str = "Script",
    status_code: int = 200,
    mime_type: str = "application/javascript",
    headers: dict[str, str] | None = None,
    encoded: int = 1000,
    decoded: int = 2000,
    start: float = 100.0,
    end: float | None = 100.05,
    protocol: str = "h2",
) -> network.NetworkEntry:
    """Build a captured network entry (timestamps in seconds)."""
    return network.NetworkEntry(
        request_id=request_id,
        url=url,
        cdp_type=cdp_type,
        priority="High",
        protocol=protocol,
        status_code=status_code,
        mime_type=mime_type,
        response_headers=headers or {},
        encoded_data_length=encoded,
        decoded_data_length=decoded,
        start_time=start,
        end_time=end,
        finished=end is not None,
    )


# ── Fixtures ────────────────────────────────────────────────────


@pytest.fixture()
def sample_records() -> list[requests.RequestRecord]:
    """A small mixed page: two hosts, three protocols, varied caching."""
    return [
        make_record("https://example.com/", resource_type="other", protocol="h2", cache_lifetime_ms=0, transfer_size=5000),
        make_record("https://example.com/app.js", protocol="h2", cache_lifetime_ms=600_000),
        make_record("https://example.com/style.css", resource_type="stylesheet", protocol="h3", cache_lifetime_ms=7_200_000),
        make_record("https://cdn.example.net/lib.js", protocol="http/1.1", transfer_size=0, resource_size=3000),
        make_record("https://cdn.example.net/logo.png", resource_type="image", protocol="h3", cache_lifetime_ms=172_800_000),
    ]


@pytest.fixture()
def sample_capture() -> network.PageCapture:
    """A capture with a document, a script, an image and a data: URI."""
    return network.PageCapture(
        requested_url="https://example.com",
        final_url="https://example.com/",
        status_code=200,
        dom_elements=120,
        performance=metrics.PerformanceMetrics(ttfb=85.0, first_contentful_paint=300.0),
        entries=[
            make_entry(
                "https://example.com/",
                request_id="doc",
                cdp_type="Document",
                mime_type="text/html",
                encoded=10_000,
                decoded=40_000,
                start=100.0,
                end=100.2,
            ),
            make_entry(
                "https://example.com/app.js",
                request_id="js",
                headers={"cache-control": "max-age=600"},
                start=100.25,
                end=100.3,
            ),
            make_entry(
                "https://cdn.example.net/logo.png",
                request_id="img",
                cdp_type="Image",
                mime_type="image/png",
                headers={"cache-control": "public, max-age=31536000"},
                encoded=0,
                decoded=5_000,
                start=100.3,
                end=100.5,
                protocol="h3",
            ),
            make_entry("data:image/png;base64,AAAA", request_id="data", cdp_type="Image", encoded=0, decoded=10),
        ],
    )
