"""
The EcoIndex navigation protocol.

Drives a launched :class:`~ecoindex_analyzer.browser.session.BrowserSession`
through the fixed sequence every measurement uses, so results are
reproducible from one run to the next:

1. disable the HTTP cache and start network capture,
2. fix the viewport to 1920x1080,
3. navigate and wait for first paint and the load event,
4. settle 3 s, scroll the full document height, settle 3 s,
5. read navigation timing, the DOM element count and web vitals.

Each step is awaited before the next one starts and each is bounded
by a timeout.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from ecoindex_analyzer import config
from ecoindex_analyzer.browser import session as browser_session
from ecoindex_analyzer.models import metrics, network
from ecoindex_analyzer.utils import errors, logger

log = logger.create_logger("Navigation")

T = TypeVar("T")

# Fixed settle delay before and after the scroll gesture.
SETTLE_DELAY_MS = 3000


async def _bounded(awaitable: Awaitable[T], timeout_ms: int, what: str) -> T:
    """Await *awaitable*, raising ``NavigationTimeout`` after *timeout_ms*."""
    try:
        async with asyncio.timeout(timeout_ms / 1000):
            return await awaitable
    except TimeoutError as exc:
        raise errors.NavigationTimeout(f"{what} did not complete within {timeout_ms} ms") from exc


def _as_float(value: object) -> float | None:
    return float(value) if isinstance(value, (int, float)) else None


class NavigationController:
    """Runs the measurement protocol on one browser session."""

    def __init__(
        self,
        session: browser_session.BrowserSession,
        settings: config.AnalyzerSettings | None = None,
    ) -> None:
        self._session = session
        self._settings = settings or config.get_settings()

    async def run(self, url: str) -> network.PageCapture:
        """Execute the full protocol against *url*.

        Args:
            url: A validated http(s) URL.

        Returns:
            The captured page data.

        Raises:
            NavigationTimeout: A step exceeded its time bound.
            NetworkError: The page could not be reached.
            MetricsCollectionError: An in-page script failed.
        """
        s = self._settings
        session = self._session

        log.start_timer("protocol")
        await _bounded(session.disable_cache(), s.script_timeout_ms, "Cache disabling")
        await _bounded(session.apply_viewport(), s.script_timeout_ms, "Viewport setup")

        status_code = await self._load(url)
        await self._scroll_stabilize()

        timing = await _bounded(session.capture_navigation_timing(), s.script_timeout_ms, "Navigation timing capture")
        dom_elements = await _bounded(session.count_dom_elements(), s.script_timeout_ms, "DOM element count")
        vitals = await _bounded(session.collect_web_vitals(), s.script_timeout_ms, "Web vitals capture")
        log.end_timer("protocol", "Navigation protocol complete")

        performance = metrics.PerformanceMetrics(
            ttfb=_as_float(timing.get("ttfb")),
            first_contentful_paint=_as_float(vitals.get("firstContentfulPaint")),
            largest_contentful_paint=_as_float(vitals.get("largestContentfulPaint")),
            cumulative_layout_shift=_as_float(vitals.get("cumulativeLayoutShift")),
            dom_content_loaded=_as_float(timing.get("domContentLoaded")),
            load_event_end=_as_float(timing.get("loadEventEnd")),
        )
        entries = session.network_entries()
        log.info("Page captured", {"domElements": dom_elements, "requests": len(entries), "ttfb": performance.ttfb})
        return network.PageCapture(
            requested_url=url,
            final_url=session.final_url or url,
            status_code=status_code,
            dom_elements=dom_elements,
            performance=performance,
            entries=entries,
        )

    async def _load(self, url: str) -> int | None:
        """Navigate, then wait for first paint and the load event."""
        s = self._settings
        session = self._session
        log.start_timer("page-load")
        try:
            async with asyncio.timeout(s.render_timeout_ms / 1000):
                status_code = await session.navigate(url, s.render_timeout_ms)
                await session.wait_for_first_paint(s.first_paint_timeout_ms)
                await session.wait_for_load(s.render_timeout_ms)
        except TimeoutError as exc:
            raise errors.NavigationTimeout(
                f"Page did not finish loading within {s.render_timeout_ms} ms", url
            ) from exc
        log.end_timer("page-load", "Page loaded")
        if status_code is not None and status_code >= 400:
            log.warn("Page answered with an error status", {"statusCode": status_code})
        return status_code

    async def _scroll_stabilize(self) -> None:
        """Settle, scroll the whole document in one gesture, settle again."""
        s = self._settings
        session = self._session
        await session.wait_for_timeout(SETTLE_DELAY_MS)
        height = await _bounded(session.document_height(), s.script_timeout_ms, "Document height")
        log.debug("Scrolling page", {"height": height})
        await _bounded(session.synthesize_scroll(height), s.scroll_timeout_ms, "Scroll gesture")
        await session.wait_for_timeout(SETTLE_DELAY_MS)
