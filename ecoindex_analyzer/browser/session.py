"""
Browser session management for measurement runs.

Each BrowserSession owns exactly one Playwright instance, browser,
context, page and DevTools session.  Concurrent runs each create
their own session and share no state.
"""

from __future__ import annotations

import asyncio
from typing import Any

from playwright import async_api

from ecoindex_analyzer import config
from ecoindex_analyzer.browser import network, scripts
from ecoindex_analyzer.models import network as network_models
from ecoindex_analyzer.utils import errors, logger

log = logger.create_logger("BrowserSession")

# ============================================================================
# Constants
# ============================================================================

VIEWPORT = {"width": 1920, "height": 1080}

# Flags used by EcoIndex measurements.  Site isolation is disabled so
# out-of-process iframes report their traffic to the page's CDP session.
CHROME_ARGS = [
    "--no-sandbox",
    "--disable-gpu",
    "--disable-dev-shm-usage",
    "--disable-extensions",
    "--disable-background-networking",
    "--disable-default-apps",
    "--disable-sync",
    "--disable-translate",
    "--disable-features=IsolateOrigins,site-per-process",
    "--hide-scrollbars",
    "--mute-audio",
    "--no-first-run",
    "--no-default-browser-check",
    f"--window-size={VIEWPORT['width']},{VIEWPORT['height']}",
]

# Pixels per second of the synthesized scroll gesture.
SCROLL_SPEED = 1000


def _map_playwright_error(error: Exception, action: str, url: str) -> errors.EcoIndexError:
    """Translate a Playwright failure into the typed taxonomy."""
    if isinstance(error, (async_api.TimeoutError, TimeoutError)):
        return errors.NavigationTimeout(f"{action} timed out", f"{url}: {error}")
    return errors.NetworkError(f"{action} failed", f"{url}: {error}")


class BrowserSession:
    """
    Manages an isolated headless browser for a single measurement run.
    """

    def __init__(self, settings: config.AnalyzerSettings | None = None) -> None:
        """Initialise a session; nothing is started until :meth:`launch`."""
        self._settings = settings or config.get_settings()
        self._playwright: async_api.Playwright | None = None
        self._browser: async_api.Browser | None = None
        self._context: async_api.BrowserContext | None = None
        self._page: async_api.Page | None = None
        self._cdp: async_api.CDPSession | None = None
        self._recorder = network.NetworkRecorder()

    # ==========================================================================
    # State Getters
    # ==========================================================================

    @property
    def page(self) -> async_api.Page:
        """The active page; raises when the session is not launched."""
        if self._page is None:
            raise errors.BrowserLaunchError("No browser session active")
        return self._page

    @property
    def cdp(self) -> async_api.CDPSession:
        if self._cdp is None:
            raise errors.BrowserLaunchError("No DevTools session active")
        return self._cdp

    @property
    def final_url(self) -> str:
        return self._page.url if self._page is not None else ""

    def network_entries(self) -> list[network_models.NetworkEntry]:
        """Return every request captured so far."""
        return self._recorder.entries

    # ==========================================================================
    # Browser Lifecycle
    # ==========================================================================

    async def launch(self, chrome_path: str | None = None) -> None:
        """Start the browser, a 1920x1080 desktop context and a page.

        Args:
            chrome_path: Browser executable.  Falls back to the
                configured path, then to Playwright's bundled Chromium.

        Raises:
            BrowserLaunchError: When any part of the startup fails.
        """
        executable = chrome_path or self._settings.chrome_path or None
        log.info("Launching browser", {"executable": executable or "bundled chromium", "headless": self._settings.headless})
        try:
            self._playwright = await async_api.async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                executable_path=executable,
                headless=self._settings.headless,
                args=CHROME_ARGS,
            )
            self._context = await self._browser.new_context(
                viewport=VIEWPORT,
                device_scale_factor=1,
                is_mobile=False,
                has_touch=False,
                java_script_enabled=True,
            )
            self._page = await self._context.new_page()
            self._cdp = await self._context.new_cdp_session(self._page)
        except async_api.Error as error:
            await self.close()
            raise errors.BrowserLaunchError("Failed to launch browser", str(error)) from error
        except OSError as error:
            await self.close()
            raise errors.BrowserLaunchError("Failed to start browser driver", str(error)) from error
        log.debug("Browser launched", {"viewport": f"{VIEWPORT['width']}x{VIEWPORT['height']}"})

    async def close(self) -> None:
        """Close page, context, browser and driver.  Never raises."""
        if self._context is not None:
            try:
                await self._context.close()
            except Exception as error:
                log.debug("Context close failed", {"error": str(error)})
            self._context = None
        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception as error:
                log.debug("Browser close failed", {"error": str(error)})
            self._browser = None
        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except Exception as error:
                log.debug("Playwright stop failed", {"error": str(error)})
            self._playwright = None
        self._page = None
        self._cdp = None

    # ==========================================================================
    # Protocol steps
    # ==========================================================================

    async def disable_cache(self) -> None:
        """Enable network capture and bypass the HTTP cache for every request."""
        self._recorder.attach(self.cdp)
        try:
            await self.cdp.send("Network.enable")
            await self.cdp.send("Network.setCacheDisabled", {"cacheDisabled": True})
        except async_api.Error as error:
            raise errors.BrowserLaunchError("Failed to configure network capture", str(error)) from error

    async def apply_viewport(self) -> None:
        await self.page.set_viewport_size(VIEWPORT)

    async def navigate(self, url: str, timeout_ms: int) -> int | None:
        """Start navigating to *url*; return the main document status."""
        log.debug("Navigating", {"url": url, "timeout": timeout_ms})
        try:
            response = await self.page.goto(url, wait_until="commit", timeout=timeout_ms)
        except async_api.Error as error:
            raise _map_playwright_error(error, "Navigation", url) from error
        status = response.status if response else None
        if self.final_url and self.final_url != url:
            log.info("Redirected", {"from": url, "to": self.final_url})
        return status

    async def wait_for_first_paint(self, timeout_ms: int) -> None:
        try:
            await self.page.wait_for_function(scripts.HAS_FIRST_PAINT, timeout=timeout_ms, polling=100)
        except async_api.Error as error:
            raise _map_playwright_error(error, "First paint", self.final_url) from error

    async def wait_for_load(self, timeout_ms: int) -> None:
        try:
            await self.page.wait_for_load_state("load", timeout=timeout_ms)
        except async_api.Error as error:
            raise _map_playwright_error(error, "Page load", self.final_url) from error

    async def wait_for_timeout(self, ms: int) -> None:
        """Sleep for *ms* milliseconds."""
        await asyncio.sleep(ms / 1000)

    async def synthesize_scroll(self, distance: int) -> None:
        """Scroll the page down by *distance* pixels in one continuous gesture."""
        params = {"x": 100, "y": 600, "yDistance": -distance, "speed": SCROLL_SPEED}
        try:
            await self.cdp.send("Input.synthesizeScrollGesture", params)
        except async_api.Error as error:
            raise errors.MetricsCollectionError("Scroll gesture failed", str(error)) from error

    # ==========================================================================
    # Data Capture
    # ==========================================================================

    async def _evaluate(self, script: str, what: str) -> Any:
        try:
            return await self.page.evaluate(script)
        except async_api.Error as error:
            raise errors.MetricsCollectionError(f"Failed to collect {what}", str(error)) from error

    async def document_height(self) -> int:
        return int(await self._evaluate(scripts.DOCUMENT_HEIGHT, "document height") or 0)

    async def count_dom_elements(self) -> int:
        count = await self._evaluate(scripts.COUNT_DOM_ELEMENTS, "DOM element count")
        if not isinstance(count, (int, float)) or count < 0:
            raise errors.MetricsCollectionError("DOM element count is not a number", repr(count))
        return int(count)

    async def capture_navigation_timing(self) -> dict[str, float | None]:
        """Return ``ttfb``, ``domContentLoaded`` and ``loadEventEnd`` (ms)."""
        timing = await self._evaluate(scripts.NAVIGATION_TIMING, "navigation timing")
        return timing or {}

    async def collect_web_vitals(self) -> dict[str, float | None]:
        """Return FCP, LCP and CLS as reported by the page."""
        vitals = await self._evaluate(scripts.WEB_VITALS, "web vitals")
        return vitals or {}
